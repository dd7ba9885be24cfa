"""Pattern model: a pattern holds 13 tracks, each holding 64 trigs.

Each level exposes its commands through a field table (``PATTERN_FIELDS``,
``TRACK_FIELDS``, ``TRIG_FIELDS``). Parameter locks live on the trig as a
plain ``name -> native value`` map.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Any

from fcp_rytm.lib import enum_variants as ev
from fcp_rytm.model.fields import (
    BoolField,
    EnumField,
    FloatField,
    IntField,
    fixed_length,
    table,
)

PATTERN_VERSION = 5
TRACKS_PER_PATTERN = 13
TRIGS_PER_TRACK = 64


@dataclass
class Trig:
    index: int = 0
    enable: bool = False
    retrig: bool = False
    mute: bool = False
    accent: bool = False
    swing: bool = False
    slide: bool = False
    note: int = 60
    velocity: int = 100
    retrig_velocity_offset: int = 0
    sound_lock: int = 0
    micro_time: str = "0"
    note_length: str = "1/16"
    retrig_length: str = "1/16"
    retrig_rate: str = "1/16"
    trig_condition: str = "none"
    plocks: dict[str, Any] = field(default_factory=dict)


Trigs = Annotated[list[Trig], fixed_length(TRIGS_PER_TRACK)]


@dataclass
class Track:
    index: int = 0
    parent_index: int = 0
    is_work_buffer: bool = False
    default_trig_note: int = 60
    default_trig_velocity: int = 100
    default_trig_probability: int = 100
    number_of_steps: int = 16
    quantize_amount: int = 0
    sends_midi: bool = False
    euclidean_mode: bool = False
    euclidean_pl1: int = 0
    euclidean_pl2: int = 0
    euclidean_ro1: int = 0
    euclidean_ro2: int = 0
    euclidean_tro: int = 0
    root_note: str = "c"
    pad_scale: str = "chromatic"
    default_note_length: str = "1/16"
    trigs: Trigs = field(default_factory=list)


Tracks = Annotated[list[Track], fixed_length(TRACKS_PER_PATTERN)]


@dataclass
class Pattern:
    index: int = 0
    is_work_buffer: bool = False
    version: int = PATTERN_VERSION
    master_length: int = 16
    master_change: int = 1
    kit_number: int = 0
    swing_amount: int = 50
    global_quantize: int = 0
    bpm: float = 120.0
    speed: str = "1x"
    time_mode: str = "normal"
    tracks: Tracks = field(default_factory=list)
    dump: bytes | None = None

    @classmethod
    def create(cls, index: int = 0, *, is_work_buffer: bool = False) -> Pattern:
        pattern = cls(index=index, is_work_buffer=is_work_buffer)
        for t in range(TRACKS_PER_PATTERN):
            track = Track(index=t, parent_index=index, is_work_buffer=is_work_buffer)
            track.trigs = [Trig(index=i) for i in range(TRIGS_PER_TRACK)]
            pattern.tracks.append(track)
        return pattern

    def active_trig_count(self) -> int:
        return sum(1 for tr in self.tracks for tg in tr.trigs if tg.enable)


# ---------------------------------------------------------------------------
# Field tables
# ---------------------------------------------------------------------------

PATTERN_FIELDS = table(
    BoolField("iswb", "is_work_buffer", read_only=True),
    IntField("index", "index", 0, 127, read_only=True),
    IntField("version", "version", 0, 0xFFFF, read_only=True),
    IntField("masterlen", "master_length", 1, 1024),
    IntField("masterchg", "master_change", 1, 1024),
    IntField("kitnumber", "kit_number", 0, 127),
    IntField("swingamount", "swing_amount", 50, 80),
    IntField("globalquantize", "global_quantize", 0, 127),
    FloatField("patternbpm", "bpm", 30.0, 300.0),
    EnumField("speed", "speed", ev.SPEED),
    EnumField("timemode", "time_mode", ev.TIME_MODE),
)

TRACK_FIELDS = table(
    BoolField("iswb", "is_work_buffer", read_only=True),
    IntField("parentindex", "parent_index", 0, 127, read_only=True),
    IntField("index", "index", 0, TRACKS_PER_PATTERN - 1, read_only=True),
    IntField("deftrignote", "default_trig_note", 0, 127),
    IntField("deftrigvel", "default_trig_velocity", 0, 127),
    IntField("deftrigprob", "default_trig_probability", 0, 100),
    IntField("steps", "number_of_steps", 1, TRIGS_PER_TRACK),
    IntField("quantizeamount", "quantize_amount", 0, 127),
    BoolField("sendsmidi", "sends_midi"),
    BoolField("euc", "euclidean_mode"),
    IntField("pl1", "euclidean_pl1", 0, TRIGS_PER_TRACK),
    IntField("pl2", "euclidean_pl2", 0, TRIGS_PER_TRACK),
    IntField("ro1", "euclidean_ro1", 0, TRIGS_PER_TRACK - 1),
    IntField("ro2", "euclidean_ro2", 0, TRIGS_PER_TRACK - 1),
    IntField("tro", "euclidean_tro", 0, TRIGS_PER_TRACK - 1),
    EnumField("rootnote", "root_note", ev.ROOT_NOTE),
    EnumField("padscale", "pad_scale", ev.PAD_SCALE),
    EnumField("defaultnotelen", "default_note_length", ev.NOTE_LENGTH),
)

TRIG_FIELDS = table(
    BoolField("enable", "enable"),
    BoolField("retrig", "retrig"),
    BoolField("mute", "mute"),
    BoolField("accent", "accent"),
    BoolField("swing", "swing"),
    BoolField("slide", "slide"),
    IntField("note", "note", 0, 127),
    IntField("vel", "velocity", 0, 127),
    IntField("retrigveloffset", "retrig_velocity_offset", -128, 127),
    IntField("soundlock", "sound_lock", 0, 127),
    EnumField("microtime", "micro_time", ev.MICRO_TIME),
    EnumField("notelen", "note_length", ev.NOTE_LENGTH),
    EnumField("retriglen", "retrig_length", ev.NOTE_LENGTH),
    EnumField("retrigrate", "retrig_rate", ev.RETRIG_RATE),
    EnumField("trigcondition", "trig_condition", ev.TRIG_CONDITION),
)
