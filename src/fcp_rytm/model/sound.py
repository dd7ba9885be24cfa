"""Sound model: one voice's machine, amp, filter, LFO, sample and mod setup.

A sound lives in one of three places: the 128-slot sound pool, one of the
12 sound slots of a kit, or the 12-slot sound work buffer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

from fcp_rytm.lib import enum_variants as ev
from fcp_rytm.model.fields import (
    BoolField,
    EnumField,
    FloatField,
    IntField,
    NameField,
    SlotField,
    SymbolField,
    fixed_length,
    table,
)

SOUND_VERSION = 4
MOD_SLOTS = 4


def _mod_amounts() -> list[int]:
    return [0] * MOD_SLOTS


def _mod_targets() -> list[str]:
    return ["unset"] * MOD_SLOTS


ModAmounts = Annotated[list[int], fixed_length(MOD_SLOTS)]
ModTargets = Annotated[list[str], fixed_length(MOD_SLOTS)]


@dataclass
class Sound:
    index: int = 0
    is_pool: bool = False
    is_kit: bool = False
    is_work_buffer: bool = False
    kit_number: int = 0
    version: int = SOUND_VERSION
    name: str = ""
    machine_type: str = "bd_hard"
    accent_level: int = 32

    amp_attack: int = 0
    amp_hold: int = 0
    amp_decay: int = 64
    amp_overdrive: int = 0
    amp_delay_send: int = 0
    amp_reverb_send: int = 0
    amp_pan: int = 0
    amp_volume: int = 100

    filter_attack: int = 0
    filter_hold: int = 127
    filter_decay: int = 64
    filter_release: int = 64
    filter_cutoff: int = 127
    filter_resonance: int = 0
    filter_envelope_amount: int = 0
    filter_type: str = "lp2"

    lfo_speed: int = 48
    lfo_fade: int = 0
    lfo_start_phase: int = 0
    lfo_depth: float = 0.0
    lfo_destination: str = "unset"
    lfo_multiplier: str = "x1"
    lfo_waveform: str = "tri"
    lfo_mode: str = "free"

    sample_tune: int = 0
    sample_fine_tune: int = 0
    sample_number: int = 0
    sample_bit_reduction: int = 0
    sample_start: float = 0.0
    sample_end: float = 120.0
    sample_loop_flag: bool = False
    sample_volume: int = 100

    velocity_mod_amounts: ModAmounts = field(default_factory=_mod_amounts)
    velocity_mod_targets: ModTargets = field(default_factory=_mod_targets)
    aftertouch_mod_amounts: ModAmounts = field(default_factory=_mod_amounts)
    aftertouch_mod_targets: ModTargets = field(default_factory=_mod_targets)

    env_reset_filter: bool = False
    velocity_to_volume: bool = True
    legacy_fx_send: bool = False
    chromatic_mode: str = "synth"

    dump: bytes | None = None

    @property
    def sound_type(self) -> str:
        if self.is_work_buffer:
            return "workbuffer"
        if self.is_kit:
            return "kit"
        if self.is_pool:
            return "pool"
        return "unknown"


SOUND_FIELDS = table(
    IntField("version", "version", 0, 0xFFFF, read_only=True),
    IntField("index", "index", 0, 127, read_only=True),
    NameField("name", "name"),
    BoolField("ispool", "is_pool", read_only=True),
    BoolField("iskit", "is_kit", read_only=True),
    BoolField("iswb", "is_work_buffer", read_only=True),
    IntField("kitnumber", "kit_number", 0, 127, read_only=True),
    SymbolField("type", "sound_type"),
    IntField("accentlev", "accent_level", 0, 127),

    IntField("ampattack", "amp_attack", 0, 127),
    IntField("amphold", "amp_hold", 0, 127),
    IntField("ampdecay", "amp_decay", 0, 127),
    IntField("ampoverdrive", "amp_overdrive", 0, 127),
    IntField("ampdelsend", "amp_delay_send", 0, 127),
    IntField("amprevsend", "amp_reverb_send", 0, 127),
    IntField("amppan", "amp_pan", -64, 63),
    IntField("amplev", "amp_volume", 0, 127),

    IntField("filtattack", "filter_attack", 0, 127),
    IntField("filthold", "filter_hold", 0, 127),
    IntField("filtdecay", "filter_decay", 0, 127),
    IntField("filtrelease", "filter_release", 0, 127),
    IntField("filtcutoff", "filter_cutoff", 0, 127),
    IntField("filtres", "filter_resonance", 0, 127),
    IntField("filtenvamt", "filter_envelope_amount", -64, 63),

    IntField("lfospeed", "lfo_speed", -64, 63),
    IntField("lfofade", "lfo_fade", -64, 63),
    IntField("lfostartphase", "lfo_start_phase", 0, 127),
    FloatField("lfodepth", "lfo_depth", -128.0, 127.99),

    IntField("samptune", "sample_tune", -24, 24),
    IntField("sampfinetune", "sample_fine_tune", -64, 63),
    IntField("sampnumber", "sample_number", 0, 127),
    IntField("sampbitreduction", "sample_bit_reduction", 0, 127),
    FloatField("sampstart", "sample_start", 0.0, 120.0),
    FloatField("sampend", "sample_end", 0.0, 120.0),
    BoolField("samploopflag", "sample_loop_flag"),
    IntField("samplev", "sample_volume", 0, 127),

    SlotField(IntField("velmodamt", "velocity_mod_amounts", -128, 127), MOD_SLOTS),
    SlotField(IntField("atmodamt", "aftertouch_mod_amounts", -128, 127), MOD_SLOTS),

    BoolField("envresetfilter", "env_reset_filter"),
    BoolField("veltovol", "velocity_to_volume"),
    BoolField("legacyfxsend", "legacy_fx_send"),

    EnumField("machinetype", "machine_type", ev.MACHINE_TYPE),
    EnumField("lfodest", "lfo_destination", ev.LFO_DESTINATION),
    SlotField(EnumField("velmodtarget", "velocity_mod_targets", ev.MOD_TARGET), MOD_SLOTS),
    SlotField(EnumField("atmodtarget", "aftertouch_mod_targets", ev.MOD_TARGET), MOD_SLOTS),
    EnumField("filtertype", "filter_type", ev.FILTER_TYPE),
    EnumField("lfomultiplier", "lfo_multiplier", ev.LFO_MULTIPLIER),
    EnumField("lfowaveform", "lfo_waveform", ev.LFO_WAVEFORM),
    EnumField("lfomode", "lfo_mode", ev.LFO_MODE),
    EnumField("chromaticmode", "chromatic_mode", ev.CHROMATIC_MODE),
)
