"""Kit model: FX sections, control-in modulation, per-track rows and 12 sounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

from fcp_rytm.lib import enum_variants as ev
from fcp_rytm.model.fields import (
    BoolField,
    EnumField,
    FloatField,
    IntField,
    MappedEnumField,
    NameField,
    SlotField,
    fixed_length,
    table,
)
from fcp_rytm.model.sound import Sound

KIT_VERSION = 6
KIT_SOUNDS = 12
KIT_TRACKS = 12
CTRL_IN_SLOTS = 4

CtrlInAmounts = Annotated[list[int], fixed_length(CTRL_IN_SLOTS)]
CtrlInTargets = Annotated[list[str], fixed_length(CTRL_IN_SLOTS)]


@dataclass
class KitTrack:
    """Per-track kit row addressed by the ``track*`` element keywords."""

    index: int = 0
    level: int = 100
    retrig_rate: str = "1/16"
    retrig_length: str = "1/16"
    retrig_velocity_offset: int = 0
    retrig_always_on: bool = False


@dataclass
class Kit:
    index: int = 0
    is_work_buffer: bool = False
    version: int = KIT_VERSION
    name: str = ""

    ctrl_in_1_mod_amounts: CtrlInAmounts = field(default_factory=lambda: [0] * CTRL_IN_SLOTS)
    ctrl_in_1_mod_targets: CtrlInTargets = field(default_factory=lambda: ["unset"] * CTRL_IN_SLOTS)
    ctrl_in_2_mod_amounts: CtrlInAmounts = field(default_factory=lambda: [0] * CTRL_IN_SLOTS)
    ctrl_in_2_mod_targets: CtrlInTargets = field(default_factory=lambda: ["unset"] * CTRL_IN_SLOTS)

    fx_delay_time: int = 23
    fx_delay_ping_pong: bool = False
    fx_delay_stereo_width: int = 0
    fx_delay_feedback: int = 49
    fx_delay_hpf: int = 32
    fx_delay_lpf: int = 96
    fx_delay_reverb_send: int = 0
    fx_delay_volume: int = 110

    fx_reverb_pre_delay: int = 8
    fx_reverb_decay: int = 72
    fx_reverb_freq: int = 64
    fx_reverb_gain: int = 32
    fx_reverb_hpf: int = 32
    fx_reverb_lpf: int = 96
    fx_reverb_volume: int = 110

    fx_comp_threshold: int = 96
    fx_comp_attack: str = "0.1"
    fx_comp_release: str = "0.4"
    fx_comp_ratio: str = "1:4"
    fx_comp_side_chain_eq: str = "off"
    fx_comp_gain: int = 0
    fx_comp_mix: int = 127
    fx_comp_volume: int = 127

    fx_lfo_speed: int = 48
    fx_lfo_fade: int = 0
    fx_lfo_start_phase: int = 0
    fx_lfo_depth: float = 0.0
    fx_lfo_destination: str = "unset"

    fx_dist_delay_overdrive: int = 0
    fx_dist_delay_post: bool = False
    fx_dist_reverb_post: bool = False
    fx_dist_amount: int = 0
    fx_dist_symmetry: int = 0

    tracks: Annotated[list[KitTrack], fixed_length(KIT_TRACKS)] = field(default_factory=list)
    sounds: Annotated[list[Sound], fixed_length(KIT_SOUNDS)] = field(default_factory=list)
    dump: bytes | None = None

    @classmethod
    def create(cls, index: int = 0, *, is_work_buffer: bool = False) -> Kit:
        kit = cls(index=index, is_work_buffer=is_work_buffer)
        kit.tracks = [KitTrack(index=i) for i in range(KIT_TRACKS)]
        kit.sounds = [
            Sound(index=i, is_kit=True, kit_number=index) for i in range(KIT_SOUNDS)
        ]
        return kit


KIT_FIELDS = table(
    IntField("version", "version", 0, 0xFFFF, read_only=True),
    IntField("index", "index", 0, 127, read_only=True),
    NameField("name", "name"),

    SlotField(IntField("ctrlinmod1amt", "ctrl_in_1_mod_amounts", -128, 127), CTRL_IN_SLOTS),
    SlotField(IntField("ctrlinmod2amt", "ctrl_in_2_mod_amounts", -128, 127), CTRL_IN_SLOTS),

    IntField("fxdeltime", "fx_delay_time", 0, 127),
    BoolField("fxdelpingpong", "fx_delay_ping_pong"),
    IntField("fxdelstereowidth", "fx_delay_stereo_width", -64, 63),
    IntField("fxdelfeedback", "fx_delay_feedback", 0, 198),
    IntField("fxdelhpf", "fx_delay_hpf", 0, 127),
    IntField("fxdellpf", "fx_delay_lpf", 0, 127),
    IntField("fxdelrevsend", "fx_delay_reverb_send", 0, 127),
    IntField("fxdellev", "fx_delay_volume", 0, 127),

    IntField("fxrevpredel", "fx_reverb_pre_delay", 0, 127),
    IntField("fxrevdecay", "fx_reverb_decay", 0, 127),
    IntField("fxrevfreq", "fx_reverb_freq", 0, 127),
    IntField("fxrevgain", "fx_reverb_gain", 0, 127),
    IntField("fxrevhpf", "fx_reverb_hpf", 0, 127),
    IntField("fxrevlpf", "fx_reverb_lpf", 0, 127),
    IntField("fxrevlev", "fx_reverb_volume", 0, 127),

    IntField("fxcompthr", "fx_comp_threshold", 0, 127),
    IntField("fxcompgain", "fx_comp_gain", 0, 127),
    IntField("fxcompmix", "fx_comp_mix", 0, 127),
    IntField("fxcomplev", "fx_comp_volume", 0, 127),

    IntField("fxlfospeed", "fx_lfo_speed", -64, 63),
    IntField("fxlfofade", "fx_lfo_fade", -64, 63),
    IntField("fxlfostartphase", "fx_lfo_start_phase", 0, 127),
    FloatField("fxlfodepth", "fx_lfo_depth", -128.0, 127.99),

    IntField("fxdistdov", "fx_dist_delay_overdrive", 0, 127),
    BoolField("fxdistdelpost", "fx_dist_delay_post"),
    BoolField("fxdistrevpost", "fx_dist_reverb_post"),
    IntField("fxdistamt", "fx_dist_amount", 0, 127),
    IntField("fxdistsym", "fx_dist_symmetry", -64, 63),

    SlotField(EnumField("ctrlinmod1target", "ctrl_in_1_mod_targets", ev.MOD_TARGET), CTRL_IN_SLOTS),
    SlotField(EnumField("ctrlinmod2target", "ctrl_in_2_mod_targets", ev.MOD_TARGET), CTRL_IN_SLOTS),
    EnumField("fxlfodest", "fx_lfo_destination", ev.FX_LFO_DESTINATION),
    MappedEnumField("fxdeltimeonthegrid", "fx_delay_time", ev.FX_DELAY_TIME_ON_THE_GRID),
    EnumField("fxcompattack", "fx_comp_attack", ev.FX_COMP_ATTACK),
    EnumField("fxcomprelease", "fx_comp_release", ev.FX_COMP_RELEASE),
    EnumField("fxcompratio", "fx_comp_ratio", ev.FX_COMP_RATIO),
    EnumField("fxcompsidechaineq", "fx_comp_side_chain_eq", ev.FX_COMP_SIDE_CHAIN_EQ),
)

# Element keywords take a track index before their value.
KIT_ELEMENT_FIELDS = table(
    IntField("tracklevel", "level", 0, 127),
    EnumField("trackretrigrate", "retrig_rate", ev.RETRIG_RATE),
    EnumField("trackretriglen", "retrig_length", ev.NOTE_LENGTH),
    IntField("trackretrigveloffset", "retrig_velocity_offset", -128, 127),
    BoolField("trackretrigalwayson", "retrig_always_on"),
)

KIT_SOUND_ELEMENT = "sound"
