"""Project settings: tempo, UI selection, sound mutes and the sample recorder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

from fcp_rytm.lib import enum_variants as ev
from fcp_rytm.model.fields import (
    BoolField,
    EnumField,
    FloatField,
    IntField,
    SlotFlagField,
    fixed_length,
    table,
)

SETTINGS_VERSION = 3
MUTABLE_SOUNDS = 12


@dataclass
class Settings:
    version: int = SETTINGS_VERSION
    bpm: float = 120.0
    selected_track: int = 0
    selected_page: int = 0
    sound_mutes: Annotated[list[bool], fixed_length(MUTABLE_SOUNDS)] = field(
        default_factory=lambda: [False] * MUTABLE_SOUNDS
    )
    fixed_velocity_enabled: bool = False
    fixed_velocity_amount: int = 100
    sample_recorder_threshold: int = 0
    sample_recorder_monitor: bool = False
    parameter_menu_item: str = "trig"
    fx_parameter_menu_item: str = "trig"
    sequencer_mode: str = "normal"
    pattern_mode: str = "sequential"
    sample_recorder_source: str = "audl+r"
    sample_recorder_recording_length: str = "max"
    dump: bytes | None = None


SETTINGS_FIELDS = table(
    IntField("version", "version", 0, 0xFFFF, read_only=True),
    FloatField("projectbpm", "bpm", 30.0, 300.0),
    IntField("selectedtrack", "selected_track", 0, 11),
    IntField("selectedpage", "selected_page", 0, 3),
    SlotFlagField("mute", "sound_mutes", MUTABLE_SOUNDS, True, "sound index"),
    SlotFlagField("unmute", "sound_mutes", MUTABLE_SOUNDS, False, "sound index", write_only=True),
    BoolField("fixedvelocity", "fixed_velocity_enabled"),
    IntField("fixedvelocityamt", "fixed_velocity_amount", 0, 127),
    IntField("samplerecorderthr", "sample_recorder_threshold", 0, 127),
    BoolField("samplerecordermon", "sample_recorder_monitor"),

    EnumField("parametermenuitem", "parameter_menu_item", ev.PARAMETER_MENU_ITEM),
    EnumField("fxparametermenuitem", "fx_parameter_menu_item", ev.FX_PARAMETER_MENU_ITEM),
    EnumField("sequencermode", "sequencer_mode", ev.SEQUENCER_MODE),
    EnumField("patternmode", "pattern_mode", ev.PATTERN_MODE),
    EnumField("samplerecordersrc", "sample_recorder_source", ev.SAMPLE_RECORDER_SOURCE),
    EnumField(
        "samplerecorderrecordinglen",
        "sample_recorder_recording_length",
        ev.SAMPLE_RECORDER_RECORDING_LENGTH,
    ),
)
