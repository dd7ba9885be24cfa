"""Project tree: every pattern, kit, sound, global and settings object.

The work buffer holds the device's live (unsaved) copy of each family.
Top-level objects are addressed by :class:`ObjectTypeSelector`; undo, the
SysEx codec and the project file all go through :meth:`Project.get` and
:meth:`Project.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Union

from fcp_rytm.model.fields import fixed_length
from fcp_rytm.model.globals import Global
from fcp_rytm.model.kit import Kit
from fcp_rytm.model.pattern import Pattern
from fcp_rytm.model.settings import Settings
from fcp_rytm.model.sound import Sound
from fcp_rytm.parser.selector import (
    GLOBAL_MAX_COUNT,
    KIT_MAX_COUNT,
    KIT_SOUND_COUNT,
    PATTERN_MAX_COUNT,
    POOL_SOUND_MAX_COUNT,
    ObjectTypeSelector,
)

RytmObject = Union[Pattern, Kit, Sound, Global, Settings]

PatternSlots = Annotated[list[Pattern], fixed_length(PATTERN_MAX_COUNT)]
KitSlots = Annotated[list[Kit], fixed_length(KIT_MAX_COUNT)]
PoolSounds = Annotated[list[Sound], fixed_length(POOL_SOUND_MAX_COUNT)]
GlobalSlots = Annotated[list[Global], fixed_length(GLOBAL_MAX_COUNT)]


@dataclass
class WorkBuffer:
    pattern: Pattern = field(default_factory=lambda: Pattern.create(is_work_buffer=True))
    kit: Kit = field(default_factory=lambda: Kit.create(is_work_buffer=True))
    sounds: Annotated[list[Sound], fixed_length(KIT_SOUND_COUNT)] = field(default_factory=lambda: [
        Sound(index=i, is_work_buffer=True) for i in range(KIT_SOUND_COUNT)
    ])
    global_: Global = field(default_factory=lambda: Global(is_work_buffer=True))


@dataclass
class Project:
    title: str = "Untitled"
    patterns: PatternSlots = field(default_factory=list)
    kits: KitSlots = field(default_factory=list)
    sounds: PoolSounds = field(default_factory=list)
    globals: GlobalSlots = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)
    work_buffer: WorkBuffer = field(default_factory=WorkBuffer)

    @classmethod
    def create(cls, title: str = "Untitled") -> Project:
        """Create a project with every slot holding factory defaults."""
        return cls(
            title=title,
            patterns=[Pattern.create(i) for i in range(PATTERN_MAX_COUNT)],
            kits=[Kit.create(i) for i in range(KIT_MAX_COUNT)],
            sounds=[Sound(index=i, is_pool=True) for i in range(POOL_SOUND_MAX_COUNT)],
            globals=[Global(index=i) for i in range(GLOBAL_MAX_COUNT)],
        )

    # -- selector addressing --

    def get(self, selector: ObjectTypeSelector) -> RytmObject:
        kind, index = selector.kind, selector.index
        if kind == "pattern":
            return self.patterns[index]
        if kind == "pattern_wb":
            return self.work_buffer.pattern
        if kind == "kit":
            return self.kits[index]
        if kind == "kit_wb":
            return self.work_buffer.kit
        if kind == "sound":
            return self.sounds[index]
        if kind == "sound_wb":
            return self.work_buffer.sounds[index]
        if kind == "global":
            return self.globals[index]
        if kind == "global_wb":
            return self.work_buffer.global_
        return self.settings

    def replace(self, selector: ObjectTypeSelector, obj: RytmObject) -> None:
        kind, index = selector.kind, selector.index
        if kind == "pattern":
            self.patterns[index] = obj
        elif kind == "pattern_wb":
            self.work_buffer.pattern = obj
        elif kind == "kit":
            self.kits[index] = obj
        elif kind == "kit_wb":
            self.work_buffer.kit = obj
        elif kind == "sound":
            self.sounds[index] = obj
        elif kind == "sound_wb":
            self.work_buffer.sounds[index] = obj
        elif kind == "global":
            self.globals[index] = obj
        elif kind == "global_wb":
            self.work_buffer.global_ = obj
        else:
            self.settings = obj

    # -- summaries --

    def get_digest(self) -> str:
        wb = self.work_buffer
        named_kits = sum(1 for k in self.kits if k.name)
        dumps = sum(
            1
            for obj in (*self.patterns, *self.kits, *self.sounds, *self.globals, self.settings)
            if obj.dump is not None
        )
        return (
            f"[{self.title}] bpm:{self.settings.bpm:g} "
            f"wb-pattern:{wb.pattern.master_length}st/{wb.pattern.active_trig_count()}trigs "
            f"wb-kit:{wb.kit.name or '-'} named-kits:{named_kits} dumps:{dumps}"
        )
