"""Closed name sets the grammar recognises, per object family and path depth.

Built once at import from the model field tables, so a field that has an
accessor is always parseable and nothing parseable lacks an accessor.
"""

from __future__ import annotations

from dataclasses import dataclass

from fcp_rytm.model.fields import FieldTable, names_of_kind
from fcp_rytm.model.globals import GLOBAL_FIELDS
from fcp_rytm.model.kit import KIT_ELEMENT_FIELDS, KIT_FIELDS, KIT_SOUND_ELEMENT
from fcp_rytm.model.pattern import PATTERN_FIELDS, TRACK_FIELDS, TRIG_FIELDS
from fcp_rytm.model.plocks import PLOCK_FIELDS
from fcp_rytm.model.settings import SETTINGS_FIELDS
from fcp_rytm.model.sound import SOUND_FIELDS

PLOCK_GET = "plockget"
PLOCK_SET = "plockset"
PLOCK_CLEAR = "plockclear"
PLOCK_OPERATIONS = (PLOCK_GET, PLOCK_SET, PLOCK_CLEAR)


@dataclass(frozen=True)
class NameContext:
    """Identifier and enum names valid at one point of the grammar."""

    label: str
    identifiers: frozenset[str]
    enums: frozenset[str]

    @classmethod
    def from_fields(cls, label: str, fields: FieldTable) -> NameContext:
        return cls(
            label,
            names_of_kind(fields, "identifier"),
            names_of_kind(fields, "enum"),
        )

    def all_names(self) -> list[str]:
        return sorted(self.identifiers | self.enums)


PATTERN_NAMES = NameContext.from_fields("pattern", PATTERN_FIELDS)
TRACK_NAMES = NameContext.from_fields("track", TRACK_FIELDS)
TRIG_NAMES = NameContext.from_fields("trig", TRIG_FIELDS)
PLOCK_NAMES = NameContext.from_fields("parameter lock", PLOCK_FIELDS)
KIT_NAMES = NameContext.from_fields("kit", KIT_FIELDS)
KIT_ELEMENT_NAMES = NameContext.from_fields("kit element", KIT_ELEMENT_FIELDS)
SOUND_NAMES = NameContext.from_fields("sound", SOUND_FIELDS)
GLOBAL_NAMES = NameContext.from_fields("global", GLOBAL_FIELDS)
SETTINGS_NAMES = NameContext.from_fields("settings", SETTINGS_FIELDS)

KIT_ELEMENTS = frozenset(KIT_ELEMENT_FIELDS) | {KIT_SOUND_ELEMENT}

ALL_CONTEXTS = (
    PATTERN_NAMES,
    TRACK_NAMES,
    TRIG_NAMES,
    PLOCK_NAMES,
    KIT_NAMES,
    KIT_ELEMENT_NAMES,
    SOUND_NAMES,
    GLOBAL_NAMES,
    SETTINGS_NAMES,
)
