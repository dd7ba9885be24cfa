"""Object-type selectors: which project object a command targets.

Selector kinds
--------------
- ``pattern N`` / ``pattern_wb``
- ``kit N`` / ``kit_wb``
- ``sound N`` / ``sound_wb N``
- ``global N`` / ``global_wb``
- ``settings``

Index-bearing kinds carry an index that was range-checked on construction;
:func:`resolve` is the only public way to build one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fcp_rytm.errors import (
    InvalidIndexRange,
    InvalidSelector,
    QuerySelectorIndexMissingOrInvalid,
    QuerySelectorMissing,
)
from fcp_rytm.parser.value import Int, Value

logger = logging.getLogger(__name__)

PATTERN_MAX_COUNT = 128
KIT_MAX_COUNT = 128
POOL_SOUND_MAX_COUNT = 128
GLOBAL_MAX_COUNT = 4
TRACK_MAX_COUNT = 13
TRIG_MAX_COUNT = 64
KIT_SOUND_COUNT = 12

# kind -> (family, inclusive index range or None)
SELECTOR_RANGES: dict[str, tuple[str, tuple[int, int] | None]] = {
    "pattern": ("pattern", (0, PATTERN_MAX_COUNT - 1)),
    "pattern_wb": ("pattern", None),
    "kit": ("kit", (0, KIT_MAX_COUNT - 1)),
    "kit_wb": ("kit", None),
    "sound": ("sound", (0, POOL_SOUND_MAX_COUNT - 1)),
    "sound_wb": ("sound", (0, KIT_SOUND_COUNT - 1)),
    "global": ("global", (0, GLOBAL_MAX_COUNT - 1)),
    "global_wb": ("global", None),
    "settings": ("settings", None),
}

_DISPLAY: dict[str, str] = {
    "pattern": "pattern {index}",
    "pattern_wb": "pattern work buffer",
    "kit": "kit {index}",
    "kit_wb": "kit work buffer",
    "sound": "sound {index}",
    "sound_wb": "sound work buffer {index}",
    "global": "global {index}",
    "global_wb": "global work buffer",
    "settings": "settings",
}


@dataclass(frozen=True)
class ObjectTypeSelector:
    """A resolved, range-validated (object kind, optional index) pair."""

    kind: str
    index: int | None = None

    @property
    def family(self) -> str:
        return SELECTOR_RANGES[self.kind][0]

    @property
    def is_work_buffer(self) -> bool:
        return self.kind.endswith("_wb")

    @property
    def reply_index(self) -> int:
        """Index echoed back in replies (0 for unindexed work buffers)."""
        return self.index if self.index is not None else 0

    def __str__(self) -> str:
        return _DISPLAY[self.kind].format(index=self.index)


def takes_index(kind: str) -> bool:
    entry = SELECTOR_RANGES.get(kind)
    return entry is not None and entry[1] is not None


def resolve(symbol: str, index: int | None = None) -> ObjectTypeSelector:
    """Validate *symbol* and its optional *index* into a selector.

    Raises
    ------
    InvalidSelector
        Unknown object kind.
    QuerySelectorIndexMissingOrInvalid
        Index-bearing kind without an index.
    InvalidIndexRange
        Index outside the kind's advertised range.
    """
    entry = SELECTOR_RANGES.get(symbol)
    if entry is None:
        logger.error("Unknown selector %r", symbol)
        raise InvalidSelector()
    _, bounds = entry
    if bounds is None:
        return ObjectTypeSelector(symbol)
    if index is None:
        raise QuerySelectorIndexMissingOrInvalid()
    low, high = bounds
    if not low <= index <= high:
        raise InvalidIndexRange(low, high, index)
    return ObjectTypeSelector(symbol, index)


def resolve_values(values: list[Value]) -> tuple[ObjectTypeSelector, int]:
    """Resolve the leading selector tokens of a value list.

    Returns the selector and how many values it consumed.
    """
    if not values:
        raise QuerySelectorMissing()
    head = values[0]
    if head.type != "symbol":
        raise InvalidSelector()
    kind = head.value
    if kind not in SELECTOR_RANGES:
        logger.error("Unknown selector %r", kind)
        raise InvalidSelector()
    if not takes_index(kind):
        return resolve(kind), 1
    nxt = values[1] if len(values) > 1 else None
    if not isinstance(nxt, Int):
        raise QuerySelectorIndexMissingOrInvalid()
    return resolve(kind, nxt.value), 2
