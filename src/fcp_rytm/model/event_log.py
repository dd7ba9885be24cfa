"""Undoable events.

Every successful mutation of the project (a ``set`` command or an applied
SysEx dump) is recorded as a snapshot of the touched top-level object taken
before and after the change. Events form a tagged union via a ``type``
string discriminant, and are stored in fcp-core's ``EventLog``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

from fcp_rytm.parser.selector import ObjectTypeSelector


@dataclass
class SnapshotEvent:
    type: str = field(default="snapshot", init=False)
    selector: ObjectTypeSelector | None = None
    before: Any = None
    after: Any = None
    summary: str = ""


@dataclass
class DumpApplied(SnapshotEvent):
    type: str = field(default="dump_applied", init=False)


def snapshot(obj: Any) -> Any:
    return copy.deepcopy(obj)
