"""Dispatch replies.

Each reply carries the path it answers so a caller can correlate it with
the request. ``atoms()`` is the flat value-list rendering sent back to a
host; ``format_reply`` turns it into one text line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from fcp_rytm.parser.value import Int, Symbol, Value, ValueList, render


@dataclass(frozen=True)
class CommonReply:
    index: int
    key: str
    value: Value
    type: str = field(default="common", init=False)

    def atoms(self) -> ValueList:
        return [Int(self.index), Symbol(self.key), self.value]


@dataclass(frozen=True)
class KitElementReply:
    kit_index: int
    element_index: int
    element_type: str
    value: Value
    type: str = field(default="kit_element", init=False)

    def atoms(self) -> ValueList:
        return [
            Int(self.kit_index),
            Int(self.element_index),
            Symbol(self.element_type),
            self.value,
        ]


@dataclass(frozen=True)
class TrackReply:
    pattern_index: int
    track_index: int
    key: str
    value: Value
    type: str = field(default="track", init=False)

    def atoms(self) -> ValueList:
        return [Int(self.pattern_index), Int(self.track_index), Symbol(self.key), self.value]


@dataclass(frozen=True)
class TrigReply:
    pattern_index: int
    track_index: int
    trig_index: int
    key: str
    value: Value
    type: str = field(default="trig", init=False)

    def atoms(self) -> ValueList:
        return [
            Int(self.pattern_index),
            Int(self.track_index),
            Int(self.trig_index),
            Symbol(self.key),
            self.value,
        ]


@dataclass(frozen=True)
class OkReply:
    type: str = field(default="ok", init=False)

    def atoms(self) -> ValueList:
        return []


Reply = Union[CommonReply, KitElementReply, TrackReply, TrigReply, OkReply]

OK = OkReply()


def format_reply(reply: Reply) -> str:
    """One-line text rendering: ``ok`` or the atoms separated by spaces."""
    atoms = reply.atoms()
    if not atoms:
        return "ok"
    return render(atoms)
