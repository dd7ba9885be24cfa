"""Parsed tokens: the typed path a command resolves to.

A parse result is a list of these, always starting with one
:class:`ObjectType`. Each variant carries a ``type`` discriminant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from fcp_rytm.parser.selector import ObjectTypeSelector
from fcp_rytm.parser.value import Number


@dataclass(frozen=True)
class ObjectType:
    selector: ObjectTypeSelector
    type: str = field(default="object_type", init=False)


@dataclass(frozen=True)
class TrackIndex:
    index: int
    type: str = field(default="track_index", init=False)


@dataclass(frozen=True)
class TrigIndex:
    index: int
    type: str = field(default="trig_index", init=False)


@dataclass(frozen=True)
class SoundIndex:
    index: int
    type: str = field(default="sound_index", init=False)


@dataclass(frozen=True)
class ElementIndex:
    index: int
    type: str = field(default="element_index", init=False)


@dataclass(frozen=True)
class Element:
    name: str
    type: str = field(default="element", init=False)


@dataclass(frozen=True)
class Identifier:
    name: str
    type: str = field(default="identifier", init=False)


@dataclass(frozen=True)
class EnumValue:
    name: str
    value: str | None = None
    type: str = field(default="enum", init=False)


@dataclass(frozen=True)
class Parameter:
    number: Number
    type: str = field(default="parameter", init=False)


@dataclass(frozen=True)
class ParameterString:
    text: str
    type: str = field(default="parameter_string", init=False)


@dataclass(frozen=True)
class PlockOperation:
    op: str  # "get", "set" or "clear"
    type: str = field(default="plock_operation", init=False)

    @property
    def keyword(self) -> str:
        return f"plock{self.op}"

    def __str__(self) -> str:
        return self.keyword


ParsedToken = Union[
    ObjectType,
    TrackIndex,
    TrigIndex,
    SoundIndex,
    ElementIndex,
    Element,
    Identifier,
    EnumValue,
    Parameter,
    ParameterString,
    PlockOperation,
]
