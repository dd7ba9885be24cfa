"""Tagged value model: the unit of every command token and reply field.

A value is one of three immutable variants, distinguished by ``type``:

- :class:`Int`: signed integer
- :class:`Float`: double precision float
- :class:`Symbol`: short, case-sensitive text

``Int`` and ``Float`` are also the *numbers* used for command parameters.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from fcp_core import tokenize_with_meta

from fcp_rytm.errors import TypeMismatch

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+\.?\d*[eE][+-]?\d+)$")


class _ValueBase:
    """Accessors shared by every variant."""

    type: str

    def as_number(self) -> Int | Float:
        raise TypeMismatch("a number", self)

    def as_symbol(self) -> str:
        raise TypeMismatch("a symbol", self)

    def as_bool_0_or_1(self, identifier: str) -> bool:
        raise TypeMismatch(
            "0 or 1",
            self,
            f"Invalid parameter: {self}. {identifier} must be followed by a 0 or 1 (integer)",
        )


@dataclass(frozen=True)
class Int(_ValueBase):
    value: int
    type: str = field(default="int", init=False)

    def as_number(self) -> Int:
        return self

    def as_bool_0_or_1(self, identifier: str) -> bool:
        if self.value in (0, 1):
            return self.value == 1
        return super().as_bool_0_or_1(identifier)

    def get_int(self) -> int:
        return self.value

    def get_float(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Float(_ValueBase):
    value: float
    type: str = field(default="float", init=False)

    def as_number(self) -> Float:
        return self

    def get_int(self) -> int:
        """Truncate toward zero."""
        return int(self.value)

    def get_float(self) -> float:
        return self.value

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class Symbol(_ValueBase):
    value: str
    type: str = field(default="symbol", init=False)

    def as_symbol(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


Value = Int | Float | Symbol
Number = Int | Float
ValueList = list[Value]


# ---------------------------------------------------------------------------
# Host conversions
# ---------------------------------------------------------------------------

def from_native(obj: object) -> Value:
    """Wrap a plain Python ``int``, ``float`` or ``str`` (bools become Int)."""
    if isinstance(obj, (Int, Float, Symbol)):
        return obj
    if isinstance(obj, bool):
        return Int(int(obj))
    if isinstance(obj, int):
        return Int(obj)
    if isinstance(obj, float):
        return Float(obj)
    if isinstance(obj, str):
        return Symbol(obj)
    raise TypeMismatch("an int, float or str", obj)


def to_native(value: Value) -> int | float | str:
    return value.value


def from_token(text: str) -> Value:
    """Classify one op-string token.

    ``"12"`` -> Int, ``"-1.5"`` -> Float, anything else -> Symbol.
    """
    if _INT_RE.match(text):
        return Int(int(text))
    if _FLOAT_RE.match(text):
        return Float(float(text))
    return Symbol(text)


def values_from_text(text: str) -> ValueList:
    """Tokenize a raw command string into a value list.

    Quoted tokens are always symbols, so `name "808"` sets a numeric-looking
    name instead of passing an integer.
    """
    return [
        Symbol(tok.text) if tok.was_quoted else from_token(tok.text)
        for tok in tokenize_with_meta(text)
    ]


def render(values: ValueList) -> str:
    """Render a value list the way a user would have typed it."""
    parts: list[str] = []
    for v in values:
        text = str(v)
        if isinstance(v, Symbol) and (not text or any(c.isspace() for c in text)):
            text = '"' + text.replace('"', '\\"') + '"'
        parts.append(text)
    return " ".join(parts)
