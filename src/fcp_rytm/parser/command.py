"""Command grammar: value list + get/set -> list of parsed tokens.

Single left-to-right pass with one value of lookahead::

    command  := object-type [index] path* (identifier params? | enum [slot])
    path     := track-index [trig-index [plock-op]]      (pattern family)
              | element-name element-index                (kit family)
              | "sound" sound-index                       (kit family)
    enum     := name ":" variant?

Every value must be consumed; anything left over is an error.
"""

from __future__ import annotations

import logging

from fcp_core import suggest

from fcp_rytm.errors import (
    EnumRequiresValue,
    ExpectedKitElementIndex,
    IndexOutOfRange,
    InvalidCommandType,
    InvalidFormat,
    InvalidPlockOperation,
    InvalidToken,
    UnexpectedEnd,
)
from fcp_rytm.lib.vocabulary import (
    GLOBAL_NAMES,
    KIT_ELEMENT_NAMES,
    KIT_ELEMENTS,
    KIT_NAMES,
    PATTERN_NAMES,
    PLOCK_CLEAR,
    PLOCK_NAMES,
    PLOCK_OPERATIONS,
    SETTINGS_NAMES,
    SOUND_NAMES,
    TRACK_NAMES,
    TRIG_NAMES,
    NameContext,
)
from fcp_rytm.model.kit import KIT_SOUND_ELEMENT
from fcp_rytm.parser.selector import (
    KIT_SOUND_COUNT,
    TRACK_MAX_COUNT,
    TRIG_MAX_COUNT,
    resolve_values,
)
from fcp_rytm.parser.tokens import (
    Element,
    ElementIndex,
    EnumValue,
    Identifier,
    ObjectType,
    Parameter,
    ParameterString,
    ParsedToken,
    PlockOperation,
    SoundIndex,
    TrackIndex,
    TrigIndex,
)
from fcp_rytm.parser.value import Float, Int, Symbol, Value, ValueList

logger = logging.getLogger(__name__)

GET = "get"
SET = "set"
COMMAND_TYPES = (GET, SET)

NAME_MAX_LEN = 15


def parse_command_type(text: str) -> str:
    command_type = text.lower()
    if command_type not in COMMAND_TYPES:
        raise InvalidCommandType(text)
    return command_type


class _Cursor:
    """Peekable position over a value list."""

    def __init__(self, values: ValueList) -> None:
        self.values = values
        self.pos = 0

    def peek(self) -> Value | None:
        if self.pos < len(self.values):
            return self.values[self.pos]
        return None

    def next(self) -> Value | None:
        value = self.peek()
        if value is not None:
            self.pos += 1
        return value

    def skip(self, count: int) -> None:
        self.pos += count

    def at_end(self) -> bool:
        return self.pos >= len(self.values)


def parse_command(values: ValueList, command_type: str) -> list[ParsedToken]:
    """Parse *values* for a ``get`` or ``set`` command.

    Raises a :class:`~fcp_rytm.errors.ParseError` subclass on any malformed
    input. No partial results are ever returned.
    """
    command_type = parse_command_type(command_type)
    selector, consumed = resolve_values(values)
    cur = _Cursor(values)
    cur.skip(consumed)
    result: list[ParsedToken] = [ObjectType(selector)]

    family = selector.family
    if family == "pattern":
        _parse_pattern(command_type, cur, result)
    elif family == "kit":
        _parse_kit(command_type, cur, result)
    elif family == "sound":
        _parse_named(command_type, cur, result, SOUND_NAMES)
    elif family == "global":
        _parse_identifier_or_enum(command_type, cur, result, GLOBAL_NAMES)
    else:
        _parse_settings(command_type, cur, result)

    leftover = cur.peek()
    if leftover is not None:
        raise InvalidToken(
            f"Unexpected value '{leftover}'. The command was already complete."
        )
    logger.debug("parsed %s %s -> %s", command_type, values, result)
    return result


# ---------------------------------------------------------------------------
# Family grammars
# ---------------------------------------------------------------------------

def _parse_pattern(command_type: str, cur: _Cursor, out: list[ParsedToken]) -> None:
    names = PATTERN_NAMES
    has_trig = False

    nxt = cur.peek()
    if isinstance(nxt, Int):
        _check_index(nxt.value, 0, TRACK_MAX_COUNT - 1, "Track index")
        cur.next()
        out.append(TrackIndex(nxt.value))
        names = TRACK_NAMES

        nxt = cur.peek()
        if isinstance(nxt, Int):
            _check_index(nxt.value, 0, TRIG_MAX_COUNT - 1, "Trig index")
            cur.next()
            out.append(TrigIndex(nxt.value))
            names = TRIG_NAMES
            has_trig = True

    nxt = cur.peek()
    if isinstance(nxt, Symbol) and nxt.value in PLOCK_OPERATIONS:
        if not has_trig:
            raise InvalidPlockOperation(
                nxt.value, "Parameter lock operations must follow a trig index."
            )
        cur.next()
        op = PlockOperation(nxt.value[len("plock"):])
        out.append(op)
        if cur.at_end():
            raise InvalidPlockOperation(
                nxt.value, "This operation needs to be followed by an identifier or an enum."
            )
        _parse_identifier_or_enum(
            command_type, cur, out, PLOCK_NAMES,
            allow_bare_enum=nxt.value == PLOCK_CLEAR,
        )
        return

    _parse_identifier_or_enum(command_type, cur, out, names)


def _parse_kit(command_type: str, cur: _Cursor, out: list[ParsedToken]) -> None:
    nxt = cur.peek()
    if not (isinstance(nxt, Symbol) and nxt.value in KIT_ELEMENTS):
        _parse_named(command_type, cur, out, KIT_NAMES)
        return

    element = nxt.value
    cur.next()
    out.append(Element(element))

    index = cur.next()
    if not isinstance(index, Int):
        raise ExpectedKitElementIndex(
            f"Expected element index after '{element}': "
            "Kit elements must be followed by an integer index."
        )

    if element == KIT_SOUND_ELEMENT:
        _check_index(index.value, 0, KIT_SOUND_COUNT - 1, "Kit sound index")
        out.append(SoundIndex(index.value))
        if not cur.at_end():
            _parse_named(command_type, cur, out, SOUND_NAMES)
        return

    out.append(ElementIndex(index.value))
    nxt = cur.peek()
    if nxt is None:
        return
    if isinstance(nxt, (Int, Float)):
        _parse_parameters(cur, out)
        return
    _parse_identifier_or_enum(command_type, cur, out, KIT_ELEMENT_NAMES)


def _parse_settings(command_type: str, cur: _Cursor, out: list[ParsedToken]) -> None:
    nxt = cur.peek()
    if isinstance(nxt, Int):
        logger.warning(
            "settings does not take an index; ignoring %s. "
            "Use 'settings <identifier>' instead.", nxt
        )
        cur.next()
    _parse_identifier_or_enum(command_type, cur, out, SETTINGS_NAMES)


def _parse_named(
    command_type: str,
    cur: _Cursor,
    out: list[ParsedToken],
    names: NameContext,
) -> None:
    """Identifier-or-enum, with ``name <symbol>`` special-cased under set."""
    nxt = cur.peek()
    if not isinstance(nxt, Symbol):
        raise UnexpectedEnd()
    if nxt.value == "name" and command_type == SET and "name" in names.identifiers:
        cur.next()
        out.append(Identifier("name"))
        text = cur.next()
        if not isinstance(text, Symbol):
            raise InvalidFormat(
                f"Invalid parameter 'name': name must be a symbol with maximum "
                f"{NAME_MAX_LEN} characters long and use only ascii characters."
            )
        out.append(ParameterString(text.value))
        return
    _parse_identifier_or_enum(command_type, cur, out, names)


# ---------------------------------------------------------------------------
# Identifier / enum
# ---------------------------------------------------------------------------

def _parse_identifier_or_enum(
    command_type: str,
    cur: _Cursor,
    out: list[ParsedToken],
    names: NameContext,
    *,
    allow_bare_enum: bool = False,
) -> None:
    value = cur.next()
    if not isinstance(value, Symbol):
        raise UnexpectedEnd()
    text = value.value

    if text in names.identifiers:
        out.append(Identifier(text))
        _parse_parameters(cur, out)
        return

    name, sep, variant = text.partition(":")
    if name not in names.enums:
        hint = suggest(name, names.all_names())
        message = f"Unexpected symbol '{text}'. Expected an identifier or enum."
        if hint:
            message += f" Did you mean '{hint}'?"
        raise InvalidToken(message)

    if not sep:
        raise InvalidFormat(
            f"Invalid enum format: '{text}'. Enums may only have the format of "
            "<enum-type>: or <enum-type>:<variant>"
        )

    if variant:
        out.append(EnumValue(name, variant))
    elif command_type == SET and not allow_bare_enum:
        raise EnumRequiresValue(name)
    else:
        out.append(EnumValue(name, None))

    # Indexed enums carry their slot as one trailing integer.
    slot = cur.peek()
    if isinstance(slot, Int):
        cur.next()
        out.append(Parameter(slot))


def _parse_parameters(cur: _Cursor, out: list[ParsedToken]) -> None:
    for _ in range(2):
        nxt = cur.peek()
        if not isinstance(nxt, (Int, Float)):
            return
        cur.next()
        out.append(Parameter(nxt))


def _check_index(index: int, low: int, high: int, label: str) -> None:
    if not low <= index <= high:
        raise IndexOutOfRange(
            f"{index} is out of range for {label.lower()}. "
            f"{label} must be an integer between {low} and {high}."
        )
