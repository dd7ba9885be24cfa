"""Shared resolution helpers for the per-family dispatch handlers.

Turns the tail of a parsed token list (identifier or enum plus its
parameters) into a :class:`FieldRequest`, and runs a request against a
field table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from fcp_rytm.errors import (
    GetFormatError,
    GetRangeError,
    InvalidEnumType,
    InvalidIdentifierType,
    InvalidToken,
    SetFormatError,
    SetRangeError,
)
from fcp_rytm.model.fields import FieldArgs, FieldTable
from fcp_rytm.parser.command import GET
from fcp_rytm.parser.tokens import (
    EnumValue,
    Identifier,
    Parameter,
    ParameterString,
    ParsedToken,
)
from fcp_rytm.parser.value import Value


@dataclass
class FieldRequest:
    """Field name, its kind (``identifier`` or ``enum``) and its arguments."""

    name: str
    kind: str
    args: FieldArgs = field(default_factory=FieldArgs)


def split_field(tokens: Sequence[ParsedToken]) -> FieldRequest | None:
    """Read ``Identifier|Enum [Parameter...] [ParameterString]`` from *tokens*.

    Returns None when *tokens* is empty.
    """
    if not tokens:
        return None
    head, *rest = tokens
    if isinstance(head, Identifier):
        request = FieldRequest(head.name, "identifier")
    elif isinstance(head, EnumValue):
        request = FieldRequest(head.name, "enum", FieldArgs(variant=head.value))
    else:
        raise InvalidToken(f"Expected an identifier or enum but got {head.type}.")

    for tok in rest:
        if isinstance(tok, Parameter):
            request.args.params.append(tok.number)
        elif isinstance(tok, ParameterString):
            request.args.text = tok.text
        else:
            raise InvalidToken(f"Unexpected {tok.type} after '{request.name}'.")
    return request


def lookup_field(fields: FieldTable, request: FieldRequest, label: str):
    f = fields.get(request.name)
    if f is None or f.kind != request.kind:
        if request.kind == "enum":
            raise InvalidEnumType(request.name)
        raise InvalidIdentifierType(request.name, f"is not a {label} identifier.")
    return f


def apply_field(
    command_type: str,
    fields: FieldTable,
    target: Any,
    request: FieldRequest,
    label: str,
) -> Value | None:
    """Read (get) or write (set) *request* on *target*.

    Returns the read value for get, None for set.
    """
    f = lookup_field(fields, request, label)
    if command_type == GET:
        return f.read(target, request.args)
    f.write(target, request.args)
    return None


def format_error(command_type: str, detail: str):
    """Get or Set format error matching *command_type*."""
    if command_type == GET:
        return GetFormatError(detail)
    return SetFormatError(detail)


def range_error(command_type: str, detail: str):
    if command_type == GET:
        return GetRangeError(detail)
    return SetRangeError(detail)
