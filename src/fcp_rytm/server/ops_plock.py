"""Parameter-lock handlers: ``plockget``, ``plockset`` and ``plockclear``."""

from __future__ import annotations

import logging
from typing import Sequence

from fcp_rytm.errors import InvalidFormat
from fcp_rytm.lib.vocabulary import PLOCK_CLEAR, PLOCK_GET, PLOCK_SET
from fcp_rytm.model.pattern import Trig
from fcp_rytm.model.plocks import PLOCK_FIELDS, UNSET
from fcp_rytm.parser.command import GET, SET
from fcp_rytm.parser.tokens import ParsedToken, PlockOperation
from fcp_rytm.parser.value import Symbol
from fcp_rytm.server.reply import OK, CommonReply, Reply
from fcp_rytm.server.resolvers import format_error, lookup_field, split_field

logger = logging.getLogger(__name__)


def check_compatible(command_type: str, op: PlockOperation) -> None:
    """A get pairs only with plockget; a set only with plockset or plockclear."""
    if command_type == GET and op.keyword != PLOCK_GET:
        raise InvalidFormat(
            f"Invalid format: A get command can not be followed by a {op} command. "
            f"Please try {PLOCK_GET} or use a set command."
        )
    if command_type == SET and op.keyword == PLOCK_GET:
        raise InvalidFormat(
            f"Invalid format: A set command can not be followed by a {op} command. "
            f"Please try {PLOCK_SET} or {PLOCK_CLEAR} or use a get command."
        )


def dispatch_plock(
    command_type: str,
    trig: Trig,
    op: PlockOperation,
    tokens: Sequence[ParsedToken],
) -> Reply:
    check_compatible(command_type, op)
    request = split_field(tokens)
    if request is None:
        raise format_error(
            command_type,
            f"{op} should be followed by a lockable identifier or enum.",
        )
    f = lookup_field(PLOCK_FIELDS, request, "parameter lock")
    args = request.args

    if op.op == "get":
        if args.params:
            raise format_error(command_type, f"{op} {request.name} does not take a parameter.")
        native = trig.plocks.get(request.name)
        value = Symbol(UNSET) if native is None else f.to_value(native)
        return CommonReply(trig.index, request.name, value)

    if op.op == "clear":
        if args.params:
            raise format_error(command_type, f"{op} {request.name} does not take a parameter.")
        removed = trig.plocks.pop(request.name, None)
        logger.debug("cleared lock %s on trig %d (was %r)", request.name, trig.index, removed)
        return OK

    # plockset: validate fully before touching the lock map
    if f.kind == "enum":
        if args.params:
            raise format_error(command_type, f"{request.name}:<variant> does not take an index.")
        native = f.convert_variant(f.validate_variant(args.variant))
    else:
        if len(args.params) != 1:
            raise format_error(
                command_type,
                "Invalid format: A parameter or enum should follow a plockset action.",
            )
        native = f.coerce(args.params[0])
    trig.plocks[request.name] = native
    logger.debug("locked %s=%r on trig %d", request.name, native, trig.index)
    return OK
