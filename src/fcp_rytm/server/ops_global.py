"""Global and settings family handlers.

Neither family has path segments below the object: the token list is a
single identifier or enum with its parameters.
"""

from __future__ import annotations

from typing import Sequence

from fcp_rytm.model.globals import GLOBAL_FIELDS, Global
from fcp_rytm.model.settings import SETTINGS_FIELDS, Settings
from fcp_rytm.parser.command import GET
from fcp_rytm.parser.selector import ObjectTypeSelector
from fcp_rytm.parser.tokens import ParsedToken
from fcp_rytm.server.reply import OK, CommonReply, Reply
from fcp_rytm.server.resolvers import apply_field, format_error, split_field


def dispatch_global(
    command_type: str,
    selector: ObjectTypeSelector,
    global_: Global,
    tokens: Sequence[ParsedToken],
) -> Reply:
    request = split_field(tokens)
    if request is None:
        raise format_error(command_type, "A global should be followed by an identifier or enum.")
    value = apply_field(command_type, GLOBAL_FIELDS, global_, request, "global")
    if command_type == GET:
        return CommonReply(selector.reply_index, request.name, value)
    return OK


def dispatch_settings(
    command_type: str,
    selector: ObjectTypeSelector,
    settings: Settings,
    tokens: Sequence[ParsedToken],
) -> Reply:
    request = split_field(tokens)
    if request is None:
        raise format_error(command_type, "Settings should be followed by an identifier or enum.")
    value = apply_field(command_type, SETTINGS_FIELDS, settings, request, "settings")
    if command_type == GET:
        return CommonReply(0, request.name, value)
    return OK
