"""Dispatch a parsed command against the project tree.

The token list always starts with one ``ObjectType``; the rest is handed to
the handler for that selector's family. Dispatch itself takes no lock: the
engine holds the project lock around every call.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from fcp_rytm.errors import InvalidSelector
from fcp_rytm.model.project import Project
from fcp_rytm.parser.tokens import ObjectType, ParsedToken
from fcp_rytm.server.ops_global import dispatch_global, dispatch_settings
from fcp_rytm.server.ops_kit import dispatch_kit
from fcp_rytm.server.ops_pattern import dispatch_pattern
from fcp_rytm.server.ops_sound import dispatch_sound
from fcp_rytm.server.reply import Reply

logger = logging.getLogger(__name__)

Handler = Callable[..., Reply]

HANDLERS: dict[str, Handler] = {
    "pattern": dispatch_pattern,
    "kit": dispatch_kit,
    "sound": dispatch_sound,
    "global": dispatch_global,
    "settings": dispatch_settings,
}


def dispatch(project: Project, command_type: str, tokens: Sequence[ParsedToken]) -> Reply:
    if not tokens or not isinstance(tokens[0], ObjectType):
        raise InvalidSelector()
    selector = tokens[0].selector
    handler = HANDLERS[selector.family]
    target = project.get(selector)
    reply = handler(command_type, selector, target, tokens[1:])
    logger.debug("%s %s -> %s", command_type, selector, reply)
    return reply
