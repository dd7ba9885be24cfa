"""Sound family handler (pool sounds and work-buffer sounds)."""

from __future__ import annotations

from typing import Sequence

from fcp_rytm.model.sound import SOUND_FIELDS, Sound
from fcp_rytm.parser.command import GET
from fcp_rytm.parser.selector import ObjectTypeSelector
from fcp_rytm.parser.tokens import ParsedToken
from fcp_rytm.server.reply import OK, CommonReply, Reply
from fcp_rytm.server.resolvers import apply_field, format_error, split_field


def dispatch_sound(
    command_type: str,
    selector: ObjectTypeSelector,
    sound: Sound,
    tokens: Sequence[ParsedToken],
) -> Reply:
    request = split_field(tokens)
    if request is None:
        raise format_error(command_type, "A sound should be followed by an identifier or enum.")
    value = apply_field(command_type, SOUND_FIELDS, sound, request, "sound")
    if command_type == GET:
        return CommonReply(selector.reply_index, request.name, value)
    return OK
