"""Kit family handler: kit-level fields, per-track element rows and kit sounds.

A kit element row is addressed as ``<element> <track> [value]``. The element
keyword doubles as the field name, so ``set kit 0 tracklevel 3 100`` writes
``level`` on row 3, and ``set kit 0 trackretrigrate 3 trackretrigrate:1/8``
writes an element enum.
"""

from __future__ import annotations

from typing import Sequence

from fcp_rytm.model.kit import KIT_ELEMENT_FIELDS, KIT_FIELDS, KIT_TRACKS, Kit
from fcp_rytm.model.sound import SOUND_FIELDS
from fcp_rytm.parser.command import GET
from fcp_rytm.parser.selector import ObjectTypeSelector
from fcp_rytm.parser.tokens import Element, ElementIndex, Parameter, ParsedToken, SoundIndex
from fcp_rytm.server.reply import OK, CommonReply, KitElementReply, Reply
from fcp_rytm.server.resolvers import (
    FieldRequest,
    apply_field,
    format_error,
    range_error,
    split_field,
)


def dispatch_kit(
    command_type: str,
    selector: ObjectTypeSelector,
    kit: Kit,
    tokens: Sequence[ParsedToken],
) -> Reply:
    kit_index = selector.reply_index
    rest = list(tokens)

    if not rest or not isinstance(rest[0], Element):
        request = split_field(rest)
        if request is None:
            raise format_error(command_type, "A kit should be followed by an identifier, enum or element.")
        value = apply_field(command_type, KIT_FIELDS, kit, request, "kit")
        if command_type == GET:
            return CommonReply(kit_index, request.name, value)
        return OK

    element = rest.pop(0).name
    if not rest or not isinstance(rest[0], (SoundIndex, ElementIndex)):
        raise format_error(command_type, f"'{element}' should be followed by an integer index.")
    index_token = rest.pop(0)

    if isinstance(index_token, SoundIndex):
        return _dispatch_kit_sound(command_type, kit, kit_index, index_token.index, rest)
    return _dispatch_element(command_type, kit, kit_index, element, index_token.index, rest)


def _dispatch_kit_sound(
    command_type: str,
    kit: Kit,
    kit_index: int,
    sound_index: int,
    rest: list[ParsedToken],
) -> Reply:
    request = split_field(rest)
    if request is None:
        raise format_error(
            command_type,
            "A kit sound index should be followed by a sound identifier or enum.",
        )
    value = apply_field(command_type, SOUND_FIELDS, kit.sounds[sound_index], request, "sound")
    if command_type == GET:
        return KitElementReply(kit_index, sound_index, request.name, value)
    return OK


def _dispatch_element(
    command_type: str,
    kit: Kit,
    kit_index: int,
    element: str,
    element_index: int,
    rest: list[ParsedToken],
) -> Reply:
    if not 0 <= element_index < KIT_TRACKS:
        raise range_error(
            command_type,
            f"Kit element index {element_index} is out of range for {element}. "
            f"Kit elements take a track index between 0 and {KIT_TRACKS - 1}.",
        )

    if all(isinstance(tok, Parameter) for tok in rest):
        request = FieldRequest(element, KIT_ELEMENT_FIELDS[element].kind)
        request.args.params.extend(tok.number for tok in rest)
    else:
        request = split_field(rest)
        if request.name != element:
            raise format_error(
                command_type,
                f"'{request.name}' does not match the kit element '{element}'.",
            )

    row = kit.tracks[element_index]
    value = apply_field(command_type, KIT_ELEMENT_FIELDS, row, request, "kit element")
    if command_type == GET:
        return KitElementReply(kit_index, element_index, element, value)
    return OK
