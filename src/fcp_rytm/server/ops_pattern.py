"""Pattern family handler: pattern, track and trig fields plus parameter locks."""

from __future__ import annotations

from typing import Sequence

from fcp_rytm.model.pattern import PATTERN_FIELDS, TRACK_FIELDS, TRIG_FIELDS, Pattern
from fcp_rytm.parser.command import GET
from fcp_rytm.parser.selector import ObjectTypeSelector
from fcp_rytm.parser.tokens import ParsedToken, PlockOperation, TrackIndex, TrigIndex
from fcp_rytm.server.ops_plock import dispatch_plock
from fcp_rytm.server.reply import OK, CommonReply, Reply, TrackReply, TrigReply
from fcp_rytm.server.resolvers import apply_field, format_error, split_field


def dispatch_pattern(
    command_type: str,
    selector: ObjectTypeSelector,
    pattern: Pattern,
    tokens: Sequence[ParsedToken],
) -> Reply:
    pattern_index = selector.reply_index
    rest = list(tokens)

    if not rest or not isinstance(rest[0], TrackIndex):
        request = split_field(rest)
        if request is None:
            raise format_error(command_type, "A pattern should be followed by an identifier or enum.")
        value = apply_field(command_type, PATTERN_FIELDS, pattern, request, "pattern")
        if command_type == GET:
            return CommonReply(pattern_index, request.name, value)
        return OK

    track_index = rest.pop(0).index
    track = pattern.tracks[track_index]

    if not rest or not isinstance(rest[0], TrigIndex):
        request = split_field(rest)
        if request is None:
            raise format_error(
                command_type,
                "A track index should be followed by a identifier enum or trig index.",
            )
        value = apply_field(command_type, TRACK_FIELDS, track, request, "track")
        if command_type == GET:
            return TrackReply(pattern_index, track_index, request.name, value)
        return OK

    trig_index = rest.pop(0).index
    trig = track.trigs[trig_index]

    if rest and isinstance(rest[0], PlockOperation):
        return dispatch_plock(command_type, trig, rest[0], rest[1:])

    request = split_field(rest)
    if request is None:
        raise format_error(
            command_type,
            "A trig index should be followed by an identifier enum or a plock command.",
        )
    value = apply_field(command_type, TRIG_FIELDS, trig, request, "trig")
    if command_type == GET:
        return TrigReply(pattern_index, track_index, trig_index, request.name, value)
    return OK
