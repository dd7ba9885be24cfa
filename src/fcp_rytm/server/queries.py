"""Query handlers for read-only operations."""

from __future__ import annotations

import logging

from fcp_core import suggest

from fcp_rytm.engine import RytmEngine
from fcp_rytm.errors import BusyError, RytmError
from fcp_rytm.lib import vocabulary as vocab
from fcp_rytm.model.fields import FieldTable
from fcp_rytm.model.globals import GLOBAL_FIELDS
from fcp_rytm.model.kit import KIT_ELEMENT_FIELDS, KIT_FIELDS
from fcp_rytm.model.pattern import PATTERN_FIELDS, TRACK_FIELDS, TRIG_FIELDS
from fcp_rytm.model.plocks import PLOCK_FIELDS
from fcp_rytm.model.settings import SETTINGS_FIELDS
from fcp_rytm.model.sound import SOUND_FIELDS
from fcp_rytm.parser.command import GET
from fcp_rytm.parser.value import values_from_text
from fcp_rytm.server.formatter import (
    format_enum,
    format_names,
    format_result,
    format_selectors,
)
from fcp_rytm.server.reply import format_reply

logger = logging.getLogger(__name__)

# ``names`` query context -> (grammar names, field table)
CONTEXTS: dict[str, tuple[vocab.NameContext, FieldTable]] = {
    "pattern": (vocab.PATTERN_NAMES, PATTERN_FIELDS),
    "track": (vocab.TRACK_NAMES, TRACK_FIELDS),
    "trig": (vocab.TRIG_NAMES, TRIG_FIELDS),
    "plock": (vocab.PLOCK_NAMES, PLOCK_FIELDS),
    "kit": (vocab.KIT_NAMES, KIT_FIELDS),
    "element": (vocab.KIT_ELEMENT_NAMES, KIT_ELEMENT_FIELDS),
    "sound": (vocab.SOUND_NAMES, SOUND_FIELDS),
    "global": (vocab.GLOBAL_NAMES, GLOBAL_FIELDS),
    "settings": (vocab.SETTINGS_NAMES, SETTINGS_FIELDS),
}

QUERY_COMMANDS = ("get", "selectors", "names", "enums", "status")


def dispatch_query(q: str, engine: RytmEngine) -> str:
    """Route a query string to the appropriate handler."""
    q = q.strip()
    parts = q.split(None, 1)
    command = parts[0].lower() if parts else ""
    args = parts[1] if len(parts) > 1 else ""

    if command == "get":
        return _query_get(args, engine)
    elif command == "selectors":
        return format_selectors()
    elif command == "names":
        return _query_names(args)
    elif command == "enums":
        return _query_enums(args)
    elif command == "status":
        return _query_status(engine)

    hint = suggest(command, list(QUERY_COMMANDS)) if command else None
    return format_result(
        False,
        f"Unknown query: {command!r}. Available: {', '.join(QUERY_COMMANDS)}",
        hint,
    )


def _query_get(args: str, engine: RytmEngine) -> str:
    try:
        reply = engine.command(GET, values_from_text(args))
    except RytmError as exc:
        return format_result(False, str(exc))
    return format_reply(reply)


def _query_names(args: str) -> str:
    label = args.strip().lower()
    if not label:
        return "Contexts: " + " ".join(CONTEXTS) + "\n  try: names sound"
    entry = CONTEXTS.get(label)
    if entry is None:
        hint = suggest(label, list(CONTEXTS))
        msg = f"Unknown context {label!r}. Available: {', '.join(CONTEXTS)}"
        return format_result(False, msg, f"names {hint}" if hint else None)
    context, fields = entry
    return format_names(context, fields)


def _query_enums(args: str) -> str:
    name = args.strip().rstrip(":").lower()
    if not name:
        return format_result(False, "Missing enum name", "enums filtertype")

    found: tuple[str, ...] | None = None
    where: list[str] = []
    for label, (_, fields) in CONTEXTS.items():
        f = fields.get(name)
        if f is None or f.kind != "enum":
            continue
        found = getattr(f, "variants", None) or getattr(f.inner, "variants", ())
        where.append(label)

    if found is None:
        every = sorted({n for ctx, _ in CONTEXTS.values() for n in ctx.enums})
        hint = suggest(name, every)
        msg = f"Unknown enum {name!r}."
        return format_result(False, msg + (f" Did you mean '{hint}'?" if hint else ""))
    return format_enum(name, found, where)


def _query_status(engine: RytmEngine) -> str:
    try:
        with engine.locked() as project:
            title = project.title
            digest = project.get_digest()
    except BusyError as exc:
        return format_result(False, str(exc))
    config = engine.config
    root = logging.getLogger()
    lines = [
        f"Project: {title}",
        f"Device id: {config.device_id}",
        f"Lock timeout: {config.lock_timeout:g}s",
        f"Log level: {logging.getLevelName(root.level).lower()}",
        f"SysEx bytes pending: {engine.sysex_pending}",
        f"State: {digest}",
    ]
    return "\n".join(lines)
