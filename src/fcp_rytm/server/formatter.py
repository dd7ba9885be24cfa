"""Compact text formatting for Rytm FCP query output."""

from __future__ import annotations

from fcp_rytm.lib.vocabulary import NameContext
from fcp_rytm.model.fields import Field, FieldTable
from fcp_rytm.parser.selector import SELECTOR_RANGES


def format_result(
    success: bool,
    message: str,
    suggestion: str | None = None,
) -> str:
    """Format a result line.

    Success: ``+ message``
    Error:   ``! message`` with optional ``  try: suggestion``
    """
    if success:
        return f"+ {message}"
    line = f"! {message}"
    if suggestion:
        line += f"\n  try: {suggestion}"
    return line


def format_selectors() -> str:
    """List every selector with its index range."""
    lines = ["Selectors:"]
    for kind, (family, bounds) in SELECTOR_RANGES.items():
        index = f" <{bounds[0]}..{bounds[1]}>" if bounds else ""
        lines.append(f"  {kind}{index}  ({family})")
    return "\n".join(lines)


def format_names(context: NameContext, fields: FieldTable) -> str:
    """List the identifiers and enums of one grammar context."""
    lines = [f"{context.label} ({len(context.identifiers)} identifiers, {len(context.enums)} enums):"]
    for name in sorted(context.identifiers):
        lines.append(_field_line(name, fields[name]))
    for name in sorted(context.enums):
        lines.append(_field_line(f"{name}:", fields[name]))
    return "\n".join(lines)


def _field_line(label: str, f: Field) -> str:
    flags = ""
    if f.read_only:
        flags = " [read-only]"
    elif f.write_only:
        flags = " [set-only]"
    desc = f.describe()
    return f"  {label:<24} {desc}{flags}".rstrip()


def format_enum(name: str, variants: tuple[str, ...], where: list[str]) -> str:
    lines = [f"{name}: ({', '.join(where)}; {len(variants)} variants)"]
    row: list[str] = []
    for v in variants:
        row.append(v)
        if len(row) == 12:
            lines.append("  " + " ".join(row))
            row = []
    if row:
        lines.append("  " + " ".join(row))
    return "\n".join(lines)
