"""Structured verb registry: single source of truth for all op verbs.

Uses ``VerbSpec`` and ``VerbRegistry`` from fcp_core.
"""

from __future__ import annotations

from fcp_core import VerbSpec


# -----------------------------------------------------------------------
# Verb definitions
# -----------------------------------------------------------------------

VERBS: list[VerbSpec] = [
    # Object access
    VerbSpec(
        verb="get",
        syntax="get SELECTOR [INDEX] [TRACK [TRIG [plockget]]] IDENTIFIER|ENUM: [PARAM]",
        category="access",
        description="Read a field from a pattern, kit, sound, global or settings object.",
    ),
    VerbSpec(
        verb="set",
        syntax="set SELECTOR [INDEX] [PATH] IDENTIFIER VALUE [VALUE] | ENUM:VARIANT [SLOT]",
        category="access",
        description="Write a field. Validated before the object is touched.",
    ),
    # Device
    VerbSpec(
        verb="query",
        syntax="query SELECTOR [INDEX]",
        category="device",
        description="Build the SysEx dump request for an object (hex bytes).",
    ),
    VerbSpec(
        verb="sysex",
        syntax="sysex HEX...",
        category="device",
        description="Feed received SysEx bytes; complete dumps are stored on their object.",
    ),
    VerbSpec(
        verb="send",
        syntax="send SELECTOR [INDEX]",
        category="device",
        description="Encode the stored dump of an object as a SysEx frame (hex bytes).",
    ),
    VerbSpec(
        verb="export",
        syntax="export SELECTOR [INDEX] PATH.sysex",
        category="device",
        description="Write the stored dump of one object to a .syx or .sysex file.",
    ),
    # Diagnostics
    VerbSpec(
        verb="loglevel",
        syntax="loglevel error|warn|info|debug|trace",
        category="diagnostics",
        description="Change the log level.",
    ),
]
