"""Rytm FCP reference card: generated from verb registry + static sections."""

from __future__ import annotations

from fcp_core import VerbRegistry

from fcp_rytm.server.verb_registry import VERBS


_registry = VerbRegistry()
_registry.register_many(VERBS)


# -----------------------------------------------------------------------
# Extra sections for the reference card (Rytm-specific)
# -----------------------------------------------------------------------

EXTRA_SECTIONS: dict[str, str] = {
    "Selectors": (
        "pattern N (0-127)  pattern_wb  kit N (0-127)  kit_wb\n"
        "  sound N (0-127)  sound_wb N (0-11)  global N (0-3)  global_wb  settings"
    ),
    "Paths": (
        "pattern N [TRACK 0-12 [TRIG 0-63 [plockget|plockset|plockclear]]] FIELD\n"
        "  kit N [ELEMENT TRACK | sound 0-11] FIELD\n"
        "  kit elements: tracklevel trackretrigrate trackretriglen\n"
        "                trackretrigveloffset trackretrigalwayson"
    ),
    "Fields": (
        "identifier: name, then 0-2 numbers   e.g. masterlen 64, velmodamt 2 -40\n"
        "  enum: name:variant (set) or name: (get)  e.g. speed:2x, filtertype:\n"
        "  indexed enum: velmodtarget:lfophase 2 (set), velmodtarget:2 (get)\n"
        "  names: name \"Text\" (ascii, max 15 chars)\n"
        "  booleans are 0 or 1"
    ),
    "Examples": (
        "get pattern 1 masterlen\n"
        "  set pattern 1 0 5 plockset filtertype:lp2\n"
        "  set kit 0 tracklevel 3 100\n"
        "  get kit 10 sound 2 amplev\n"
        "  set settings mute 4\n"
        "  query kit_wb\n"
        "  send kit 1\n"
        "  export kit 1 ~/my_kit.sysex"
    ),
    "Queries": (
        "get PATH  selectors  names [pattern|track|trig|plock|kit|element|sound|global|settings]\n"
        "  enums NAME  status"
    ),
    "Response Prefixes": (
        "+  ok     =  value read     !  error"
    ),
    "Conventions": (
        "- Indices are 0-based\n"
        "  - _wb selectors address the device work buffer\n"
        "  - A failed set leaves the object untouched\n"
        "  - send and export need a dump received from the device first\n"
        "  - save writes .rytm; one object goes to .sysex through export\n"
        "  - Call rytm_help after context truncation for full reference"
    ),
}


def reference_card() -> str:
    return _registry.generate_reference_card(EXTRA_SECTIONS)
