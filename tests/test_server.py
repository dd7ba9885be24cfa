"""Tests for server layer: replies, formatter, verb registry and reference card."""

from __future__ import annotations

from fcp_rytm.lib.vocabulary import SETTINGS_NAMES
from fcp_rytm.model.settings import SETTINGS_FIELDS
from fcp_rytm.parser.value import Float, Int, Symbol
from fcp_rytm.server.formatter import format_enum, format_names, format_result, format_selectors
from fcp_rytm.server.reference_card import EXTRA_SECTIONS, reference_card
from fcp_rytm.server.reply import (
    OK,
    CommonReply,
    KitElementReply,
    TrackReply,
    TrigReply,
    format_reply,
)
from fcp_rytm.server.verb_registry import VERBS


# -----------------------------------------------------------------------
# Replies
# -----------------------------------------------------------------------

class TestReplies:
    def test_ok(self):
        assert OK.atoms() == []
        assert format_reply(OK) == "ok"

    def test_common(self):
        assert format_reply(CommonReply(3, "fxdeltime", Int(23))) == "3 fxdeltime 23"

    def test_kit_element(self):
        reply = KitElementReply(0, 4, "tracklevel", Int(100))
        assert reply.atoms() == [Int(0), Int(4), Symbol("tracklevel"), Int(100)]

    def test_track(self):
        assert format_reply(TrackReply(1, 2, "speed", Symbol("2x"))) == "1 2 speed 2x"

    def test_trig(self):
        reply = TrigReply(1, 2, 3, "velocity", Float(0.5))
        assert format_reply(reply) == "1 2 3 velocity 0.5"

    def test_type_tags(self):
        tags = {
            OK.type,
            CommonReply(0, "a", Int(0)).type,
            KitElementReply(0, 0, "a", Int(0)).type,
            TrackReply(0, 0, "a", Int(0)).type,
            TrigReply(0, 0, 0, "a", Int(0)).type,
        }
        assert tags == {"ok", "common", "kit_element", "track", "trig"}


# -----------------------------------------------------------------------
# Formatter
# -----------------------------------------------------------------------

class TestFormatter:
    def test_success(self):
        assert format_result(True, "done") == "+ done"

    def test_failure_with_suggestion(self):
        assert format_result(False, "oops", "status") == "! oops\n  try: status"

    def test_selectors(self):
        out = format_selectors()
        assert "  settings  (settings)" in out
        assert "  global <0..3>  (global)" in out

    def test_names_flags(self):
        out = format_names(SETTINGS_NAMES, SETTINGS_FIELDS)
        assert out.startswith("settings (")
        lines = {line.split()[0]: line for line in out.splitlines()[1:]}
        assert lines["unmute"].endswith("[set-only]")

    def test_enum_wraps(self):
        out = format_enum("x", tuple(f"v{i}" for i in range(13)), ["sound"])
        assert out.splitlines() == [
            "x: (sound; 13 variants)",
            "  " + " ".join(f"v{i}" for i in range(12)),
            "  v12",
        ]


# -----------------------------------------------------------------------
# Verb registry and reference card
# -----------------------------------------------------------------------

class TestReferenceCard:
    def test_verbs(self):
        assert [v.verb for v in VERBS] == ["get", "set", "query", "sysex", "send", "export", "loglevel"]

    def test_card_lists_categories(self):
        card = reference_card()
        for heading in ("ACCESS:", "DEVICE:", "DIAGNOSTICS:", "SELECTORS:", "EXAMPLES:"):
            assert heading in card

    def test_card_has_every_syntax(self):
        card = reference_card()
        for spec in VERBS:
            assert spec.syntax in card

    def test_extra_sections(self):
        assert "Response Prefixes" in EXTRA_SECTIONS
        assert "names [" in EXTRA_SECTIONS["Queries"]

    def test_examples_cover_device_verbs(self):
        examples = EXTRA_SECTIONS["Examples"]
        assert "send kit 1" in examples
        assert "export kit 1 ~/my_kit.sysex" in examples
