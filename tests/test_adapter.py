"""Full-stack tests for RytmAdapter through fcp-core's op parsing and event log."""

from __future__ import annotations

import json
import logging

import pytest

from fcp_core import EventLog as CoreEventLog, OpResult
from fcp_core import ParsedOp as GenericParsedOp, parse_op

from fcp_rytm.adapter import RytmAdapter, parse_hex_bytes
from fcp_rytm.errors import SerializationError, ValidationError
from fcp_rytm.logging_setup import PACKAGE_LOGGER
from fcp_rytm.model.event_log import DumpApplied, SnapshotEvent
from fcp_rytm.model.project import Project
from fcp_rytm.parser.selector import resolve
from fcp_rytm.serialization.sysex import ElektronSysexCodec


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def model(adapter: RytmAdapter) -> Project:
    return adapter.create_empty("Test Kit", {})


@pytest.fixture
def log() -> CoreEventLog:
    return CoreEventLog()


def _dispatch(adapter: RytmAdapter, model: Project, log: CoreEventLog, op_str: str) -> OpResult:
    """Helper to parse and dispatch an op."""
    parsed = parse_op(op_str, is_positional=lambda token: True)
    assert isinstance(parsed, GenericParsedOp), f"Parse failed: {parsed}"
    return adapter.dispatch_op(parsed, model, log)


# ===========================================================================
# create_empty
# ===========================================================================

class TestCreateEmpty:
    def test_returns_project(self, adapter):
        model = adapter.create_empty("My Kit", {})
        assert isinstance(model, Project)
        assert model.title == "My Kit"
        assert adapter.engine.project is model

    def test_params_override_config(self, adapter):
        adapter.create_empty("Tuned", {"device": "5", "timeout": "2"})
        assert adapter.engine.config.device_id == 5
        assert adapter.engine.config.lock_timeout == 2.0

    def test_base_config_unchanged(self, adapter, config):
        adapter.create_empty("Tuned", {"device": "5"})
        assert adapter.base_config == config


# ===========================================================================
# get / set
# ===========================================================================

class TestGetSet:
    def test_get_reads_value(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "get pattern 1 masterlen")
        assert result.success
        assert result.message == "1 masterlen 16"
        assert result.prefix == "="
        assert len(log) == 0

    def test_get_enum(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "get sound 0 filtertype:")
        assert result.success
        assert result.message.startswith("0 filtertype ")

    def test_set_logs_snapshot(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "set pattern 1 masterlen 64")
        assert result.success
        assert result.message == "set pattern 1 masterlen 64"
        assert model.patterns[1].master_length == 64
        assert len(log) == 1

    def test_set_error_is_failed_result(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "set pattern 1 masterlen 2000")
        assert not result.success
        assert "masterlen" in result.message
        assert len(log) == 0

    def test_bad_selector(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "get song 1")
        assert not result.success

    def test_unknown_verb(self, adapter, model, log):
        parsed = parse_op("copy pattern 1", is_positional=lambda token: True)
        result = adapter.dispatch_op(parsed, model, log)
        assert not result.success
        assert "Unknown verb" in result.message

    def test_rebinds_to_other_model(self, adapter, model, log):
        second = Project.create("Second")
        _dispatch(adapter, second, log, "set kit 0 name Snare")
        assert second.kits[0].name == "Snare"
        assert model.kits[0].name != "Snare"


# ===========================================================================
# Undo / redo through the core event log
# ===========================================================================

class TestUndoRedo:
    def test_undo_restores_before(self, adapter, model, log):
        _dispatch(adapter, model, log, "set settings projectbpm 90")
        for event in log.undo():
            adapter.reverse_event(event, model)
        assert model.settings.bpm == 120.0

    def test_redo_restores_after(self, adapter, model, log):
        _dispatch(adapter, model, log, "set settings projectbpm 90")
        for event in log.undo():
            adapter.reverse_event(event, model)
        for event in log.redo():
            adapter.replay_event(event, model)
        assert model.settings.bpm == 90.0

    def test_undo_in_order(self, adapter, model, log):
        _dispatch(adapter, model, log, "set pattern 0 masterlen 32")
        _dispatch(adapter, model, log, "set pattern 0 masterlen 48")
        events = log.undo(2)
        assert [e.summary for e in events] == [
            "set pattern 0 masterlen 48",
            "set pattern 0 masterlen 32",
        ]
        for event in events:
            adapter.reverse_event(event, model)
        assert model.patterns[0].master_length == 16

    def test_checkpoint_undo(self, adapter, model, log):
        _dispatch(adapter, model, log, "set kit 2 name Before")
        log.checkpoint("v1")
        _dispatch(adapter, model, log, "set kit 2 name After")
        for event in log.undo_to("v1"):
            adapter.reverse_event(event, model)
        assert model.kits[2].name == "Before"


# ===========================================================================
# query / sysex / loglevel verbs
# ===========================================================================

class TestQueryVerb:
    def test_query_frame_hex(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "query kit 3")
        assert result.success
        assert result.prefix == "="
        assert result.message == "F0 00 20 3C 07 00 62 01 01 03 00 00 00 05 F7"

    def test_query_uses_session_device(self, adapter, log):
        model = adapter.create_empty("Dev", {"device": "9"})
        result = _dispatch(adapter, model, log, "query settings")
        assert result.message.split()[5] == "09"

    def test_query_without_selector(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "query")
        assert not result.success


class TestSysexVerb:
    def test_applies_dump(self, adapter, model, log):
        frame = ElektronSysexCodec().encode(resolve("kit", 4), b"\x01\x02\x03")
        result = _dispatch(adapter, model, log, "sysex " + frame.hex(" "))
        assert result.success
        assert "applied kit 4" in result.message
        assert model.kits[4].dump == b"\x01\x02\x03"
        assert len(log) == 1

    def test_dump_is_undoable(self, adapter, model, log):
        frame = ElektronSysexCodec().encode(resolve("sound", 2), b"\x05")
        _dispatch(adapter, model, log, "sysex " + frame.hex())
        (event,) = log.undo()
        assert isinstance(event, DumpApplied)
        adapter.reverse_event(event, model)
        assert model.sounds[2].dump is None

    def test_partial_frame_is_buffered(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "sysex F0 00 20")
        assert result.success
        assert result.message == "3 bytes, 3 bytes buffered"
        assert len(log) == 0

    def test_frame_across_ops(self, adapter, model, log):
        frame = ElektronSysexCodec().encode(resolve("global", 1), b"\x7f")
        half = len(frame) // 2
        _dispatch(adapter, model, log, "sysex " + frame[:half].hex(" "))
        result = _dispatch(adapter, model, log, "sysex " + frame[half:].hex(" "))
        assert "applied global 1" in result.message
        assert model.globals[1].dump == b"\x7f"

    def test_bad_hex(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "sysex F0 zz")
        assert not result.success
        assert "Invalid hex bytes" in result.message

    def test_stray_byte(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "sysex 10")
        assert not result.success

    def test_error_after_applied_frame(self, adapter, model, log):
        frame = ElektronSysexCodec().encode(resolve("kit", 0), b"\x01")
        result = _dispatch(adapter, model, log, "sysex " + frame.hex(" ") + " 10")
        assert not result.success
        assert "applied before the error: kit 0" in result.message
        assert model.kits[0].dump == b"\x01"


class TestSendVerb:
    def test_frame_hex(self, adapter, model, log):
        model.kits[4].dump = b"\x01\x02\x03"
        result = _dispatch(adapter, model, log, "send kit 4")
        assert result.success
        assert result.prefix == "="
        expected = ElektronSysexCodec().encode(resolve("kit", 4), b"\x01\x02\x03")
        assert result.message == expected.hex(" ").upper()
        assert len(log) == 0

    def test_received_dump_sends_back(self, adapter, model, log):
        frame = ElektronSysexCodec().encode(resolve("sound_wb", 5), b"\x10\x90")
        _dispatch(adapter, model, log, "sysex " + frame.hex(" "))
        result = _dispatch(adapter, model, log, "send sound_wb 5")
        assert bytes.fromhex(result.message) == frame

    def test_uses_session_device(self, adapter, log):
        model = adapter.create_empty("Dev", {"device": "9"})
        model.settings.dump = b"\x00"
        result = _dispatch(adapter, model, log, "send settings")
        assert result.message.split()[5] == "09"

    def test_without_dump(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "send kit 4")
        assert not result.success
        assert "has no stored dump" in result.message

    def test_without_selector(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "send")
        assert not result.success
        assert "send kit 1" in result.message

    def test_trailing_tokens(self, adapter, model, log):
        model.kits[4].dump = b"\x01"
        result = _dispatch(adapter, model, log, "send kit 4 5")
        assert not result.success


class TestExportVerb:
    def test_writes_frame(self, adapter, model, log, tmp_path):
        model.patterns[7].dump = b"\x7f\x80"
        path = tmp_path / "pattern.sysex"
        result = _dispatch(adapter, model, log, f"export pattern 7 {path}")
        assert result.success
        assert result.message == f"exported pattern 7 to {path}"
        assert path.read_bytes() == ElektronSysexCodec().encode(resolve("pattern", 7), b"\x7f\x80")

    def test_without_dump(self, adapter, model, log, tmp_path):
        path = tmp_path / "kit.syx"
        result = _dispatch(adapter, model, log, f"export kit 1 {path}")
        assert not result.success
        assert not path.exists()

    def test_rejects_project_suffix(self, adapter, model, log, tmp_path):
        model.kits[1].dump = b"\x01"
        result = _dispatch(adapter, model, log, f"export kit 1 {tmp_path / 'kit.rytm'}")
        assert not result.success
        assert ".sysex" in result.message

    def test_missing_path(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "export kit")
        assert not result.success
        assert "export kit 1 ~/my_kit.sysex" in result.message


class TestLoglevelVerb:
    @pytest.fixture(autouse=True)
    def _restore(self):
        package = logging.getLogger(PACKAGE_LOGGER)
        saved = package.level
        yield
        package.setLevel(saved)

    def test_sets_level(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "loglevel debug")
        assert result.success
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG

    def test_invalid_level(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "loglevel loud")
        assert not result.success

    def test_missing_level(self, adapter, model, log):
        result = _dispatch(adapter, model, log, "loglevel")
        assert not result.success


class TestParseHexBytes:
    def test_spaced(self):
        assert parse_hex_bytes(["F0", "00", "f7"]) == bytes([0xF0, 0x00, 0xF7])

    def test_prefixed(self):
        assert parse_hex_bytes(["0xF0", "0X7f"]) == bytes([0xF0, 0x7F])

    def test_run_together(self):
        assert parse_hex_bytes(["F00020"]) == bytes([0xF0, 0x00, 0x20])

    def test_odd_digits(self):
        with pytest.raises(ValidationError):
            parse_hex_bytes(["F"])


# ===========================================================================
# Queries
# ===========================================================================

class TestDispatchQuery:
    def test_get(self, adapter, model, log):
        _dispatch(adapter, model, log, "set kit 1 name Techno")
        assert adapter.dispatch_query("get kit 1 name", model) == "1 name Techno"

    def test_get_error(self, adapter, model):
        assert adapter.dispatch_query("get kit 200 name", model).startswith("! ")

    def test_selectors(self, adapter, model):
        out = adapter.dispatch_query("selectors", model)
        assert out.startswith("Selectors:")
        assert "pattern_wb" in out
        assert "sound <0..127>" in out

    def test_names_contexts(self, adapter, model):
        out = adapter.dispatch_query("names", model)
        assert out.startswith("Contexts: pattern track trig plock kit")

    def test_names_sound(self, adapter, model):
        out = adapter.dispatch_query("names sound", model)
        assert out.startswith("sound (")
        assert "filtertype:" in out

    def test_names_unknown_context(self, adapter, model):
        out = adapter.dispatch_query("names sond", model)
        assert out.startswith("! Unknown context 'sond'")
        assert "try: names sound" in out

    def test_enums(self, adapter, model):
        out = adapter.dispatch_query("enums filtertype:", model)
        assert out.startswith("filtertype: (")
        assert "hp1" in out

    def test_enums_unknown(self, adapter, model):
        out = adapter.dispatch_query("enums filtertyp", model)
        assert out.startswith("! Unknown enum 'filtertyp'.")
        assert "Did you mean 'filtertype'?" in out

    def test_enums_missing(self, adapter, model):
        assert "try: enums filtertype" in adapter.dispatch_query("enums", model)

    def test_status(self, adapter, model):
        out = adapter.dispatch_query("status", model)
        assert "Project: Test Kit" in out
        assert "Device id: 0" in out
        assert "SysEx bytes pending: 0" in out

    def test_status_waits_for_lock(self, adapter, model):
        with adapter.engine.locked():
            out = adapter.dispatch_query("status", model)
        assert out.startswith("! Busy")
        assert "Project: Test Kit" in adapter.dispatch_query("status", model)

    def test_unknown_query(self, adapter, model):
        out = adapter.dispatch_query("statsu", model)
        assert out.startswith("! Unknown query: 'statsu'")
        assert "try: status" in out


# ===========================================================================
# Persistence and digest
# ===========================================================================

class TestPersistence:
    def test_serialize_round_trip(self, adapter, model, log, tmp_path):
        _dispatch(adapter, model, log, "set pattern 2 masterlen 40")
        path = str(tmp_path / "session.rytm")
        adapter.serialize(model, path)
        loaded = adapter.deserialize(path)
        adapter.rebuild_indices(loaded)
        assert adapter.engine.project is loaded
        assert loaded.patterns[2].master_length == 40

    def test_deserialize_refuses_mistyped_file(self, adapter, model, tmp_path):
        path = tmp_path / "session.rytm"
        adapter.serialize(model, str(path))
        data = json.loads(path.read_text())
        data["project"]["patterns"][0]["master_length"] = "sixteen"
        path.write_text(json.dumps(data))
        with pytest.raises(SerializationError):
            adapter.deserialize(str(path))

    def test_deserialize_refuses_truncated_file(self, adapter, model, tmp_path):
        path = tmp_path / "session.rytm"
        adapter.serialize(model, str(path))
        data = json.loads(path.read_text())
        data["project"]["patterns"] = data["project"]["patterns"][:2]
        path.write_text(json.dumps(data))
        with pytest.raises(SerializationError):
            adapter.deserialize(str(path))

    def test_digest(self, adapter, model):
        digest = adapter.get_digest(model)
        assert digest.startswith("[Test Kit] bpm:120")
        assert "dumps:0" in digest


def test_snapshot_event_type(adapter, model, log):
    _dispatch(adapter, model, log, "set global 0 routetomain 3 0")
    (event,) = log.recent(1)
    assert isinstance(event, SnapshotEvent)
