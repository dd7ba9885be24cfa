"""Tests for RytmEngine: locking, undo snapshots and SysEx intake."""

from __future__ import annotations

import threading

import pytest

from fcp_rytm.config import RytmConfig
from fcp_rytm.engine import RytmEngine
from fcp_rytm.errors import BusyError, CodecError, FramingError, InvalidSelector, SetRangeError
from fcp_rytm.model.event_log import DumpApplied, SnapshotEvent
from fcp_rytm.model.project import Project
from fcp_rytm.parser.selector import resolve
from fcp_rytm.parser.value import Int, values_from_text
from fcp_rytm.serialization.sysex import ElektronSysexCodec
from fcp_rytm.server.reply import OK, CommonReply


def values(text: str):
    return values_from_text(text)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class TestCommands:
    def test_get_returns_no_event(self, engine):
        reply, event = engine.execute("get", values("pattern 1 masterlen"))
        assert reply == CommonReply(1, "masterlen", Int(16))
        assert event is None

    def test_set_returns_snapshot_event(self, engine, project):
        reply, event = engine.execute("set", values("pattern 1 masterlen 32"))
        assert reply == OK
        assert isinstance(event, SnapshotEvent)
        assert event.selector == resolve("pattern", 1)
        assert event.before.master_length == 16
        assert event.after.master_length == 32
        assert event.summary == "set pattern 1 masterlen 32"

    def test_snapshots_are_copies(self, engine, project):
        _, event = engine.execute("set", values("kit 0 fxdeltime 5"))
        assert event.after is not project.kits[0]
        project.kits[0].fx_delay_time = 99
        assert event.after.fx_delay_time == 5

    def test_failed_set_leaves_state(self, engine, project):
        with pytest.raises(SetRangeError):
            engine.execute("set", values("kit 0 fxdeltime 500"))
        assert project.kits[0].fx_delay_time == 23

    def test_command_type_is_case_insensitive(self, engine):
        assert engine.command("GET", values("settings projectbpm")).key == "projectbpm"

    def test_parse_error_logged(self, engine, caplog):
        with pytest.raises(InvalidSelector):
            engine.command("get", values("song 1"))
        assert "Invalid query selector" in caplog.text

    def test_default_engine_builds_project(self):
        assert isinstance(RytmEngine().project, Project)


# ---------------------------------------------------------------------------
# Locking
# ---------------------------------------------------------------------------

class TestLocking:
    def test_busy_when_lock_held(self, engine):
        with engine.locked():
            with pytest.raises(BusyError) as exc:
                engine.command("get", values("pattern 0 masterlen"))
        assert "retry" in str(exc.value)
        assert exc.value.timeout == engine.config.lock_timeout

    def test_busy_from_other_thread(self, engine):
        errors: list[Exception] = []
        held = threading.Event()
        release = threading.Event()

        def holder():
            with engine.locked():
                held.set()
                release.wait(2)

        thread = threading.Thread(target=holder)
        thread.start()
        held.wait(2)
        try:
            engine.command("set", values("pattern 0 masterlen 20"))
        except BusyError as exc:
            errors.append(exc)
        finally:
            release.set()
            thread.join()
        assert len(errors) == 1
        assert engine.project.patterns[0].master_length == 16

    def test_lock_released_after_error(self, engine):
        with pytest.raises(SetRangeError):
            engine.command("set", values("pattern 0 masterlen 0"))
        assert engine.command("set", values("pattern 0 masterlen 8")) == OK

    def test_parse_happens_without_lock(self, engine):
        with engine.locked():
            with pytest.raises(InvalidSelector):
                engine.command("get", values("song 1"))


# ---------------------------------------------------------------------------
# Undo support
# ---------------------------------------------------------------------------

class TestRestore:
    def test_restore_before(self, engine, project):
        _, event = engine.execute("set", values("sound 3 amplev 10"))
        engine.restore(event.selector, event.before)
        assert project.sounds[3].amp_volume == 100
        engine.restore(event.selector, event.after)
        assert project.sounds[3].amp_volume == 10

    def test_restore_copies(self, engine, project):
        _, event = engine.execute("set", values("settings projectbpm 90"))
        engine.restore(event.selector, event.before)
        assert project.settings is not event.before

    def test_attach(self, engine):
        other = Project.create("Other")
        engine.attach(other)
        assert engine.project is other


# ---------------------------------------------------------------------------
# SysEx intake
# ---------------------------------------------------------------------------

class TestSysex:
    def test_bytes_until_frame_complete(self, engine, project):
        frame = ElektronSysexCodec().encode(resolve("kit", 4), b"\x01\x02")
        events = [engine.handle_sysex_byte(b) for b in frame]
        assert events[:-1] == [None] * (len(frame) - 1)
        event = events[-1]
        assert isinstance(event, DumpApplied)
        assert event.selector == resolve("kit", 4)
        assert event.before.dump is None
        assert event.after.dump == b"\x01\x02"
        assert project.kits[4].dump == b"\x01\x02"

    def test_handle_many(self, engine):
        codec = ElektronSysexCodec()
        data = codec.encode(resolve("sound", 1), b"a") + codec.encode(resolve("settings"), b"b")
        events = engine.handle_sysex_bytes(data)
        assert [e.selector for e in events] == [resolve("sound", 1), resolve("settings")]
        assert engine.project.settings.dump == b"b"

    def test_pending(self, engine):
        engine.handle_sysex_bytes([0xF0, 0x00, 0x20])
        assert engine.sysex_pending == 3

    def test_stray_byte(self, engine):
        with pytest.raises(FramingError):
            engine.handle_sysex_byte(0x10)

    def test_bad_frame(self, engine):
        with pytest.raises(CodecError):
            engine.handle_sysex_bytes([0xF0, 0x01, 0xF7])

    def test_attach_drops_partial_frame(self, engine):
        engine.handle_sysex_bytes([0xF0, 0x00])
        engine.attach(Project.create())
        assert engine.sysex_pending == 0

    def test_prepare_query_uses_device_id(self, project):
        engine = RytmEngine(project, RytmConfig(device_id=9))
        assert engine.prepare_query(values("kit 0"))[5] == 9
