"""Tests for the SysEx frame assembler."""

from __future__ import annotations

import logging

import pytest

from fcp_rytm.errors import FramingError, ValidationError
from fcp_rytm.serialization.frame import SYSEX_END, SYSEX_START, FrameAssembler


@pytest.fixture
def assembler() -> FrameAssembler:
    return FrameAssembler()


class TestFrameAssembler:
    def test_starts_idle(self, assembler):
        assert not assembler.buffering
        assert assembler.pending == 0

    def test_complete_frame(self, assembler):
        data = [SYSEX_START, 0x00, 0x20, 0x3C, SYSEX_END]
        results = [assembler.feed(b) for b in data]
        assert results[:-1] == [None] * 4
        assert results[-1] == bytes(data)
        assert not assembler.buffering
        assert assembler.pending == 0

    def test_buffering_state(self, assembler):
        assembler.feed(SYSEX_START)
        assembler.feed(0x01)
        assert assembler.buffering
        assert assembler.pending == 2

    def test_byte_while_idle_is_rejected(self, assembler):
        with pytest.raises(FramingError) as exc:
            assembler.feed(0x42)
        assert "0x42" in str(exc.value)
        assert "start with 0xF0 and end with 0xF7" in str(exc.value)

    def test_end_marker_while_idle_is_rejected(self, assembler):
        with pytest.raises(FramingError):
            assembler.feed(SYSEX_END)

    def test_restart_drops_partial_frame(self, assembler, caplog):
        assembler.feed_many([SYSEX_START, 0x01, 0x02])
        with caplog.at_level(logging.WARNING, logger="fcp_rytm.serialization.frame"):
            frames = assembler.feed_many([SYSEX_START, 0x03, SYSEX_END])
        assert frames == [bytes([SYSEX_START, 0x03, SYSEX_END])]
        assert "Dropping incomplete frame" in caplog.text

    def test_feed_many_multiple_frames(self, assembler):
        data = [SYSEX_START, 1, SYSEX_END, SYSEX_START, 2, 3, SYSEX_END]
        assert assembler.feed_many(data) == [
            bytes([SYSEX_START, 1, SYSEX_END]),
            bytes([SYSEX_START, 2, 3, SYSEX_END]),
        ]

    def test_empty_frame(self, assembler):
        assert assembler.feed_many([SYSEX_START, SYSEX_END]) == [bytes([SYSEX_START, SYSEX_END])]

    def test_byte_out_of_range(self, assembler):
        with pytest.raises(ValidationError):
            assembler.feed(256)
        with pytest.raises(ValidationError):
            assembler.feed(-1)

    def test_reset(self, assembler):
        assembler.feed_many([SYSEX_START, 1, 2])
        assembler.reset()
        assert not assembler.buffering
        with pytest.raises(FramingError):
            assembler.feed(3)

    def test_frame_is_handed_over_once(self, assembler):
        assembler.feed_many([SYSEX_START, 1, SYSEX_END])
        with pytest.raises(FramingError):
            assembler.feed(1)
