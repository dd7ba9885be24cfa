"""SysEx frame assembler.

Bytes arrive one at a time. A frame runs from a ``0xF0`` start marker up to
and including the next ``0xF7`` end marker. A start marker seen while a frame
is open drops the partial frame and starts over.
"""

from __future__ import annotations

import logging
from typing import Iterable

from fcp_rytm.errors import FramingError, ValidationError

logger = logging.getLogger(__name__)

SYSEX_START = 0xF0
SYSEX_END = 0xF7


class FrameAssembler:
    """Two-state (idle / buffering) accumulator for SysEx frames."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._buffering = False

    @property
    def buffering(self) -> bool:
        return self._buffering

    @property
    def pending(self) -> int:
        """Number of bytes held for the currently open frame."""
        return len(self._buffer)

    def feed(self, byte: int) -> bytes | None:
        """Feed one byte. Returns the completed frame on an end marker."""
        if not 0 <= byte <= 0xFF:
            raise ValidationError(f"Invalid byte value {byte}. Bytes must be between 0 and 255.")

        if byte == SYSEX_START:
            if self._buffering and self._buffer:
                logger.warning("Dropping incomplete frame of %d bytes", len(self._buffer))
            self._buffer.clear()
            self._buffering = True
        elif not self._buffering:
            raise FramingError(byte)

        self._buffer.append(byte)

        if byte == SYSEX_END:
            frame = bytes(self._buffer)
            self._buffer.clear()
            self._buffering = False
            logger.debug("Assembled frame of %d bytes", len(frame))
            return frame
        return None

    def feed_many(self, data: Iterable[int]) -> list[bytes]:
        """Feed a run of bytes, returning every frame completed along the way."""
        frames: list[bytes] = []
        for byte in data:
            frame = self.feed(byte)
            if frame is not None:
                frames.append(frame)
        return frames

    def reset(self) -> None:
        self._buffer.clear()
        self._buffering = False
