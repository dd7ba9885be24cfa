"""Analog Rytm SysEx codec.

Frame layout (all data bytes 7-bit)::

    F0 00 20 3C 07 <dev> <id> 01 <slot-hi> <slot-lo> 00 00 00 05
       <payload...> <checksum-hi> <checksum-lo> <length-hi> <length-lo> F7

- ``id`` is the dump id of the object family (requests use ``id + 0x10``).
- The slot is 14 bits wide: ``slot-hi = 1 + (slot >> 7)``. Slots 0x80 and
  up address work buffers (sounds 0x80..0x8B for the 12 work-buffer sounds).
- The checksum is the 14-bit sum of the bytes from ``slot-lo`` through the
  end of the payload; the length counts the bytes from ``slot-lo`` up to,
  not including, ``F7``.
- The payload is 7-bit packed: every group of up to 7 raw bytes is preceded
  by one byte carrying their high bits (bit 6 for the first byte).

Usage::

    codec = ElektronSysexCodec()
    selector = codec.apply(project, frame)
    request = prepare_query(values_from_text("kit 3"), device_id=0)
    frame = prepare_sysex(project, values_from_text("kit 3"), device_id=0)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import mido

from fcp_rytm.errors import (
    CodecError,
    InvalidQueryFormat,
    InvalidSendFormat,
    QueryError,
    StateError,
)
from fcp_rytm.model.project import Project
from fcp_rytm.parser.selector import ObjectTypeSelector, resolve, resolve_values
from fcp_rytm.parser.value import ValueList

logger = logging.getLogger(__name__)

ELEKTRON_ID = (0x00, 0x20, 0x3C)
RYTM_PRODUCT_ID = 0x07
QUERY_OFFSET = 0x10
WORK_BUFFER_SLOT = 0x80

HEADER_LEN = 14
TRAILER_LEN = 5  # checksum (2) + length (2) + F7
SLOT_LO_POS = 9

# family -> dump id
DUMP_IDS: dict[str, int] = {
    "kit": 0x52,
    "sound": 0x53,
    "pattern": 0x54,
    "settings": 0x56,
    "global": 0x57,
}
_FAMILY_BY_ID = {v: k for k, v in DUMP_IDS.items()}

# Fixed header bytes after the slot.
_HEADER_TAIL = (0x00, 0x00, 0x00, 0x05)


@dataclass(frozen=True)
class Dump:
    """A decoded object dump."""

    selector: ObjectTypeSelector
    device_id: int
    payload: bytes


# ---------------------------------------------------------------------------
# 7-bit packing
# ---------------------------------------------------------------------------

def pack_7bit(data: bytes) -> bytes:
    out = bytearray()
    for start in range(0, len(data), 7):
        chunk = data[start:start + 7]
        high = 0
        for i, b in enumerate(chunk):
            if b & 0x80:
                high |= 1 << (6 - i)
        out.append(high)
        out.extend(b & 0x7F for b in chunk)
    return bytes(out)


def unpack_7bit(data: bytes) -> bytes:
    out = bytearray()
    for start in range(0, len(data), 8):
        group = data[start:start + 8]
        if len(group) < 2:
            raise CodecError(f"Truncated 7-bit group at payload offset {start}.")
        high = group[0]
        for i, b in enumerate(group[1:]):
            out.append(b | 0x80 if high & (1 << (6 - i)) else b)
    return bytes(out)


def checksum(data: bytes) -> int:
    return sum(data) & 0x3FFF


def _split14(value: int) -> tuple[int, int]:
    return (value >> 7) & 0x7F, value & 0x7F


def _join14(hi: int, lo: int) -> int:
    return (hi << 7) | lo


# ---------------------------------------------------------------------------
# Selector <-> slot
# ---------------------------------------------------------------------------

def slot_for(selector: ObjectTypeSelector) -> int:
    if selector.family == "settings":
        return 0
    if selector.kind == "sound_wb":
        return WORK_BUFFER_SLOT + selector.index
    if selector.is_work_buffer:
        return WORK_BUFFER_SLOT
    return selector.index


def selector_for(dump_id: int, slot: int) -> ObjectTypeSelector:
    family = _FAMILY_BY_ID.get(dump_id)
    if family is None:
        raise CodecError(f"Unknown object type 0x{dump_id:02X}.")
    if family == "settings":
        return resolve("settings")
    try:
        if slot < WORK_BUFFER_SLOT:
            return resolve(family, slot)
        if family == "sound":
            return resolve("sound_wb", slot - WORK_BUFFER_SLOT)
        if slot == WORK_BUFFER_SLOT:
            return resolve(f"{family}_wb")
    except ValueError as exc:
        raise CodecError(f"Invalid slot {slot} for {family}: {exc}") from exc
    raise CodecError(f"Invalid slot {slot} for {family}.")


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------

class ElektronSysexCodec:
    """Encode and decode Analog Rytm object dumps."""

    def encode(self, selector: ObjectTypeSelector, payload: bytes, device_id: int = 0) -> bytes:
        slot = slot_for(selector)
        body = bytes((slot & 0x7F,)) + bytes(_HEADER_TAIL) + pack_7bit(payload)
        frame = bytearray((0xF0, *ELEKTRON_ID, RYTM_PRODUCT_ID, device_id,
                           DUMP_IDS[selector.family], 0x01, 1 + (slot >> 7)))
        frame.extend(body)
        frame.extend(_split14(checksum(body)))
        frame.extend(_split14(len(body) + 4))
        frame.append(0xF7)
        return _validated(bytes(frame))

    def decode(self, frame: bytes) -> Dump:
        frame = _validated(frame)
        if len(frame) < HEADER_LEN + TRAILER_LEN:
            raise CodecError(f"Frame too short ({len(frame)} bytes) for an object dump.")
        if tuple(frame[1:4]) != ELEKTRON_ID:
            raise CodecError("Not an Elektron message (manufacturer id mismatch).")
        if frame[4] != RYTM_PRODUCT_ID:
            raise CodecError(f"Not an Analog Rytm message (product id 0x{frame[4]:02X}).")

        device_id = frame[5]
        dump_id = frame[6]
        if frame[8] < 1:
            raise CodecError(f"Invalid slot high byte 0x{frame[8]:02X}.")
        slot = ((frame[8] - 1) << 7) | frame[9]
        selector = selector_for(dump_id, slot)

        body = frame[SLOT_LO_POS:-TRAILER_LEN]
        expected_sum = _join14(frame[-5], frame[-4])
        if checksum(body) != expected_sum:
            raise CodecError(
                f"Checksum mismatch: expected 0x{expected_sum:04X}, got 0x{checksum(body):04X}."
            )
        expected_len = _join14(frame[-3], frame[-2])
        if len(frame) - 10 != expected_len:
            raise CodecError(
                f"Length mismatch: header says {expected_len}, frame carries {len(frame) - 10}."
            )

        payload = unpack_7bit(frame[HEADER_LEN:-TRAILER_LEN])
        return Dump(selector, device_id, payload)

    def apply(self, project: Project, frame: bytes) -> ObjectTypeSelector:
        """Decode *frame* and store its payload on the addressed object."""
        dump = self.decode(frame)
        project.get(dump.selector).dump = dump.payload
        logger.info("Applied %d byte dump to %s", len(dump.payload), dump.selector)
        return dump.selector

    def dump_frame(self, project: Project, selector: ObjectTypeSelector, device_id: int = 0) -> bytes:
        """Encode the dump stored on the object at *selector* as one frame."""
        payload = project.get(selector).dump
        if payload is None:
            raise StateError(
                f"{selector} has no stored dump. Receive one from the device first."
            )
        return self.encode(selector, payload, device_id)

    def query(self, selector: ObjectTypeSelector, device_id: int = 0) -> bytes:
        slot = slot_for(selector)
        frame = bytes((
            0xF0, *ELEKTRON_ID, RYTM_PRODUCT_ID, device_id,
            DUMP_IDS[selector.family] + QUERY_OFFSET, 0x01, 1 + (slot >> 7), slot & 0x7F,
            *_HEADER_TAIL, 0xF7,
        ))
        return _validated(frame)


def _validated(frame: bytes) -> bytes:
    """Check *frame* is a well-formed MIDI SysEx message via mido."""
    try:
        msg = mido.Message.from_bytes(list(frame))
    except (ValueError, TypeError) as exc:
        raise CodecError(f"Malformed SysEx frame: {exc}") from exc
    if msg.type != "sysex":
        raise CodecError(f"Expected a SysEx message, got {msg.type}.")
    return bytes(msg.bytes())


def prepare_query(values: ValueList, device_id: int = 0) -> bytes:
    """Build the dump request frame for the selector in *values*."""
    if not values:
        raise InvalidQueryFormat()
    if not 0 <= device_id <= 0x7F:
        raise QueryError(f"Device id {device_id} is out of range. It must be between 0 and 127.")
    selector, consumed = resolve_values(values)
    if consumed != len(values):
        raise InvalidQueryFormat()
    request = ElektronSysexCodec().query(selector, device_id)
    logger.debug("query %s -> %s", selector, request.hex(" "))
    return request




def prepare_sysex(project: Project, values: ValueList, device_id: int = 0) -> bytes:
    """Build the dump frame carrying the stored dump of the selected object."""
    if not values:
        raise InvalidSendFormat()
    if not 0 <= device_id <= 0x7F:
        raise QueryError(f"Device id {device_id} is out of range. It must be between 0 and 127.")
    selector, consumed = resolve_values(values)
    if consumed != len(values):
        raise InvalidSendFormat()
    frame = ElektronSysexCodec().dump_frame(project, selector, device_id)
    logger.debug("send %s (%d bytes)", selector, len(frame))
    return frame
