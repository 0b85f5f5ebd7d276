"""Framing for version 3 of the Dobot serial protocol.

A frame on the wire looks like this::

    AA BB <len:2> <ver> <ctrl> <seq:4> <src> <des> <set> <id> <hcrc> <payload...> <crc:2>

Multi-byte fields are little endian. ``len`` is the payload length.
``hcrc`` is a CRC-8 over the first fourteen header bytes, and ``crc`` is a
CRC-16 over the whole header and the payload.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from dobotlink.dobot_format import FrameStatus

VERSION = 0x10
SRC = 0x00

PAYLOAD_LENGTH = 1024
HEAD_LENGTH = 15
PACKET_LENGTH = PAYLOAD_LENGTH + HEAD_LENGTH
SOF1 = 0xAA
SOF2 = 0xBB
CRC_LENGTH = 2

_HEADER = struct.Struct("<BBHBBIBBBB")  # everything before the head check byte


def _crc8_table() -> tuple[int, ...]:
    table = []
    for value in range(256):
        crc = value
        for _ in range(8):
            crc = ((crc << 1) ^ (0x07 if crc & 0x80 else 0)) & 0xFF
        table.append(crc)
    return tuple(table)


def _crc16_table() -> tuple[int, ...]:
    table = []
    for value in range(256):
        crc = value
        for _ in range(8):
            crc = (crc >> 1) ^ 0xA001 if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_CRC8_TABLE = _crc8_table()
_CRC16_TABLE = _crc16_table()


def crc8(data: bytes) -> int:
    """CRC-8 with polynomial 0x07 and a zero start value."""
    crc = 0
    for byte in bytes(data):
        crc = _CRC8_TABLE[crc ^ byte]
    return crc


def crc16(data: bytes) -> int:
    """Reflected CRC-16 with polynomial 0xA001 and a zero start value."""
    crc = 0
    for byte in bytes(data):
        crc = (crc >> 8) ^ _CRC16_TABLE[(crc ^ byte) & 0xFF]
    return crc


def check_frame(data: bytes) -> FrameStatus:
    """Check a buffer that starts at a frame boundary.

    The start bytes, the payload length, the header check and the frame
    CRC are checked in turn; the first failing check makes the frame
    invalid, and when more bytes are needed to decide it is incomplete.
    """
    data = bytes(data)
    if not data:
        return FrameStatus.INCOMPLETE
    if data[0] != SOF1:
        return FrameStatus.INVALID
    if len(data) < 2:
        return FrameStatus.INCOMPLETE
    if data[1] != SOF2:
        return FrameStatus.INVALID
    if len(data) < 4:
        return FrameStatus.INCOMPLETE
    length = int.from_bytes(data[2:4], "little")
    if length > PAYLOAD_LENGTH:
        return FrameStatus.INVALID
    if len(data) < HEAD_LENGTH:
        return FrameStatus.INCOMPLETE
    if crc8(data[: HEAD_LENGTH - 1]) != data[HEAD_LENGTH - 1]:
        return FrameStatus.INVALID
    end = HEAD_LENGTH + length
    if len(data) < end + CRC_LENGTH:
        return FrameStatus.INCOMPLETE
    if crc16(data[:end]).to_bytes(2, "little") != data[end : end + CRC_LENGTH]:
        return FrameStatus.INVALID
    return FrameStatus.VALID


@dataclass(frozen=True)
class DobotV3Packet:
    """One command or reply of the version 3 protocol.

    ``need_ack``, ``is_ack``, ``rw``, ``cmd_type`` and ``seq_type`` are
    single bits and ``enc_type`` is three bits of the control byte; wider
    values are truncated on encoding.
    """

    version: int = 0
    need_ack: int = 0
    is_ack: int = 0
    rw: int = 0
    cmd_type: int = 0
    enc_type: int = 0
    seq_type: int = 0
    seq_num: int = 0
    src: int = 0
    des: int = 0
    cmd_set: int = 0
    cmd_id: int = 0
    payload: bytes = b""

    def __post_init__(self) -> None:
        for name in ("version", "src", "des", "cmd_set", "cmd_id"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} out of range: {value}")
        if not 0 <= self.seq_num <= 0xFFFFFFFF:
            raise ValueError(f"seq_num out of range: {self.seq_num}")
        object.__setattr__(self, "payload", bytes(self.payload))
        if len(self.payload) > PAYLOAD_LENGTH:
            raise ValueError(
                f"payload too long: {len(self.payload)} > {PAYLOAD_LENGTH}"
            )

    @property
    def control(self) -> int:
        """The control byte built from the flag fields."""
        return (
            (self.need_ack & 1)
            | ((self.is_ack & 1) << 1)
            | ((self.rw & 1) << 2)
            | ((self.cmd_type & 1) << 3)
            | ((self.enc_type & 7) << 4)
            | ((self.seq_type & 1) << 7)
        )

    def encode(self) -> bytes:
        """Return the complete frame for this packet."""
        header = _HEADER.pack(
            SOF1,
            SOF2,
            len(self.payload),
            self.version,
            self.control,
            self.seq_num,
            self.src,
            self.des,
            self.cmd_set,
            self.cmd_id,
        )
        body = header + bytes([crc8(header)]) + self.payload
        return body + crc16(body).to_bytes(2, "little")

    @classmethod
    def decode(cls, data: bytes) -> DobotV3Packet:
        """Parse the frame at the start of ``data``; trailing bytes are ignored."""
        data = bytes(data)
        status = check_frame(data)
        if status is not FrameStatus.VALID:
            raise ValueError(f"not a valid DobotV3 frame ({status.value})")
        (
            _sof1,
            _sof2,
            length,
            version,
            control,
            seq_num,
            src,
            des,
            cmd_set,
            cmd_id,
        ) = _HEADER.unpack_from(data)
        return cls(
            version=version,
            need_ack=control & 1,
            is_ack=(control >> 1) & 1,
            rw=(control >> 2) & 1,
            cmd_type=(control >> 3) & 1,
            enc_type=(control >> 4) & 7,
            seq_type=(control >> 7) & 1,
            seq_num=seq_num,
            src=src,
            des=des,
            cmd_set=cmd_set,
            cmd_id=cmd_id,
            payload=data[HEAD_LENGTH : HEAD_LENGTH + length],
        )