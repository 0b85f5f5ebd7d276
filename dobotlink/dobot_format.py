"""Framing for the original Dobot serial protocol.

A frame on the wire looks like this::

    AA AA <len> <id> <ctrl> <params...> <checksum>

``len`` counts the id byte, the control byte and the parameters.
``checksum`` is the two's complement of the byte sum of those ``len``
bytes, so the bytes and the checksum together add up to zero modulo 256.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

SOF = 0xAA
PACKET_LENGTH = 255
PAYLOAD_LENGTH = PACKET_LENGTH - 4
PARAMS_LENGTH = PAYLOAD_LENGTH - 2

# The length byte must stay below PAYLOAD_LENGTH for a receiver to accept it.
MAX_ENCODED_PARAMS = PAYLOAD_LENGTH - 3

HEADER_LENGTH = 3  # two start bytes and the length byte
UPDATE_ID = 255


class FrameStatus(enum.Enum):
    """Outcome of checking the bytes received so far against the frame format."""

    INCOMPLETE = "incomplete"
    VALID = "valid"
    INVALID = "invalid"


def checksum(data: bytes) -> int:
    """Return the byte that makes the sum of ``data`` plus itself zero modulo 256."""
    return (256 - sum(data)) & 0xFF


def check_frame(data: bytes) -> FrameStatus:
    """Check a buffer that starts at a frame boundary.

    The start bytes, the length byte and the checksum are checked in turn;
    as soon as a check fails the frame is invalid, and when more bytes are
    needed to decide, the frame is incomplete.
    """
    data = bytes(data)
    if not data:
        return FrameStatus.INCOMPLETE
    if data[0] != SOF:
        return FrameStatus.INVALID
    if len(data) < 2:
        return FrameStatus.INCOMPLETE
    if data[1] != SOF:
        return FrameStatus.INVALID
    if len(data) < 3:
        return FrameStatus.INCOMPLETE
    length = data[2]
    if not 2 <= length < PAYLOAD_LENGTH:
        return FrameStatus.INVALID
    total = length + HEADER_LENGTH + 1
    if len(data) < total:
        return FrameStatus.INCOMPLETE
    if sum(data[HEADER_LENGTH:total]) & 0xFF:
        return FrameStatus.INVALID
    return FrameStatus.VALID


@dataclass(frozen=True)
class DobotPacket:
    """One command or reply of the Dobot protocol.

    ``rw`` and ``is_queued`` are single bits and ``device`` is two bits of
    the control byte; wider values are truncated on encoding.
    """

    id: int
    rw: int = 0
    is_queued: int = 0
    device: int = 0
    params: bytes = b""

    def __post_init__(self) -> None:
        if not 0 <= self.id <= 0xFF:
            raise ValueError(f"command id out of range: {self.id}")
        object.__setattr__(self, "params", bytes(self.params))
        if len(self.params) > MAX_ENCODED_PARAMS:
            raise ValueError(
                f"params too long: {len(self.params)} > {MAX_ENCODED_PARAMS}"
            )

    @property
    def control(self) -> int:
        """The control byte built from rw, is_queued and device."""
        return (self.rw & 1) | ((self.is_queued & 1) << 1) | ((self.device & 3) << 4)

    def encode(self) -> bytes:
        """Return the complete frame for this packet."""
        body = bytes([self.id, self.control]) + self.params
        return bytes([SOF, SOF, len(body)]) + body + bytes([checksum(body)])

    @classmethod
    def decode(cls, data: bytes) -> DobotPacket:
        """Parse the frame at the start of ``data``; trailing bytes are ignored."""
        data = bytes(data)
        status = check_frame(data)
        if status is not FrameStatus.VALID:
            raise ValueError(f"not a valid Dobot frame ({status.value})")
        length = data[2]
        control = data[4]
        return cls(
            id=data[3],
            rw=control & 1,
            is_queued=(control >> 1) & 1,
            device=(control >> 4) & 3,
            params=data[5 : HEADER_LENGTH + length],
        )