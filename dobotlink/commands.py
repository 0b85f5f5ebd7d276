"""Commands as entered by the user, turned into protocol packets.

A command holds the header fields of a Dobot or DobotV3 packet together
with its parameters. Commands are built from the hex text fields the user
fills in. A command can be turned into the packet that goes on the wire. It
can also tell whether a received packet is a reply to it, which is how
firmware update traffic is told apart from other traffic.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields as dataclass_fields

from dobotlink.dobot_format import DobotPacket
from dobotlink.dobotv3_format import DobotV3Packet
from dobotlink.hextext import parse_hex_bytes

PARAMS_LIMIT = 512
PAYLOAD_LIMIT = 512
SEQ_NUM_SIZE = 4


def _byte_field(text: str) -> int:
    """Parse a one-byte hex field; an empty field leaves the byte at zero."""
    parsed = parse_hex_bytes(text, 1)
    return parsed[0] if parsed else 0


@dataclass(frozen=True)
class DobotCommand:
    """Header and parameters of a Dobot protocol command."""

    id: int = 0
    rw: int = 0
    is_queue: int = 0
    device: int = 0
    param: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "param", bytes(self.param))

    def to_packet(self) -> DobotPacket:
        """Return the packet that carries this command."""
        return DobotPacket(
            id=self.id,
            rw=self.rw,
            is_queued=self.is_queue,
            device=self.device,
            params=self.param,
        )

    def matches_reply(self, packet: DobotPacket) -> bool:
        """Tell whether ``packet`` has the same id, rw and queue flag as this command."""
        return (
            self.id == packet.id
            and self.rw == packet.rw
            and self.is_queue == packet.is_queued
        )

    @classmethod
    def from_text(
        cls,
        id_text: str,
        rw_text: str,
        queue_text: str,
        device_text: str,
        param_text: str = "",
    ) -> DobotCommand:
        """Build a command from hex text fields.

        Raises HexFormatError when a field holds a character that is neither
        a hex digit nor a space.
        """
        return cls(
            id=_byte_field(id_text),
            rw=_byte_field(rw_text),
            is_queue=_byte_field(queue_text),
            device=_byte_field(device_text),
            param=parse_hex_bytes(param_text, PARAMS_LIMIT),
        )


@dataclass(frozen=True)
class DobotV3Command:
    """Header and payload of a DobotV3 protocol command."""

    ver: int = 0
    nack: int = 0
    is_ack: int = 0
    rw: int = 0
    ctype: int = 0
    enc: int = 0
    seq: int = 0
    seq_num: int = 0
    src: int = 0
    des: int = 0
    cmd_set: int = 0
    cmd_id: int = 0
    payload: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", bytes(self.payload))

    def to_packet(self) -> DobotV3Packet:
        """Return the packet that carries this command."""
        return DobotV3Packet(
            version=self.ver,
            need_ack=self.nack,
            is_ack=self.is_ack,
            rw=self.rw,
            cmd_type=self.ctype,
            enc_type=self.enc,
            seq_type=self.seq,
            seq_num=self.seq_num,
            src=self.src,
            des=self.des,
            cmd_set=self.cmd_set,
            cmd_id=self.cmd_id,
            payload=self.payload,
        )

    def matches_reply(self, packet: DobotV3Packet) -> bool:
        """Tell whether ``packet`` answers this command.

        Every header field must match, except that a reply comes from the
        command's destination and goes to its source.
        """
        return (
            self.ver == packet.version
            and self.nack == packet.need_ack
            and self.is_ack == packet.is_ack
            and self.rw == packet.rw
            and self.ctype == packet.cmd_type
            and self.enc == packet.enc_type
            and self.seq == packet.seq_type
            and self.seq_num == packet.seq_num
            and self.src == packet.des
            and self.des == packet.src
            and self.cmd_set == packet.cmd_set
            and self.cmd_id == packet.cmd_id
        )

    @classmethod
    def from_text(
        cls, fields: Mapping[str, str], payload_text: str = ""
    ) -> DobotV3Command:
        """Build a command from hex text fields keyed by header field name.

        Missing fields are zero. ``seq_num`` takes up to four bytes, the
        first typed byte being the least significant. Unknown field names
        raise ValueError; bad hex characters raise HexFormatError.
        """
        header_names = {f.name for f in dataclass_fields(cls)} - {"payload"}
        unknown = set(fields) - header_names
        if unknown:
            raise ValueError(f"unknown header fields: {', '.join(sorted(unknown))}")
        values: dict[str, int] = {}
        for name in sorted(header_names):
            text = fields.get(name, "")
            if name == "seq_num":
                values[name] = int.from_bytes(
                    parse_hex_bytes(text, SEQ_NUM_SIZE), "little"
                )
            else:
                values[name] = _byte_field(text)
        return cls(payload=parse_hex_bytes(payload_text, PAYLOAD_LIMIT), **values)


def firmware_update_header() -> DobotV3Command:
    """Return the DobotV3 header used to start a firmware update."""
    return DobotV3Command.from_text(
        {
            "ver": "11",
            "nack": "0",
            "is_ack": "0",
            "rw": "0",
            "ctype": "0",
            "enc": "0",
            "seq": "0",
            "seq_num": "0",
            "src": "0",
            "des": "4",
            "cmd_set": "0",
            "cmd_id": "15",
        }
    )