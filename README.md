# dobotlink

A library for the two serial framings that Dobot devices use, and for
building commands from the hex text a user types in.

- **Dobot**: `AA AA len id ctrl params... sum`, with a two's-complement
  byte checksum (`dobotlink.dobot_format`).
- **DobotV3**: `AA BB` plus a 15-byte header guarded by CRC-8, a payload of
  up to 1024 bytes and a trailing little-endian CRC-16 (`dobotlink.dobotv3_format`).

## Installing

```
pip install .
```

To run the tests, use `pip install .[test]` and then `pytest`.

## Building and checking packets

```python
from dobotlink.dobot_format import DobotPacket, FrameStatus, check_frame
from dobotlink.dobotv3_format import DobotV3Packet, crc8, crc16

frame = DobotPacket(id=10, rw=1, is_queued=0, device=0, params=b"\x01").encode()
assert check_frame(frame) is FrameStatus.VALID
packet = DobotPacket.decode(frame)

v3 = DobotV3Packet.decode(DobotV3Packet(cmd_id=0x15, payload=b"hi").encode())
```

Both `check_frame` functions take a buffer that starts at a frame boundary.
They return `FrameStatus.VALID`, `FrameStatus.INCOMPLETE` when more bytes are
needed to decide, or `FrameStatus.INVALID` as soon as a check fails. The
`decode` class methods raise `ValueError` for anything that is not a valid
frame. They ignore trailing bytes.

## Hex text

`dobotlink.hextext.parse_hex_bytes(text, limit)` reads text such as
`"0A 1 ff"` into at most `limit` bytes. Spaces separate values, and a lone
digit makes a byte of its own. A character that is neither a hex digit nor a
space raises `HexFormatError`. `format_hex` shows bytes as upper-case pairs,
each followed by a space. `spaced_hex` shows the Latin-1 bytes of a string as
lower-case pairs separated by spaces.

## Commands

`dobotlink.commands.DobotCommand.from_text` and
`DobotV3Command.from_text` build commands from hex text fields. `to_packet()`
turns a command into its wire packet. `matches_reply(packet)` tells whether a
received packet answers the command. For DobotV3, a reply has the source and
destination swapped. `firmware_update_header()` returns the fixed DobotV3
header used to start a firmware update.

## Firmware fields

`dobotlink.firmware_fields.FirmwareFields` holds the text fields that
describe a firmware image: device name, device address, eight version parts,
info address and program address. `FirmwareFields.from_version(file,
version)` fills them with the defaults. `validate()` checks and converts the
fields. It returns a dict with the name bytes, the addresses as integers, the
version bytes, and the `.bin` and `.Dfirm` paths. It raises
`FirmwareInfoError` naming the first bad field.

## What this package does not do

It does not open serial ports, run a monitor, or provide a command-line
program. It does not write `.Dfirm` files or carry out firmware updates. It
only encodes, decodes and checks frames and builds commands. Moving the bytes
is left to the caller.