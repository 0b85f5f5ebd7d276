"""Conversion between byte strings and the hex text typed or shown by the user."""

from __future__ import annotations

_DIGITS = {char: int(char, 16) for char in "0123456789abcdefABCDEF"}


class HexFormatError(ValueError):
    """The text holds a character that is neither a hex digit nor a space."""


def hex_digit(char: str) -> int | None:
    """Return the value of one hex digit, or None for a space.

    Any other character raises HexFormatError.
    """
    if char == " ":
        return None
    try:
        return _DIGITS[char]
    except KeyError:
        raise HexFormatError(f"invalid hex character {char!r}") from None


def parse_hex_bytes(text: str, limit: int) -> bytes:
    """Parse hex text such as ``"AA 1 ff"`` into at most ``limit`` bytes.

    Two digits in a row make one byte; a single digit followed by a space or
    by the end of the text makes a byte of its own. Spaces are otherwise
    skipped. Once ``limit`` bytes are read, the rest of the text is ignored.
    A bad character met before then raises HexFormatError.
    """
    result = bytearray()
    pending: int | None = None
    for char in text:
        if len(result) >= limit:
            break
        value = hex_digit(char)
        if value is None:
            if pending is not None:
                result.append(pending)
                pending = None
            continue
        if pending is None:
            pending = value
        else:
            result.append((pending << 4) | value)
            pending = None
    if pending is not None:
        result.append(pending)
    return bytes(result)


def format_hex(data: bytes) -> str:
    """Show each byte as two upper-case hex digits followed by a space."""
    return "".join(f"{byte:02X} " for byte in bytes(data))


def spaced_hex(text: str) -> str:
    """Show the Latin-1 bytes of ``text`` as lower-case hex pairs separated by spaces.

    Characters outside Latin-1 are shown as ``?``.
    """
    return " ".join(f"{byte:02x}" for byte in text.encode("latin-1", errors="replace"))