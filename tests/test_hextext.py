import pytest

from dobotlink.hextext import (
    HexFormatError,
    format_hex,
    hex_digit,
    parse_hex_bytes,
    spaced_hex,
)


@pytest.mark.parametrize("char", list("0123456789abcdefABCDEF"))
def test_hex_digit_matches_int_parsing(char):
    assert hex_digit(char) == int(char, 16)


def test_hex_digit_space_is_none():
    assert hex_digit(" ") is None


@pytest.mark.parametrize("char", ["g", "G", "x", "-", "\t", "z"])
def test_hex_digit_rejects_other_characters(char):
    with pytest.raises(HexFormatError):
        hex_digit(char)


def test_hex_format_error_is_value_error():
    with pytest.raises(ValueError):
        hex_digit("q")


def test_parse_two_digit_bytes():
    assert parse_hex_bytes("AA BB 0f", 10) == bytes.fromhex("aabb0f")


def test_parse_adjacent_pairs_without_spaces():
    assert parse_hex_bytes("aabbcc", 10) == bytes.fromhex("aabbcc")


def test_parse_single_digit_before_space_is_own_byte():
    assert parse_hex_bytes("4 11", 10) == bytes([4, 0x11])


def test_parse_trailing_single_digit_is_own_byte():
    assert parse_hex_bytes("11 4", 10) == bytes([0x11, 4])


def test_parse_single_digit_alone():
    assert parse_hex_bytes("0", 1) == bytes([0])


def test_parse_empty_text():
    assert parse_hex_bytes("", 5) == b""


def test_parse_only_spaces():
    assert parse_hex_bytes("    ", 5) == b""


def test_parse_stops_at_limit():
    assert parse_hex_bytes("01 02 03 04", 2) == bytes([1, 2])


def test_parse_ignores_bad_characters_after_limit():
    assert parse_hex_bytes("01 zz", 1) == bytes([1])


def test_parse_raises_on_bad_character_before_limit():
    with pytest.raises(HexFormatError):
        parse_hex_bytes("01 zz", 4)


def test_parse_limit_zero_gives_nothing():
    assert parse_hex_bytes("ff", 0) == b""


def test_parse_three_digits_in_a_row():
    # the third digit starts a new byte which ends with the text
    assert parse_hex_bytes("abc", 4) == bytes([0xAB, 0xC])


def test_format_hex_pins_layout():
    assert format_hex(bytes([0xAA, 0xBB, 0x01])) == "AA BB 01 "


def test_format_hex_empty():
    assert format_hex(b"") == ""


def test_format_hex_length_invariant():
    data = bytes(range(256))
    assert len(format_hex(data)) == 3 * len(data)


@pytest.mark.parametrize(
    "data", [b"", b"\x00", bytes(range(256)), b"\xff\x10\x0a"]
)
def test_format_then_parse_round_trip(data):
    assert parse_hex_bytes(format_hex(data), len(data)) == data


def test_spaced_hex_ascii():
    assert spaced_hex("abc") == "61 62 63"


def test_spaced_hex_empty():
    assert spaced_hex("") == ""


def test_spaced_hex_single_character():
    assert spaced_hex("A") == "41"


def test_spaced_hex_non_latin1_becomes_question_mark():
    assert spaced_hex("\u4e2d") == spaced_hex("?")


def test_spaced_hex_agrees_with_format_hex():
    text = "Hello\xe9!"
    assert spaced_hex(text) == format_hex(text.encode("latin-1")).strip().lower()


def test_spaced_hex_round_trip():
    text = "MagicianGO"
    parsed = parse_hex_bytes(spaced_hex(text), len(text))
    assert parsed.decode("latin-1") == text