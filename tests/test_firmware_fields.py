import pytest

from dobotlink.firmware_fields import (
    FirmwareFields,
    FirmwareInfoError,
    dfirm_path,
    parse_hex_reversed,
)


def _fields(**overrides):
    values = dict(
        file="image.bin",
        device_name="Arm",
        device_addr="4",
        versions=("1",) * 8,
        info_addr="800B000",
        pro_addr="800C000",
    )
    values.update(overrides)
    return FirmwareFields(**values)


def test_parse_plain_hex():
    assert parse_hex_reversed("800B000", 4) == 0x800B000


def test_parse_skips_spaces():
    assert parse_hex_reversed("12 34", 2) == 0x1234


def test_parse_lower_and_upper_case_agree():
    assert parse_hex_reversed("abcd", 2) == parse_hex_reversed("ABCD", 2)


def test_parse_takes_only_rightmost_digits():
    assert parse_hex_reversed("zz1234", 2) == parse_hex_reversed("1234", 2)


def test_parse_empty_is_zero():
    assert parse_hex_reversed("", 4) == 0


def test_parse_rejects_bad_character():
    with pytest.raises(FirmwareInfoError):
        parse_hex_reversed("1g", 1)


def test_parse_result_fits_size():
    assert parse_hex_reversed("ffffffffff", 2) < 1 << 16


def test_dfirm_path_replaces_extension():
    assert dfirm_path("/tmp/fw.bin") == "/tmp/fw.Dfirm"


def test_dfirm_path_is_case_sensitive():
    assert dfirm_path("/tmp/fw.BIN") == "/tmp/fw.BIN"


def test_from_version_defaults():
    fields = FirmwareFields.from_version("fw.bin", "12345678")
    assert fields.device_name == "MagicianGO"
    assert fields.device_addr == "4"
    assert fields.info_addr == "800B000"
    assert fields.pro_addr == "800C000"
    assert fields.versions == tuple("12345678")


def test_from_version_validates():
    result = FirmwareFields.from_version("fw.bin", "12345678").validate()
    assert result["name"] == b"MagicianGO"
    assert result["device_address"] == 4
    assert result["version"] == bytes([1, 2, 3, 4, 5, 6, 7, 8])
    assert result["info_address"] == 0x800B000
    assert result["program_address"] == 0x800C000
    assert result["bin_path"] == "fw.bin"
    assert result["dfirm_path"] == "fw.Dfirm"


def test_from_version_too_short():
    with pytest.raises(FirmwareInfoError):
        FirmwareFields.from_version("fw.bin", "1234")


def test_wrong_number_of_version_parts():
    with pytest.raises(ValueError):
        FirmwareFields(file="fw.bin", versions=("1", "2"))


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"device_name": ""}, "DeviceName is NULL"),
        ({"device_addr": ""}, "DeviceAddr is NULL"),
        ({"versions": ("",) * 8}, "Version is NULL"),
        ({"info_addr": ""}, "InfoAddr is NULL"),
        ({"pro_addr": ""}, "ProAddr is NULL"),
        ({"device_addr": "x"}, "deviceAddr Format Err"),
        ({"versions": ("1", "2", "q", "4", "5", "6", "7", "8")}, "Version3 Format Err"),
        ({"info_addr": "80G"}, "infoAddr Format Err"),
        ({"pro_addr": "80G"}, "proAddr Format Err"),
    ],
)
def test_validate_errors(overrides, message):
    with pytest.raises(FirmwareInfoError, match=message):
        _fields(**overrides).validate()


def test_empty_fields_checked_before_format():
    with pytest.raises(FirmwareInfoError, match="ProAddr is NULL"):
        _fields(device_addr="bad", pro_addr="").validate()


def test_single_empty_version_part_is_zero():
    versions = ("1", "", "3", "4", "5", "6", "7", "8")
    result = _fields(versions=versions).validate()
    assert result["version"][1] == 0
    assert result["version"][0] == 1
    assert len(result["version"]) == 8