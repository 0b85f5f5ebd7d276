"""Firmware description fields, their defaults and their validation."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_DEVICE_NAME = "MagicianGO"
DEFAULT_DEVICE_ADDR = "4"
DEFAULT_INFO_ADDR = "800B000"
DEFAULT_PRO_ADDR = "800C000"
VERSION_PARTS = 8

_HEX_DIGITS = "0123456789abcdefABCDEF"


class FirmwareInfoError(ValueError):
    """A firmware field is missing or badly formatted."""


def parse_hex_reversed(text: str, size: int) -> int:
    """Parse hex digits from the end of ``text`` into an integer of ``size`` bytes.

    Spaces are skipped. At most ``size * 2`` digits are taken, counting from
    the right; anything further left is ignored, even if it is not a digit.
    A non-hex character met before that limit raises FirmwareInfoError.
    """
    value = 0
    taken = 0
    for char in reversed(text):
        if taken >= size * 2:
            break
        if char == " ":
            continue
        if char not in _HEX_DIGITS:
            raise FirmwareInfoError(f"invalid hex character {char!r}")
        value |= int(char, 16) << (4 * taken)
        taken += 1
    return value


def dfirm_path(bin_path: str) -> str:
    """Return the packaged firmware path for a raw ``.bin`` path."""
    return bin_path.replace(".bin", ".Dfirm")


@dataclass
class FirmwareFields:
    """The text fields that describe a firmware image to be packaged."""

    file: str
    device_name: str = ""
    device_addr: str = ""
    versions: tuple[str, ...] = field(default=("",) * VERSION_PARTS)
    info_addr: str = ""
    pro_addr: str = ""

    def __post_init__(self) -> None:
        self.versions = tuple(self.versions)
        if len(self.versions) != VERSION_PARTS:
            raise ValueError(f"expected {VERSION_PARTS} version parts")

    @classmethod
    def from_version(cls, file: str, version: str) -> FirmwareFields:
        """Fill the fields with the defaults, one version part per character."""
        if len(version) < VERSION_PARTS:
            raise FirmwareInfoError(
                f"version must have at least {VERSION_PARTS} characters"
            )
        return cls(
            file=file,
            device_name=DEFAULT_DEVICE_NAME,
            device_addr=DEFAULT_DEVICE_ADDR,
            versions=tuple(version[:VERSION_PARTS]),
            info_addr=DEFAULT_INFO_ADDR,
            pro_addr=DEFAULT_PRO_ADDR,
        )

    def validate(self) -> dict[str, object]:
        """Check and convert the fields.

        Returns the device name as bytes, the device, info and program
        addresses as integers, the eight version bytes, and the source and
        packaged file paths. Raises FirmwareInfoError naming the first bad field.
        """
        if not self.device_name:
            raise FirmwareInfoError("DeviceName is NULL")
        if not self.device_addr:
            raise FirmwareInfoError("DeviceAddr is NULL")
        if not any(self.versions):
            raise FirmwareInfoError("Version is NULL")
        if not self.info_addr:
            raise FirmwareInfoError("InfoAddr is NULL")
        if not self.pro_addr:
            raise FirmwareInfoError("ProAddr is NULL")

        name = self.device_name.encode("latin-1", errors="replace")
        device_address = _parse_field(self.device_addr, 4, "deviceAddr Format Err")
        version = bytes(
            _parse_field(part, 1, f"Version{number} Format Err")
            for number, part in enumerate(self.versions, start=1)
        )
        info_address = _parse_field(self.info_addr, 4, "infoAddr Format Err")
        program_address = _parse_field(self.pro_addr, 4, "proAddr Format Err")
        return {
            "name": name,
            "device_address": device_address,
            "version": version,
            "info_address": info_address,
            "program_address": program_address,
            "bin_path": self.file,
            "dfirm_path": dfirm_path(self.file),
        }


def _parse_field(text: str, size: int, message: str) -> int:
    try:
        return parse_hex_reversed(text, size)
    except FirmwareInfoError:
        raise FirmwareInfoError(message) from None