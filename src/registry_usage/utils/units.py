"""Byte size display units."""

from enum import Enum

from ..exceptions import ConfigurationError


class DisplayUnit(Enum):
    """Display unit, valued by its ``--format`` name."""

    BYTES = "bytes"
    KB = "kb"
    KIB = "kib"
    MB = "mb"
    MIB = "mib"
    GB = "gb"
    GIB = "gib"

    @property
    def divisor(self) -> int:
        return _DIVISORS[self]

    @property
    def suffix(self) -> str:
        return _SUFFIXES[self]


_DIVISORS = {
    DisplayUnit.BYTES: 1,
    DisplayUnit.KB: 1000,
    DisplayUnit.KIB: 1024,
    DisplayUnit.MB: 1000**2,
    DisplayUnit.MIB: 1 << 20,
    DisplayUnit.GB: 1000**3,
    DisplayUnit.GIB: 1 << 30,
}

_SUFFIXES = {
    DisplayUnit.BYTES: "bytes",
    DisplayUnit.KB: "KB",
    DisplayUnit.KIB: "KiB",
    DisplayUnit.MB: "MB",
    DisplayUnit.MIB: "MiB",
    DisplayUnit.GB: "GB",
    DisplayUnit.GIB: "GiB",
}

DEFAULT_UNIT = DisplayUnit.GIB


def parse_unit(value: str) -> DisplayUnit:
    """Parse a ``--format`` value into a DisplayUnit.

    Args:
        value: Unit name, case-insensitive (e.g., "gib", "KB")

    Returns:
        Matching DisplayUnit

    Raises:
        ConfigurationError: If the unit is unknown
    """
    try:
        return DisplayUnit(value.strip().lower())
    except (ValueError, AttributeError) as e:
        choices = ", ".join(unit.value for unit in DisplayUnit)
        raise ConfigurationError(
            f"Unknown format {value!r}, expected one of: {choices}"
        ) from e


def format_size(size_bytes: int, unit: DisplayUnit = DEFAULT_UNIT) -> str:
    """Render a byte count in the given unit.

    Args:
        size_bytes: Size in bytes
        unit: Display unit

    Returns:
        "<n> bytes" for BYTES, otherwise the value with two decimals and the
        unit suffix (e.g., "1.00 GiB")
    """
    if unit is DisplayUnit.BYTES:
        return f"{size_bytes} {unit.suffix}"

    return f"{size_bytes / unit.divisor:.2f} {unit.suffix}"
