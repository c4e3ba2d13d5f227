"""Tests for byte size display units."""

import pytest

from registry_usage.exceptions import ConfigurationError
from registry_usage.utils.units import (
    DEFAULT_UNIT,
    DisplayUnit,
    format_size,
    parse_unit,
)


def test_format_size_exact_units():
    """Test exact one-unit conversions."""
    assert format_size(2**30, DisplayUnit.GIB) == "1.00 GiB"
    assert format_size(1000, DisplayUnit.KB) == "1.00 KB"
    assert format_size(0, DisplayUnit.BYTES) == "0 bytes"
    assert format_size(1024, DisplayUnit.KIB) == "1.00 KiB"
    assert format_size(10**6, DisplayUnit.MB) == "1.00 MB"
    assert format_size(2**20, DisplayUnit.MIB) == "1.00 MiB"
    assert format_size(10**9, DisplayUnit.GB) == "1.00 GB"


def test_format_size_rounds_to_two_decimals():
    """Test that fractional values keep two decimals."""
    assert format_size(1536, DisplayUnit.KIB) == "1.50 KiB"
    assert format_size(1, DisplayUnit.KB) == "0.00 KB"
    assert format_size(123_456_789, DisplayUnit.MB) == "123.46 MB"
    assert format_size(5 * 2**30, DisplayUnit.GIB) == "5.00 GiB"


def test_format_size_bytes_is_integer():
    """Test that bytes are printed without decimals."""
    assert format_size(2000, DisplayUnit.BYTES) == "2000 bytes"
    assert format_size(2**40, DisplayUnit.BYTES) == f"{2**40} bytes"


def test_format_size_default_unit():
    """Test that GiB is the default unit."""
    assert DEFAULT_UNIT is DisplayUnit.GIB
    assert format_size(2**31) == "2.00 GiB"


def test_unit_divisors():
    """Test the divisor table."""
    assert DisplayUnit.BYTES.divisor == 1
    assert DisplayUnit.KB.divisor == 1000
    assert DisplayUnit.KIB.divisor == 1024
    assert DisplayUnit.MB.divisor == 1_000_000
    assert DisplayUnit.MIB.divisor == 1 << 20
    assert DisplayUnit.GB.divisor == 1_000_000_000
    assert DisplayUnit.GIB.divisor == 1 << 30


@pytest.mark.parametrize(
    "value, expected",
    [
        ("bytes", DisplayUnit.BYTES),
        ("kb", DisplayUnit.KB),
        ("kib", DisplayUnit.KIB),
        ("mb", DisplayUnit.MB),
        ("mib", DisplayUnit.MIB),
        ("gb", DisplayUnit.GB),
        ("gib", DisplayUnit.GIB),
        ("GiB", DisplayUnit.GIB),
        (" MB ", DisplayUnit.MB),
    ],
)
def test_parse_unit(value, expected):
    """Test parsing of --format values."""
    assert parse_unit(value) is expected


@pytest.mark.parametrize("value", ["", "tb", "gigabytes", None])
def test_parse_unit_invalid(value):
    """Test that unknown units raise ConfigurationError."""
    with pytest.raises(ConfigurationError, match="Unknown format"):
        parse_unit(value)
