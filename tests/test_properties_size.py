# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import pytest

from lq_lib.core.error import LQError
from lq_lib.properties.size import Size


@pytest.mark.parametrize(
    "value,unit,expected_kb",
    [(1, "kb", 1), (1, "mb", 1024), (2, "gb", 2 * 1024 * 1024), (1, "TB", 1024**3)],
)
def test_size_init_converts_to_kb(value, unit, expected_kb):
    assert Size(value, unit).value == expected_kb


def test_size_init_invalid_unit():
    with pytest.raises(LQError, match="Unsupported unit"):
        Size(1, "pb")


@pytest.mark.parametrize(
    "string,expected_kb",
    [
        ("16318412 kB", 16318412),
        ("8gb", 8 * 1024 * 1024),
        ("4G", 4 * 1024 * 1024),
        ("  512 mb ", 512 * 1024),
    ],
)
def test_size_from_string(string, expected_kb):
    assert Size.fromString(string).value == expected_kb


@pytest.mark.parametrize("string", ["", "kB", "12", "1.5 GB", "12 parsecs"])
def test_size_from_string_invalid(string):
    with pytest.raises(LQError):
        Size.fromString(string)


@pytest.mark.parametrize(
    "string,expected_gb",
    [
        ("16318412 kB", 15),
        ("16777216 kB", 16),
        ("16777215 kB", 15),
        ("1048575 kB", 0),
        ("3 GB", 3),
    ],
)
def test_size_to_gb_rounds_down(string, expected_gb):
    assert Size.fromString(string).toGB() == expected_gb
