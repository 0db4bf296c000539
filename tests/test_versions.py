"""Tests for dotted version comparison."""

from __future__ import annotations

import pytest

from beads_doctor.versions import InvalidVersionError, compare_versions, first_difference, parse_version


class TestCompareVersions:
    @pytest.mark.parametrize(
        ("v1", "v2", "expected"),
        [
            ("0.20.1", "0.20.1", 0),
            ("0.20.1", "0.20.0", 1),
            ("0.20.0", "0.20.1", -1),
            ("0.10.0", "0.9.9", 1),
            ("1.0.0", "0.99.99", 1),
            ("0.20.1", "0.3.0", 1),  # lexical comparison gets this wrong
            ("1.2", "1.2.0", 0),
            ("1.2.1", "1.2", 1),
        ],
    )
    def test_compare(self, v1: str, v2: str, expected: int) -> None:
        assert compare_versions(v1, v2) == expected

    @pytest.mark.parametrize(("v1", "v2"), [("1", "1.0.0.0"), ("2.0", "2"), ("0.0.0", "0")])
    def test_trailing_zeros_are_equal(self, v1: str, v2: str) -> None:
        assert compare_versions(v1, v2) == 0
        assert compare_versions(v2, v1) == 0

    @pytest.mark.parametrize(
        ("v1", "v2"),
        [("0.20.1", "0.3.0"), ("1.2.1", "1.2"), ("10", "9"), ("0.1", "0.1.1"), ("3.4.5", "3.4.5")],
    )
    def test_antisymmetric(self, v1: str, v2: str) -> None:
        assert compare_versions(v1, v2) == -compare_versions(v2, v1)

    def test_empty_versions_equal(self) -> None:
        assert compare_versions("", "") == 0
        assert compare_versions("", "0.0") == 0
        assert compare_versions("", "0.0.1") == -1

    def test_multi_digit_segments(self) -> None:
        assert compare_versions("1.10", "1.9") == 1
        assert compare_versions("1.010", "1.10") == 0


class TestParseVersion:
    def test_parses_segments(self) -> None:
        assert parse_version("0.20.1") == (0, 20, 1)

    def test_empty(self) -> None:
        assert parse_version("") == ()

    @pytest.mark.parametrize("bad", ["1.x", "v1.2", "1..2", "1.-2", "1.2 ", "1.²"])
    def test_rejects_non_numeric(self, bad: str) -> None:
        with pytest.raises(InvalidVersionError):
            parse_version(bad)

    def test_compare_propagates_invalid(self) -> None:
        with pytest.raises(InvalidVersionError):
            compare_versions("1.2.beta", "1.2")

    def test_invalid_version_is_value_error(self) -> None:
        assert issubclass(InvalidVersionError, ValueError)


class TestFirstDifference:
    def test_equal(self) -> None:
        assert first_difference("1.2", "1.2.0") is None

    def test_index(self) -> None:
        assert first_difference("0.20.1", "0.21.0") == 1
        assert first_difference("1.2.3", "1.2.4") == 2
        assert first_difference("2", "1.9") == 0

    def test_padded_segment(self) -> None:
        assert first_difference("1.2", "1.2.0.1") == 3
