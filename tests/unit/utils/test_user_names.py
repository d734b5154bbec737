"""
Tests for user name normalization utilities.
"""

from __future__ import annotations

import pytest

from actorstore.utils.user_names import is_ip_address, normalize_user_name, sanitize_ip


class TestIsIpAddress:
    """Tests for is_ip_address()."""

    @pytest.mark.parametrize(
        "value",
        ["127.0.0.1", "010.000.000.001", "2001:db8::1", "::1", " 10.1.2.3 "],
    )
    def test_ip_literals(self, value: str) -> None:
        assert is_ip_address(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "TestUser",
            "256.1.1.1",
            "1.2.3",
            "1.2.3.4.5",
            "",
            "Foo:Bar",
            "12345",
            "\u0661\u0662\u0667.0.0.1",
        ],
    )
    def test_not_ip_literals(self, value: str) -> None:
        assert is_ip_address(value) is False


class TestSanitizeIp:
    """Tests for sanitize_ip()."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("127.0.0.1", "127.0.0.1"),
            ("010.001.000.255", "10.1.0.255"),
            ("2001:db8::1", "2001:DB8:0:0:0:0:0:1"),
            ("::1", "0:0:0:0:0:0:0:1"),
            ("2001:0DB8:0000:0000:0000:0000:0000:0001", "2001:DB8:0:0:0:0:0:1"),
            (
                "2600:1004:b14a:5ddd:3ebe:bba4:bfba:f37e",
                "2600:1004:B14A:5DDD:3EBE:BBA4:BFBA:F37E",
            ),
        ],
    )
    def test_canonical_forms(self, raw: str, expected: str) -> None:
        assert sanitize_ip(raw) == expected

    def test_non_ip_is_trimmed_only(self) -> None:
        assert sanitize_ip("  TestUser  ") == "TestUser"

    def test_idempotent(self) -> None:
        once = sanitize_ip("2001:db8::abcd")
        assert sanitize_ip(once) == once


class TestNormalizeUserName:
    """Tests for normalize_user_name()."""

    def test_preserves_case_of_user_names(self) -> None:
        assert normalize_user_name("testUser") == "testUser"

    def test_trims_whitespace(self) -> None:
        assert normalize_user_name("\tTestUser \n") == "TestUser"

    def test_ip_case_variants_collapse(self) -> None:
        assert normalize_user_name("2001:DB8::A") == normalize_user_name("2001:db8::a")

    def test_blank_name(self) -> None:
        assert normalize_user_name("   ") == ""

    def test_non_ascii_digits_are_not_rewritten(self) -> None:
        # Arabic-Indic digits look like an IPv4 literal but are a user name
        name = "\u0661\u0662\u0667.0.0.1"
        assert normalize_user_name(name) == name
