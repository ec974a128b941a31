"""
Unit tests for core/encoders.py.

Tests cover:
- Integer strategies (decimal, signed hex, raw number, safe-range number)
- Fixed-point strategies and the safe-range boundary
- Byte strategies (hex, 0x hex, base64)
- Address strategies including EIP-55 checksums
- Strategy registries used by configuration
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from core.encoders import (
    ADDRESS_ENCODERS,
    BYTE_ENCODERS,
    FLOAT_ENCODERS,
    INT_ENCODERS,
    base10_string_float,
    base10_string_int,
    base64_bytes,
    checksum_addr,
    hex_addr_0x_prefix,
    hex_addr_plain,
    hex_bytes,
    hex_bytes_0x_prefix,
    hex_int_0x_prefix,
    json_number_int,
    number_if_fits_or_base10_string_float,
    number_if_fits_or_base10_string_int,
    numeric_default_name,
)
from tests.factories import MAX_SAFE, SAMPLE_ADDRESS, _d

# ===========================================================================
# Integers
# ===========================================================================


class TestIntEncoders:
    @pytest.mark.parametrize("value", [0, 1, -1, 2**255, -(2**255), 2**256 - 1])
    def test_base10_string_is_exact(self, value):
        assert base10_string_int(value) == str(value)

    def test_base10_string_uint256_max(self):
        assert base10_string_int(2**256 - 1) == (
            "115792089237316195423570985008687907853269984665640564039457584007913129639935"
        )

    def test_hex_positive(self):
        assert hex_int_0x_prefix(26) == "0x1a"

    def test_hex_negative_sign_before_prefix(self):
        assert hex_int_0x_prefix(-26) == "-0x1a"

    def test_hex_zero(self):
        assert hex_int_0x_prefix(0) == "0x0"

    def test_json_number_always_number(self):
        assert json_number_int(2**200) == 2**200
        assert isinstance(json_number_int(2**200), int)

    @pytest.mark.parametrize("value", [0, 42, -42, MAX_SAFE, -MAX_SAFE])
    def test_number_if_fits_inside_range(self, value):
        result = number_if_fits_or_base10_string_int(value)
        assert result == value
        assert not isinstance(result, str)

    @pytest.mark.parametrize("value", [MAX_SAFE + 1, -MAX_SAFE - 1, 2**256 - 1])
    def test_number_if_fits_outside_range_is_exact_string(self, value):
        assert number_if_fits_or_base10_string_int(value) == str(value)


# ===========================================================================
# Fixed point
# ===========================================================================


class TestFloatEncoders:
    def test_base10_string(self):
        assert base10_string_float(_d("1.5")) == "1.5"

    def test_base10_string_negative_small(self):
        assert base10_string_float(_d("-0.000001")) == "-0.000001"

    def test_base10_string_never_uses_exponent(self):
        assert base10_string_float(Decimal("1E+25")) == "10000000000000000000000000"

    def test_base10_string_accepts_int(self):
        assert base10_string_float(7) == "7"

    def test_number_if_fits_inside_range(self):
        assert number_if_fits_or_base10_string_float(_d("1.25")) == 1.25

    def test_number_if_fits_boundary(self):
        assert number_if_fits_or_base10_string_float(Decimal(MAX_SAFE)) == float(MAX_SAFE)
        assert number_if_fits_or_base10_string_float(Decimal(-MAX_SAFE)) == float(-MAX_SAFE)

    def test_number_if_fits_outside_range(self):
        assert number_if_fits_or_base10_string_float(Decimal(MAX_SAFE + 1)) == str(MAX_SAFE + 1)
        assert number_if_fits_or_base10_string_float(_d("-9007199254740991.5")) == (
            "-9007199254740991.5"
        )


# ===========================================================================
# Bytes
# ===========================================================================


class TestByteEncoders:
    def test_hex_lowercase_no_prefix(self):
        assert hex_bytes(b"\xde\xad\xBE\xef") == "deadbeef"

    def test_hex_0x_prefix(self):
        assert hex_bytes_0x_prefix(b"\x01\x02") == "0x0102"

    def test_hex_empty(self):
        assert hex_bytes(b"") == ""
        assert hex_bytes_0x_prefix(b"") == "0x"

    def test_base64_standard_alphabet(self):
        assert base64_bytes(b"hello") == "aGVsbG8="
        assert base64_bytes(b"\xfb\xff") == "+/8="


# ===========================================================================
# Addresses
# ===========================================================================


class TestAddressEncoders:
    ADDR = bytes.fromhex(SAMPLE_ADDRESS[2:])

    def test_hex_0x_prefix_is_lowercase(self):
        assert hex_addr_0x_prefix(self.ADDR) == SAMPLE_ADDRESS.lower()

    def test_plain_matches_0x_prefix(self):
        assert hex_addr_plain(self.ADDR) == hex_addr_0x_prefix(self.ADDR)

    def test_checksum(self):
        assert checksum_addr(self.ADDR) == SAMPLE_ADDRESS

    def test_checksum_eip55_vector(self):
        addr = bytes.fromhex("5aaeb6053f3e94c9b9a09f33669435e7ef1beaed")
        assert checksum_addr(addr) == "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


# ===========================================================================
# Names and registries
# ===========================================================================


class TestRegistries:
    def test_numeric_default_name(self):
        assert numeric_default_name(0) == "0"
        assert numeric_default_name(12) == "12"

    def test_registries_expose_all_strategies(self):
        assert set(INT_ENCODERS) == {"base10_string", "hex_0x_prefix", "json_number", "number_if_fits"}
        assert set(FLOAT_ENCODERS) == {"base10_string", "number_if_fits"}
        assert set(BYTE_ENCODERS) == {"hex", "hex_0x_prefix", "base64"}
        assert set(ADDRESS_ENCODERS) == {"hex_0x_prefix", "hex_plain", "checksum"}
