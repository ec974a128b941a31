"""
Pluggable encoding strategies for the ABI JSON serializer.

Each strategy is a pure function mapping one decoded scalar to a JSON-ready
value. Strategies hold no state and can be swapped on a Serializer without
touching the tree walker.

Usage:
    from core.encoders import number_if_fits_or_base10_string_int, checksum_addr
    from core.serializer import Serializer

    s = Serializer().set_int_encoder(number_if_fits_or_base10_string_int)
    s.set_address_encoder(checksum_addr)
"""

from __future__ import annotations

import base64
from decimal import Decimal
from typing import Callable, Union

from web3 import Web3

from shared.constants import (
    MAX_SAFE_JSON_NUMBER_FLOAT,
    MAX_SAFE_JSON_NUMBER_INT,
    MIN_SAFE_JSON_NUMBER_FLOAT,
    MIN_SAFE_JSON_NUMBER_INT,
)
from shared.types import JSONValue

IntEncoder = Callable[[int], JSONValue]
FloatEncoder = Callable[[Decimal], JSONValue]
ByteEncoder = Callable[[bytes], JSONValue]
AddressEncoder = Callable[[bytes], JSONValue]  # always exactly 20 bytes
DefaultNameGenerator = Callable[[int], str]

Number = Union[int, Decimal]

# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------


def base10_string_int(i: int) -> JSONValue:
    return str(i)


def hex_int_0x_prefix(i: int) -> JSONValue:
    """Signed hex: the sign goes in front of the prefix (-0x1a)."""
    sign = "-" if i < 0 else ""
    return f"{sign}0x{abs(i):x}"


def json_number_int(i: int) -> JSONValue:
    """Always a JSON number. Exact in the output, but unsafe for JS clients above 2^53."""
    return int(i)


def number_if_fits_or_base10_string_int(i: int) -> JSONValue:
    if i > MAX_SAFE_JSON_NUMBER_INT or i < MIN_SAFE_JSON_NUMBER_INT:
        return str(i)
    return int(i)


# ---------------------------------------------------------------------------
# Floats (fixed / ufixed)
# ---------------------------------------------------------------------------


def base10_string_float(f: Number) -> JSONValue:
    """Positional decimal notation, never exponent form."""
    return format(Decimal(f), "f")


def number_if_fits_or_base10_string_float(f: Number) -> JSONValue:
    """
    JSON number when the magnitude is inside the safe range, else a decimal string.

    Lossy: values inside the range still go through a 53-bit mantissa.
    """
    d = Decimal(f)
    if not d.is_finite() or d > MAX_SAFE_JSON_NUMBER_FLOAT or d < MIN_SAFE_JSON_NUMBER_FLOAT:
        return format(d, "f")
    return float(d)


# ---------------------------------------------------------------------------
# Bytes
# ---------------------------------------------------------------------------


def hex_bytes(b: bytes) -> JSONValue:
    return bytes(b).hex()


def hex_bytes_0x_prefix(b: bytes) -> JSONValue:
    return "0x" + bytes(b).hex()


def base64_bytes(b: bytes) -> JSONValue:
    return base64.standard_b64encode(bytes(b)).decode("ascii")


# ---------------------------------------------------------------------------
# Addresses (20 bytes)
# ---------------------------------------------------------------------------


def hex_addr_0x_prefix(addr: bytes) -> JSONValue:
    return "0x" + bytes(addr).hex()


def hex_addr_plain(addr: bytes) -> JSONValue:
    # Same rendering as hex_addr_0x_prefix
    return "0x" + bytes(addr).hex()


def checksum_addr(addr: bytes) -> JSONValue:
    """EIP-55 mixed-case checksum address."""
    return Web3.to_checksum_address("0x" + bytes(addr).hex())


# ---------------------------------------------------------------------------
# Default names
# ---------------------------------------------------------------------------


def numeric_default_name(idx: int) -> str:
    return str(idx)


# ---------------------------------------------------------------------------
# Registries (config name -> strategy)
# ---------------------------------------------------------------------------

INT_ENCODERS: dict[str, IntEncoder] = {
    "base10_string": base10_string_int,
    "hex_0x_prefix": hex_int_0x_prefix,
    "json_number": json_number_int,
    "number_if_fits": number_if_fits_or_base10_string_int,
}

FLOAT_ENCODERS: dict[str, FloatEncoder] = {
    "base10_string": base10_string_float,
    "number_if_fits": number_if_fits_or_base10_string_float,
}

BYTE_ENCODERS: dict[str, ByteEncoder] = {
    "hex": hex_bytes,
    "hex_0x_prefix": hex_bytes_0x_prefix,
    "base64": base64_bytes,
}

ADDRESS_ENCODERS: dict[str, AddressEncoder] = {
    "hex_0x_prefix": hex_addr_0x_prefix,
    "hex_plain": hex_addr_plain,
    "checksum": checksum_addr,
}
