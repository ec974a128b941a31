"""
Shared constants for the ABI JSON serializer.

Numeric boundaries, address sizes, and default policy names used across all modules.
"""

from decimal import Decimal

# ---------------------------------------------------------------------------
# Numeric Constants
# ---------------------------------------------------------------------------

# IEEE 754 double precision safe integer limit (2^53 - 1)
MAX_SAFE_JSON_NUMBER_INT = 9_007_199_254_740_991
MIN_SAFE_JSON_NUMBER_INT = -9_007_199_254_740_991
MAX_SAFE_JSON_NUMBER_FLOAT = Decimal(MAX_SAFE_JSON_NUMBER_INT)
MIN_SAFE_JSON_NUMBER_FLOAT = Decimal(MIN_SAFE_JSON_NUMBER_INT)

# ---------------------------------------------------------------------------
# EVM Sizes
# ---------------------------------------------------------------------------

ADDRESS_LENGTH_BYTES = 20

# ---------------------------------------------------------------------------
# Default Policy Selection (names resolve through core.encoders registries)
# ---------------------------------------------------------------------------

DEFAULT_FORMATTING_MODE = "objects"
DEFAULT_INT_ENCODER = "base10_string"
DEFAULT_FLOAT_ENCODER = "base10_string"
DEFAULT_BYTE_ENCODER = "hex"
DEFAULT_ADDRESS_ENCODER = None  # None = fall back to the byte encoder
DEFAULT_PRETTY = False

# ---------------------------------------------------------------------------
# Output Formatting
# ---------------------------------------------------------------------------

PRETTY_INDENT = 2
COMPACT_SEPARATORS = (",", ":")
DEFAULT_LOCALE = "en"
