"""
Shared data types for the ABI JSON serializer.

Centralized dataclasses and enums describing the decoded ABI value tree
handed over by the decoder, and the formatting modes the serializer supports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Union

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ComponentType(Enum):
    ELEMENTARY = "elementary"
    FIXED_ARRAY = "fixed_array"  # T[n]
    DYNAMIC_ARRAY = "dynamic_array"  # T[]
    TUPLE = "tuple"


class ElementaryKind(Enum):
    INT = "int"
    UINT = "uint"
    ADDRESS = "address"
    BOOL = "bool"
    FIXED = "fixed"
    UFIXED = "ufixed"
    BYTES = "bytes"
    FUNCTION = "function"  # 24 bytes: address + selector
    STRING = "string"


class FormattingMode(Enum):
    OBJECTS = "objects"  # {"name": value, ...}
    FLAT_ARRAYS = "flat_arrays"  # [value, ...]
    SELF_DESCRIBING_ARRAYS = "self_describing_arrays"  # [{"name", "type", "value"}, ...]


# ---------------------------------------------------------------------------
# Value Tree Types
# ---------------------------------------------------------------------------

DecodedValue = Union[int, Decimal, bytes, bytearray, str, None]

JSONValue = Any


@dataclass(frozen=True)
class TypeDescriptor:
    """Classification of one node in the decoded value tree."""

    component_type: ComponentType
    type_string: str  # canonical signature, e.g. "uint256" or "(uint256,address)[]"
    key_name: str = ""
    elementary_kind: ElementaryKind | None = None

    def __str__(self) -> str:
        return self.type_string


@dataclass
class ValueNode:
    """
    One node of a decoded ABI value tree.

    Elementary nodes carry a decoded ``value`` and no children. Arrays and
    tuples carry ordered ``children`` and a ``None`` value.
    """

    component: TypeDescriptor | None
    value: DecodedValue = None
    children: list[ValueNode] = field(default_factory=list)
