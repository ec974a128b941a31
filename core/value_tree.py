"""
Decoder boundary: build ValueNode trees from web3-style ABI definitions.

Takes the ABI parameter list of a function or event (the same
``{"name", "type", "components"}`` dicts web3 contracts are built from)
and the Python values web3 / eth-abi decode to, and produces the typed
value tree the serializer walks. Values are converted, not validated:
checksummed address strings become integers, hex strings become HexBytes,
numeric strings become int / Decimal.

Usage:
    from core.value_tree import build_value_tree

    params = [{"name": "owner", "type": "address"}, {"name": "amount", "type": "uint256"}]
    root = build_value_tree(params, ["0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045", 10**18])
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from eth_abi.exceptions import ParseError
from eth_abi.grammar import BasicType, parse
from hexbytes import HexBytes

from shared.constants import ADDRESS_LENGTH_BYTES
from shared.types import ComponentType, ElementaryKind, TypeDescriptor, ValueNode

_ARRAY_SUFFIX = re.compile(r"\[(\d*)\]$")

# Bare aliases and their canonical sizes
_DEFAULT_SUBS = {
    "int": "256",
    "uint": "256",
    "fixed": "128x18",
    "ufixed": "128x18",
}


class ValueTreeError(ValueError):
    """Raised when an ABI definition or a decoded value cannot be turned into a ValueNode."""


class AbiDefinitionError(ValueTreeError):
    """Malformed ABI parameter definition."""


class AbiValueError(ValueTreeError):
    """Decoded value does not fit its ABI parameter definition."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_value_tree(
    params: Sequence[Mapping[str, Any]], values: Sequence[Any] | Mapping[str, Any]
) -> ValueNode:
    """
    Build the root tuple node for a parameter list.

    ``values`` is positional (list / tuple), or a mapping keyed by parameter name.
    """
    children = _tuple_children(params, values, "")
    signature = "(" + ",".join(child.component.type_string for child in children) + ")"
    return ValueNode(TypeDescriptor(ComponentType.TUPLE, signature), children=children)


def build_node(param: Mapping[str, Any], value: Any) -> ValueNode:
    """Build the node for a single ABI parameter."""
    if not isinstance(param, Mapping) or not isinstance(param.get("type"), str):
        raise AbiDefinitionError(f"ABI parameter has no type: {param!r}")
    name = param.get("name") or ""
    return _build(param["type"], param.get("components"), name, value, name)


def type_signature(type_str: str, components: Sequence[Mapping[str, Any]] | None = None) -> str:
    """Canonical signature: 'uint' -> 'uint256', tuples -> '(t1,t2)', array suffixes kept."""
    match = _ARRAY_SUFFIX.search(type_str)
    if match:
        return type_signature(type_str[: match.start()], components) + f"[{match.group(1)}]"
    if type_str == "tuple":
        return "(" + ",".join(
            type_signature(c.get("type", ""), c.get("components"))
            for c in _components(components, type_str)
        ) + ")"
    return _canonical(_parse_basic(type_str))


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _build(
    type_str: str,
    components: Sequence[Mapping[str, Any]] | None,
    name: str,
    value: Any,
    where: str,
) -> ValueNode:
    match = _ARRAY_SUFFIX.search(type_str)
    if match:
        return _build_array(type_str, match, components, name, value, where)
    if type_str == "tuple":
        children = _tuple_children(_components(components, type_str), value, where)
        descriptor = TypeDescriptor(
            ComponentType.TUPLE, type_signature(type_str, components), key_name=name
        )
        return ValueNode(descriptor, children=children)
    return _build_elementary(type_str, name, value, where)


def _build_array(
    type_str: str,
    match: re.Match[str],
    components: Sequence[Mapping[str, Any]] | None,
    name: str,
    value: Any,
    where: str,
) -> ValueNode:
    if isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
        raise AbiValueError(f"{where or 'value'}: expected a list for {type_str}")
    size = match.group(1)
    if size and int(size) != len(value):
        raise AbiValueError(f"{where or 'value'}: expected {size} elements, got {len(value)}")

    inner = type_str[: match.start()]
    children = [
        _build(inner, components, "", item, f"{where}[{i}]") for i, item in enumerate(value)
    ]
    component_type = ComponentType.FIXED_ARRAY if size else ComponentType.DYNAMIC_ARRAY
    descriptor = TypeDescriptor(component_type, type_signature(type_str, components), key_name=name)
    return ValueNode(descriptor, children=children)


def _tuple_children(
    components: Sequence[Mapping[str, Any]], value: Any, where: str
) -> list[ValueNode]:
    for i, component in enumerate(components):
        if not isinstance(component, Mapping) or not isinstance(component.get("type"), str):
            raise AbiDefinitionError(f"{where or 'tuple'}: component {i} has no type")

    if isinstance(value, Mapping):
        try:
            value = [value[c.get("name")] for c in components]
        except KeyError as exc:
            raise AbiValueError(f"{where or 'value'}: missing field {exc.args[0]!r}") from exc
    elif isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Sequence):
        raise AbiValueError(f"{where or 'value'}: expected a tuple or mapping")
    if len(value) != len(components):
        raise AbiValueError(
            f"{where or 'value'}: expected {len(components)} fields, got {len(value)}"
        )

    children = []
    for i, (component, item) in enumerate(zip(components, value)):
        name = component.get("name") or ""
        children.append(
            _build(component["type"], component.get("components"), name, item, f"{where}[{name or i}]")
        )
    return children


def _build_elementary(type_str: str, name: str, value: Any, where: str) -> ValueNode:
    abi_type = _parse_basic(type_str)
    try:
        kind = ElementaryKind(abi_type.base)
    except ValueError as exc:
        raise AbiDefinitionError(f"Unsupported elementary type: {type_str}") from exc

    descriptor = TypeDescriptor(
        ComponentType.ELEMENTARY, _canonical(abi_type), key_name=name, elementary_kind=kind
    )
    return ValueNode(descriptor, value=_convert(kind, value, where or type_str))


def _convert(kind: ElementaryKind, value: Any, where: str) -> Any:
    """Convert a web3 / JSON input value into the shape the serializer expects for kind."""
    try:
        if kind in (ElementaryKind.INT, ElementaryKind.UINT):
            if isinstance(value, str):
                return int(value, 0)
            if isinstance(value, int) and not isinstance(value, bool):
                return value
        elif kind is ElementaryKind.ADDRESS:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
            if isinstance(value, (str, bytes, bytearray)):
                raw = HexBytes(value)
                if len(raw) != ADDRESS_LENGTH_BYTES:
                    raise AbiValueError(f"{where}: address must be 20 bytes, got {len(raw)}")
                return int.from_bytes(raw, "big")
        elif kind is ElementaryKind.BOOL:
            if isinstance(value, int):
                return int(value)
        elif kind in (ElementaryKind.FIXED, ElementaryKind.UFIXED):
            if isinstance(value, Decimal):
                return value
            if isinstance(value, (int, float, str)) and not isinstance(value, bool):
                return Decimal(str(value))
        elif kind in (ElementaryKind.BYTES, ElementaryKind.FUNCTION):
            if isinstance(value, (str, bytes, bytearray)):
                return HexBytes(value)
        elif kind is ElementaryKind.STRING:
            if isinstance(value, str):
                return value
    except AbiValueError:
        raise
    except (ValueError, InvalidOperation) as exc:
        raise AbiValueError(f"{where}: cannot convert {value!r} to {kind.value}") from exc
    raise AbiValueError(f"{where}: unexpected {type(value).__name__} for {kind.value}")


# ---------------------------------------------------------------------------
# Type string helpers
# ---------------------------------------------------------------------------


def _parse_basic(type_str: str) -> BasicType:
    try:
        abi_type = parse(type_str)
    except ParseError as exc:
        raise AbiDefinitionError(f"Cannot parse ABI type: {type_str!r}") from exc
    if not isinstance(abi_type, BasicType) or abi_type.arrlist:
        raise AbiDefinitionError(f"Expected an elementary ABI type: {type_str!r}")
    return abi_type


def _canonical(abi_type: BasicType) -> str:
    if abi_type.sub is None and abi_type.base in _DEFAULT_SUBS:
        return abi_type.base + _DEFAULT_SUBS[abi_type.base]
    return abi_type.to_type_str()


def _components(
    components: Sequence[Mapping[str, Any]] | None, type_str: str
) -> Sequence[Mapping[str, Any]]:
    if components is None or isinstance(components, (str, bytes)) or not isinstance(
        components, Sequence
    ):
        raise AbiDefinitionError(f"{type_str} definition needs a components list")
    return components
