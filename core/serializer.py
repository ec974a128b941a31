"""
ABI value tree -> JSON serializer.

Walks a decoded ABI value tree depth-first and produces a JSON-compatible
value (or JSON bytes), using a configurable set of encoding strategies.

Usage:
    from core.encoders import checksum_addr, number_if_fits_or_base10_string_int
    from core.serializer import Serializer
    from shared.types import FormattingMode

    serializer = (
        Serializer()
        .set_formatting_mode(FormattingMode.SELF_DESCRIBING_ARRAYS)
        .set_int_encoder(number_if_fits_or_base10_string_int)
        .set_address_encoder(checksum_addr)
    )
    payload = serializer.serialize_json(root)
"""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from config.loader import get_config
from config.validate import ConfigValidationError, validate_serializer_config
from core.encoders import (
    ADDRESS_ENCODERS,
    BYTE_ENCODERS,
    FLOAT_ENCODERS,
    INT_ENCODERS,
    AddressEncoder,
    ByteEncoder,
    DefaultNameGenerator,
    FloatEncoder,
    IntEncoder,
    base10_string_float,
    base10_string_int,
    hex_bytes,
    numeric_default_name,
)
from core.errors import (
    BadComponentError,
    SerializationCancelled,
    SerializationError,
    UnknownElementaryTypeError,
    UnknownTupleSerializerError,
    ValueTypeMismatchError,
)
from serializer_logging.logger_manager import setup_module_logger
from shared.constants import (
    ADDRESS_LENGTH_BYTES,
    COMPACT_SEPARATORS,
    DEFAULT_LOCALE,
    PRETTY_INDENT,
)
from shared.types import ComponentType, ElementaryKind, FormattingMode, JSONValue, ValueNode

_Path = tuple[str, ...]


def render_breadcrumbs(path: _Path) -> str:
    """('2', 'balance') -> '[2][balance]'"""
    return "".join(f"[{segment}]" for segment in path)


@dataclass
class CallContext:
    """
    Per-call context. Carries the locale for error rendering and an optional
    deadline (time.monotonic() seconds) / cancel event, checked at every node.
    """

    locale: str = DEFAULT_LOCALE
    deadline: float | None = None
    cancel_event: threading.Event | None = None
    trace_id: str | None = None


class Serializer:
    """
    Serialization policy set plus the recursive tree walker.

    Defaults: objects mode, base-10 string integers and floats, plain lowercase
    hex bytes, addresses through the byte encoder, numeric default names,
    compact output. Setters return self for chaining. Reconfigure only
    between calls; a configured instance can be shared by concurrent calls.
    """

    def __init__(self) -> None:
        self._mode: Any = FormattingMode.OBJECTS
        self._int_encoder: IntEncoder = base10_string_int
        self._float_encoder: FloatEncoder = base10_string_float
        self._byte_encoder: ByteEncoder = hex_bytes
        self._address_encoder: AddressEncoder | None = None
        self._default_name: DefaultNameGenerator = numeric_default_name
        self._pretty = False
        self._logger = setup_module_logger(
            "abi_serializer",
            "serializer.log",
            module_folder="Serializer_Logs",
            use_json_formatter=True,
        )

    @classmethod
    def from_config(cls, cfg: dict[str, Any] | None = None) -> Serializer:
        """
        Build a serializer from a serializer.json-shaped mapping.

        Defaults to the loaded config (with env overrides). Raises
        ConfigValidationError on unknown strategy names.
        """
        if cfg is None:
            cfg = get_config().get_serializer_config()
        errors = validate_serializer_config(cfg)
        if errors:
            raise ConfigValidationError("\n".join(errors))

        serializer = (
            cls()
            .set_formatting_mode(FormattingMode(cfg["formatting_mode"]))
            .set_int_encoder(INT_ENCODERS[cfg["int_encoder"]])
            .set_float_encoder(FLOAT_ENCODERS[cfg["float_encoder"]])
            .set_byte_encoder(BYTE_ENCODERS[cfg["byte_encoder"]])
            .set_pretty(cfg["pretty"])
        )
        if cfg.get("address_encoder") is not None:
            serializer.set_address_encoder(ADDRESS_ENCODERS[cfg["address_encoder"]])
        return serializer

    # ------------------------------------------------------------------
    # Policy configuration
    # ------------------------------------------------------------------

    @property
    def formatting_mode(self) -> Any:
        return self._mode

    @property
    def pretty(self) -> bool:
        return self._pretty

    def set_formatting_mode(self, mode: FormattingMode) -> Serializer:
        self._mode = mode
        return self

    def set_int_encoder(self, encoder: IntEncoder) -> Serializer:
        self._int_encoder = encoder
        return self

    def set_float_encoder(self, encoder: FloatEncoder) -> Serializer:
        self._float_encoder = encoder
        return self

    def set_byte_encoder(self, encoder: ByteEncoder) -> Serializer:
        self._byte_encoder = encoder
        return self

    def set_address_encoder(self, encoder: AddressEncoder | None) -> Serializer:
        """None restores the fallback to the byte encoder."""
        self._address_encoder = encoder
        return self

    def set_default_name_generator(self, generator: DefaultNameGenerator) -> Serializer:
        self._default_name = generator
        return self

    def set_pretty(self, pretty: bool) -> Serializer:
        self._pretty = pretty
        return self

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def serialize_interface(self, node: ValueNode, ctx: CallContext | None = None) -> JSONValue:
        """Serialize to nested dict / list / scalar values."""
        if ctx is None:
            ctx = CallContext()
        extra = {"trace_id": ctx.trace_id} if ctx.trace_id else {}
        try:
            out = self._walk(ctx, (), node)
        except SerializationError as exc:
            exc.locale = ctx.locale
            self._logger.warning(
                "ABI value tree serialization failed: %s",
                exc,
                extra={
                    **extra,
                    "breadcrumbs": exc.breadcrumbs,
                    "error_key": exc.key,
                    "error_params": exc.params,
                    "formatting_mode": _mode_name(self._mode),
                },
            )
            raise
        self._logger.debug(
            "Serialized ABI value tree (mode=%s)", _mode_name(self._mode), extra=extra
        )
        return out

    def serialize_json(self, node: ValueNode, ctx: CallContext | None = None) -> bytes:
        """Serialize to UTF-8 JSON bytes, 2-space indented when pretty is set."""
        out = self.serialize_interface(node, ctx)
        if self._pretty:
            return json.dumps(out, indent=PRETTY_INDENT, ensure_ascii=False).encode("utf-8")
        return json.dumps(out, separators=COMPACT_SEPARATORS, ensure_ascii=False).encode("utf-8")

    # ------------------------------------------------------------------
    # Tree walker
    # ------------------------------------------------------------------

    def _walk(self, ctx: CallContext, path: _Path, node: ValueNode) -> JSONValue:
        _check_context(ctx, path)
        component = node.component
        if component is None:
            raise BadComponentError(render_breadcrumbs(path), component=repr(node))

        component_type = getattr(component, "component_type", None)
        if component_type is ComponentType.ELEMENTARY:
            return self._serialize_elementary(path, node)
        if component_type in (ComponentType.FIXED_ARRAY, ComponentType.DYNAMIC_ARRAY):
            return self._serialize_array(ctx, path, node)
        if component_type is ComponentType.TUPLE:
            return self._serialize_tuple(ctx, path, node)
        raise BadComponentError(render_breadcrumbs(path), component=repr(component))

    def _serialize_elementary(self, path: _Path, node: ValueNode) -> JSONValue:
        kind = node.component.elementary_kind
        value = node.value

        if kind in (ElementaryKind.INT, ElementaryKind.UINT):
            return self._int_encoder(_expect_int(path, kind, value))

        if kind is ElementaryKind.ADDRESS:
            addr = _address_bytes(path, _expect_int(path, kind, value))
            if self._address_encoder is None:
                return self._byte_encoder(addr)
            return self._address_encoder(addr)

        if kind is ElementaryKind.BOOL:
            # Only exactly 1 is true; 0, 2, -1 ... are all false
            return _expect_int(path, kind, value, allow_bool=True) == 1

        if kind in (ElementaryKind.FIXED, ElementaryKind.UFIXED):
            if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
                raise _mismatch(path, kind, value, "Decimal")
            return self._float_encoder(Decimal(value))

        if kind in (ElementaryKind.BYTES, ElementaryKind.FUNCTION):
            if not isinstance(value, (bytes, bytearray)):
                raise _mismatch(path, kind, value, "bytes")
            return self._byte_encoder(bytes(value))

        if kind is ElementaryKind.STRING:
            if not isinstance(value, str):
                raise _mismatch(path, kind, value, "str")
            return value

        raise UnknownElementaryTypeError(render_breadcrumbs(path), kind=_kind_name(kind))

    def _serialize_array(self, ctx: CallContext, path: _Path, node: ValueNode) -> list[JSONValue]:
        return [
            self._walk(ctx, path + (str(i),), child) for i, child in enumerate(node.children)
        ]

    def _serialize_tuple(self, ctx: CallContext, path: _Path, node: ValueNode) -> JSONValue:
        if self._mode is FormattingMode.OBJECTS:
            out: dict[str, JSONValue] = {}
            for i, child in enumerate(node.children):
                if child.component is None:
                    continue
                name = child.component.key_name or self._default_name(i)
                # Colliding names: last write wins
                out[name] = self._walk(ctx, path + (name,), child)
            return out

        if self._mode is FormattingMode.FLAT_ARRAYS:
            return self._serialize_array(ctx, path, node)

        if self._mode is FormattingMode.SELF_DESCRIBING_ARRAYS:
            entries = []
            for i, child in enumerate(node.children):
                name = child.component.key_name if child.component is not None else ""
                entry: dict[str, JSONValue] = {"name": name or self._default_name(i)}
                if child.component is not None:
                    entry["type"] = str(child.component)
                entry["value"] = self._walk(ctx, path + (entry["name"],), child)
                entries.append(entry)
            return entries

        raise UnknownTupleSerializerError(render_breadcrumbs(path), mode=_mode_name(self._mode))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_context(ctx: CallContext, path: _Path) -> None:
    if ctx.cancel_event is not None and ctx.cancel_event.is_set():
        raise SerializationCancelled(render_breadcrumbs(path), reason="cancelled")
    if ctx.deadline is not None and time.monotonic() > ctx.deadline:
        raise SerializationCancelled(render_breadcrumbs(path), reason="deadline exceeded")


def _expect_int(path: _Path, kind: ElementaryKind, value: Any, allow_bool: bool = False) -> int:
    if not isinstance(value, int) or (isinstance(value, bool) and not allow_bool):
        raise _mismatch(path, kind, value, "int")
    return int(value)


def _address_bytes(path: _Path, value: int) -> bytes:
    """Big-endian, left-padded to 20 bytes."""
    if value < 0 or value.bit_length() > ADDRESS_LENGTH_BYTES * 8:
        raise _mismatch(path, ElementaryKind.ADDRESS, value, "int in [0, 2**160)")
    return value.to_bytes(ADDRESS_LENGTH_BYTES, "big")


def _mismatch(path: _Path, kind: ElementaryKind, value: Any, expected: str) -> ValueTypeMismatchError:
    return ValueTypeMismatchError(
        render_breadcrumbs(path),
        kind=_kind_name(kind),
        expected=expected,
        actual=type(value).__name__,
    )


def _kind_name(kind: Any) -> str:
    return kind.value if isinstance(kind, ElementaryKind) else repr(kind)


def _mode_name(mode: Any) -> str:
    return mode.value if isinstance(mode, FormattingMode) else repr(mode)
