"""
Structured errors raised by the ABI JSON serializer.

Every error carries a stable message key, the parameters needed to render
it, and the breadcrumb path of the node that failed. Human-readable text is
produced by shared.messages, never here.
"""

from __future__ import annotations

from typing import Any

from shared.messages import (
    MSG_BAD_COMPONENT,
    MSG_SERIALIZATION_CANCELLED,
    MSG_UNKNOWN_ELEMENTARY_TYPE,
    MSG_UNKNOWN_TUPLE_SERIALIZER,
    MSG_VALUE_TYPE_MISMATCH,
)


class SerializationError(Exception):
    """Base class for all value tree serialization failures."""

    key: str = ""

    def __init__(self, breadcrumbs: str = "", **params: Any) -> None:
        self.breadcrumbs = breadcrumbs
        # Set from the call context by Serializer.serialize_interface
        self.locale: str | None = None
        self.params: dict[str, Any] = {"breadcrumbs": breadcrumbs, **params}
        super().__init__(self.key, self.params)

    def __str__(self) -> str:
        rendered = ", ".join(f"{k}={v!r}" for k, v in self.params.items())
        return f"{self.key}({rendered})"


class BadComponentError(SerializationError):
    """Node has no type descriptor, or an unrecognized descriptor variant."""

    key = MSG_BAD_COMPONENT


class UnknownElementaryTypeError(SerializationError):
    key = MSG_UNKNOWN_ELEMENTARY_TYPE


class UnknownTupleSerializerError(SerializationError):
    key = MSG_UNKNOWN_TUPLE_SERIALIZER


class ValueTypeMismatchError(SerializationError):
    """Decoded value shape does not match the declared elementary kind."""

    key = MSG_VALUE_TYPE_MISMATCH


class SerializationCancelled(SerializationError):
    """Call context deadline passed or cancel event set mid-walk."""

    key = MSG_SERIALIZATION_CANCELLED
