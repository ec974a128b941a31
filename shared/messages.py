"""
Message catalog for serializer errors.

Errors carry a key plus parameters. This module maps keys to per-locale
templates so callers (CLI, log pipelines, API layers) can present them.

Usage:
    from shared.messages import localize

    try:
        serializer.serialize_json(root)
    except SerializationError as exc:
        print(localize(exc))
"""

from __future__ import annotations

from typing import Any

from shared.constants import DEFAULT_LOCALE

# ---------------------------------------------------------------------------
# Message keys (stable, part of the error contract)
# ---------------------------------------------------------------------------

MSG_BAD_COMPONENT = "ABI_BAD_COMPONENT"
MSG_UNKNOWN_ELEMENTARY_TYPE = "ABI_UNKNOWN_ELEMENTARY_TYPE"
MSG_UNKNOWN_TUPLE_SERIALIZER = "ABI_UNKNOWN_TUPLE_SERIALIZER"
MSG_VALUE_TYPE_MISMATCH = "ABI_VALUE_TYPE_MISMATCH"
MSG_SERIALIZATION_CANCELLED = "ABI_SERIALIZATION_CANCELLED"

# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        MSG_BAD_COMPONENT: "Bad ABI type component: {component}",
        MSG_UNKNOWN_ELEMENTARY_TYPE: "Unknown elementary type '{kind}' at {breadcrumbs}",
        MSG_UNKNOWN_TUPLE_SERIALIZER: "Unknown tuple serialization mode: {mode}",
        MSG_VALUE_TYPE_MISMATCH: (
            "Value of type '{actual}' at {breadcrumbs} does not match ABI type '{kind}' "
            "(expected {expected})"
        ),
        MSG_SERIALIZATION_CANCELLED: "Serialization cancelled at {breadcrumbs}: {reason}",
    },
}


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def render(key: str, params: dict[str, Any], locale: str = DEFAULT_LOCALE) -> str:
    """Render a message key with its parameters, falling back to English, then to the key."""
    template = CATALOGS.get(locale, {}).get(key)
    if template is None:
        template = CATALOGS[DEFAULT_LOCALE].get(key)
    if template is None:
        return key
    return template.format_map(_KeepMissing(params))


def localize(error: Any, locale: str | None = None) -> str:
    """
    Render a SerializationError (anything with .key and .params) for display.

    Without an explicit locale, uses the locale recorded on the error from its
    call context, then English.
    """
    if locale is None:
        locale = getattr(error, "locale", None) or DEFAULT_LOCALE
    return render(error.key, error.params, locale)
