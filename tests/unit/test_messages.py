"""
Unit tests for shared/messages.py and core/errors.py.

Tests verify errors carry stable keys and parameters (never prose), and that
the catalog renders them with locale and key fallbacks.
"""

from __future__ import annotations

import pytest

from core.errors import (
    BadComponentError,
    SerializationCancelled,
    SerializationError,
    UnknownElementaryTypeError,
    UnknownTupleSerializerError,
    ValueTypeMismatchError,
)
from shared.messages import (
    CATALOGS,
    MSG_BAD_COMPONENT,
    MSG_SERIALIZATION_CANCELLED,
    MSG_UNKNOWN_ELEMENTARY_TYPE,
    MSG_UNKNOWN_TUPLE_SERIALIZER,
    MSG_VALUE_TYPE_MISMATCH,
    localize,
    render,
)

# ===========================================================================
# Errors
# ===========================================================================


class TestErrorKeys:
    @pytest.mark.parametrize(
        "cls,key",
        [
            (BadComponentError, MSG_BAD_COMPONENT),
            (UnknownElementaryTypeError, MSG_UNKNOWN_ELEMENTARY_TYPE),
            (UnknownTupleSerializerError, MSG_UNKNOWN_TUPLE_SERIALIZER),
            (ValueTypeMismatchError, MSG_VALUE_TYPE_MISMATCH),
            (SerializationCancelled, MSG_SERIALIZATION_CANCELLED),
        ],
    )
    def test_each_error_has_stable_key(self, cls, key):
        err = cls("[0]")
        assert err.key == key
        assert isinstance(err, SerializationError)

    def test_params_include_breadcrumbs(self):
        err = UnknownElementaryTypeError("[a][0]", kind="decimal")
        assert err.breadcrumbs == "[a][0]"
        assert err.params == {"breadcrumbs": "[a][0]", "kind": "decimal"}

    def test_str_is_key_and_params(self):
        err = UnknownTupleSerializerError("", mode="'bogus'")
        assert str(err) == "ABI_UNKNOWN_TUPLE_SERIALIZER(breadcrumbs='', mode=\"'bogus'\")"


# ===========================================================================
# Catalog rendering
# ===========================================================================


class TestRender:
    def test_every_key_has_english_text(self):
        for key in (
            MSG_BAD_COMPONENT,
            MSG_UNKNOWN_ELEMENTARY_TYPE,
            MSG_UNKNOWN_TUPLE_SERIALIZER,
            MSG_VALUE_TYPE_MISMATCH,
            MSG_SERIALIZATION_CANCELLED,
        ):
            assert key in CATALOGS["en"]

    def test_localize_mismatch(self):
        err = ValueTypeMismatchError("[0][amount]", kind="uint", expected="int", actual="str")
        assert localize(err) == (
            "Value of type 'str' at [0][amount] does not match ABI type 'uint' (expected int)"
        )

    def test_unknown_locale_falls_back_to_english(self):
        err = UnknownTupleSerializerError("", mode="3")
        assert localize(err, "fr") == "Unknown tuple serialization mode: 3"

    def test_unknown_key_renders_key(self):
        assert render("ABI_NOT_A_MESSAGE", {}) == "ABI_NOT_A_MESSAGE"

    def test_missing_param_left_as_placeholder(self):
        assert render(MSG_BAD_COMPONENT, {}) == "Bad ABI type component: {component}"

    def test_extra_locale_catalog(self, monkeypatch):
        monkeypatch.setitem(CATALOGS, "de", {MSG_BAD_COMPONENT: "Ungültige Komponente: {component}"})
        err = BadComponentError("", component="X")
        assert localize(err, "de") == "Ungültige Komponente: X"
