"""Tests for the tagged value model."""

from __future__ import annotations

import pytest

from fcp_rytm.errors import TypeMismatch, ValidationError
from fcp_rytm.parser.value import (
    Float,
    Int,
    Symbol,
    from_native,
    from_token,
    render,
    to_native,
    values_from_text,
)


# ---------------------------------------------------------------------------
# Construction and classification
# ---------------------------------------------------------------------------

class TestFromToken:
    def test_int(self):
        assert from_token("12") == Int(12)

    def test_negative_int(self):
        assert from_token("-40") == Int(-40)

    def test_float(self):
        assert from_token("-1.5") == Float(-1.5)

    def test_float_with_exponent(self):
        assert from_token("1e3") == Float(1000.0)

    def test_symbol(self):
        assert from_token("masterlen") == Symbol("masterlen")

    def test_enum_like_text_is_symbol(self):
        assert from_token("speed:2x") == Symbol("speed:2x")

    def test_fraction_is_symbol(self):
        assert from_token("1/16") == Symbol("1/16")


class TestValuesFromText:
    def test_mixed(self):
        values = values_from_text("pattern 1 0 5 plockset filtertype:lp2")
        assert values == [
            Symbol("pattern"), Int(1), Int(0), Int(5),
            Symbol("plockset"), Symbol("filtertype:lp2"),
        ]

    def test_quoted_number_stays_symbol(self):
        assert values_from_text('kit 0 name "808"') == [
            Symbol("kit"), Int(0), Symbol("name"), Symbol("808"),
        ]

    def test_quoted_text_keeps_spaces(self):
        assert values_from_text('name "Big Kick"')[1] == Symbol("Big Kick")

    def test_empty(self):
        assert values_from_text("") == []


class TestNative:
    def test_from_native_int(self):
        assert from_native(3) == Int(3)

    def test_from_native_bool_is_int(self):
        assert from_native(True) == Int(1)

    def test_from_native_float(self):
        assert from_native(0.5) == Float(0.5)

    def test_from_native_str(self):
        assert from_native("lp2") == Symbol("lp2")

    def test_from_native_passthrough(self):
        value = Symbol("x")
        assert from_native(value) is value

    def test_from_native_rejects_other(self):
        with pytest.raises(TypeMismatch):
            from_native([1, 2])

    def test_to_native(self):
        assert to_native(Int(5)) == 5
        assert to_native(Symbol("a")) == "a"


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------

class TestAccessors:
    def test_type_discriminant(self):
        assert Int(1).type == "int"
        assert Float(1.0).type == "float"
        assert Symbol("a").type == "symbol"

    def test_int_is_number(self):
        assert Int(4).as_number() == Int(4)

    def test_symbol_is_not_number(self):
        with pytest.raises(TypeMismatch) as exc:
            Symbol("abc").as_number()
        assert "Expected a number" in str(exc.value)

    def test_number_is_not_symbol(self):
        with pytest.raises(TypeMismatch):
            Int(1).as_symbol()

    def test_symbol_text(self):
        assert Symbol("lp2").as_symbol() == "lp2"

    def test_float_truncates_toward_zero(self):
        assert Float(-2.7).get_int() == -2
        assert Float(2.7).get_int() == 2

    def test_int_get_float(self):
        assert Int(3).get_float() == 3.0

    def test_bool_zero_and_one(self):
        assert Int(1).as_bool_0_or_1("enable") is True
        assert Int(0).as_bool_0_or_1("enable") is False

    def test_bool_rejects_two(self):
        with pytest.raises(TypeMismatch) as exc:
            Int(2).as_bool_0_or_1("enable")
        assert "enable must be followed by a 0 or 1" in str(exc.value)

    def test_bool_rejects_float(self):
        with pytest.raises(TypeMismatch):
            Float(1.0).as_bool_0_or_1("enable")

    def test_type_mismatch_is_validation_error(self):
        with pytest.raises(ValidationError):
            Symbol("x").as_number()

    def test_values_are_immutable(self):
        value = Int(1)
        with pytest.raises(AttributeError):
            value.value = 2  # type: ignore[misc]


class TestRender:
    def test_plain(self):
        assert render([Symbol("kit"), Int(0), Float(0.5)]) == "kit 0 0.5"

    def test_symbol_with_space_is_quoted(self):
        assert render([Symbol("name"), Symbol("Big Kick")]) == 'name "Big Kick"'

    def test_empty_symbol_is_quoted(self):
        assert render([Symbol("")]) == '""'
