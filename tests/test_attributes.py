"""Tests del modelo de atributos tipados."""

from __future__ import annotations

import math

import pytest

from core.domain.attributes import Attribute, Attributes, Float32, format_float32, format_float64
from core.errors import AttributeDecodeError, UnsupportedType


class TestTypeInference:
    def test_string_is_tagged_string(self):
        attrs = Attributes()
        attrs.add("name", "kitchen")
        assert attrs.get("name") == (Attribute(type="string", value="kitchen"), True)

    @pytest.mark.parametrize("value", [0, 42, -7, 2**63 - 1, -(2**63)])
    def test_integers_are_tagged_int(self, value):
        attrs = Attributes()
        attrs.add("n", value)
        attr, present = attrs.get("n")
        assert present
        assert attr.type == "int"
        assert attr.value == str(value)

    def test_float32_is_tagged_float(self):
        attrs = Attributes()
        attrs.add("t", Float32(21.5))
        assert attrs.get("t")[0] == Attribute(type="float", value="21.5")

    def test_float64_keeps_the_int_tag(self):
        # Compatibility quirk: 64-bit floats travel with the "int" tag.
        attrs = Attributes()
        attrs.add("t", 21.5)
        assert attrs.get("t")[0] == Attribute(type="int", value="21.5")

    def test_attribute_passes_through_verbatim(self):
        attrs = Attributes()
        custom = Attribute(type="geo:point", value="40.4, -3.7")
        attrs.add("location", custom)
        assert attrs.get("location")[0] is custom

    @pytest.mark.parametrize("value", [True, False, None, b"raw", [1], {"a": 1}, 1 + 2j])
    def test_unsupported_type_is_rejected_without_mutation(self, value):
        attrs = Attributes()
        attrs.add("keep", "me")
        with pytest.raises(UnsupportedType):
            attrs.add("keep", value)
        with pytest.raises(UnsupportedType):
            attrs.add("other", value)
        assert attrs.get("keep") == (Attribute(type="string", value="me"), True)
        assert "other" not in attrs
        assert len(attrs) == 1

    def test_unsupported_type_is_also_a_type_error(self):
        with pytest.raises(TypeError):
            Attributes().add("flag", True)

    def test_last_write_wins(self):
        attrs = Attributes()
        attrs.add("x", "first")
        attrs.add("x", 2)
        assert attrs.get("x")[0] == Attribute(type="int", value="2")
        assert len(attrs) == 1


class TestAccessors:
    def test_missing_name_reports_absent(self):
        attrs = Attributes()
        assert attrs.get("nope") == (None, False)
        assert attrs.get_string("nope") == ("", False)
        assert attrs.get_int("nope") == (0, False)
        assert attrs.get_float("nope") == (0.0, False)

    @pytest.mark.parametrize("value", ["", "hello", "ñandú 🦤", "  padded  ", "123"])
    def test_string_round_trip(self, value):
        attrs = Attributes()
        attrs.add("s", value)
        assert attrs.get_string("s") == (value, True)

    @pytest.mark.parametrize("value", [0, 1, -1, 2**63 - 1, -(2**63), 10**30])
    def test_int_round_trip(self, value):
        attrs = Attributes()
        attrs.add("i", value)
        assert attrs.get_int("i") == (value, True)

    @pytest.mark.parametrize("value", [0.1, 1.0, -2.5, 1e20, 1e-7, 123456.789])
    def test_float64_round_trip(self, value):
        attrs = Attributes()
        attrs.add("f", value)
        assert attrs.get_float("f") == (value, True)

    @pytest.mark.parametrize("value", [0.1, 3.14159, -1e10, 16777217.0])
    def test_float32_round_trip(self, value):
        attrs = Attributes()
        original = Float32(value)
        attrs.add("f", original)
        decoded, present = attrs.get_float("f")
        assert present
        assert Float32(decoded) == original

    def test_unparsable_int_is_present_and_zero(self):
        # Tolerant contract: parse failure is indistinguishable from a stored zero.
        attrs = Attributes()
        attrs.add("n", Attribute(type="int", value="not-a-number"))
        assert attrs.get_int("n") == (0, True)

    def test_unparsable_float_is_present_and_zero(self):
        attrs = Attributes()
        attrs.add("f", Attribute(type="float", value="abc"))
        assert attrs.get_float("f") == (0.0, True)

    def test_float64_quirk_does_not_decode_as_int(self):
        attrs = Attributes()
        attrs.add("t", 21.5)
        assert attrs.get_int("t") == (0, True)
        assert attrs.get_float("t") == (21.5, True)

    @pytest.mark.parametrize("raw", ["1.5", " 1", "1_000", "0x10", ""])
    def test_int_parsing_rejects_non_decimal_text(self, raw):
        attrs = Attributes()
        attrs.add("n", Attribute(type="int", value=raw))
        assert attrs.get_int("n") == (0, True)

    def test_int_parsing_accepts_sign(self):
        attrs = Attributes()
        attrs.add("n", Attribute(type="int", value="+17"))
        assert attrs.get_int("n") == (17, True)

    def test_strict_accessors_raise(self):
        attrs = Attributes()
        attrs.add("n", Attribute(type="int", value="nope"))
        with pytest.raises(AttributeDecodeError) as excinfo:
            attrs.get_int("n", strict=True)
        assert excinfo.value.raw == "nope"
        with pytest.raises(ValueError):
            attrs.get_float("n", strict=True)

    def test_strict_accessors_still_report_absence(self):
        assert Attributes().get_int("n", strict=True) == (0, False)

    def test_string_accessor_ignores_type_tag(self):
        attrs = Attributes()
        attrs.add("n", 5)
        assert attrs.get_string("n") == ("5", True)


class TestFloatFormatting:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1.0, "1"), (0.1, "0.1"), (1e20, "100000000000000000000"), (1e-7, "0.0000001"), (-2.5, "-2.5")],
    )
    def test_float64_plain_decimal(self, value, expected):
        assert format_float64(value) == expected

    def test_float32_uses_shortest_single_precision_decimal(self):
        assert format_float32(Float32(0.1)) == "0.1"
        assert format_float32(Float32(1 / 3)) == "0.33333334"

    @pytest.mark.parametrize(
        ("value", "expected"), [(math.inf, "+Inf"), (-math.inf, "-Inf"), (math.nan, "NaN")]
    )
    def test_non_finite(self, value, expected):
        assert format_float64(value) == expected
        assert format_float32(value) == expected


class TestContainer:
    def test_from_mapping_and_iteration(self):
        attrs = Attributes.from_mapping({"a": "x", "b": 1})
        assert set(attrs) == {"a", "b"}
        assert dict(attrs.items())["b"] == Attribute(type="int", value="1")

    def test_copy_is_independent(self):
        attrs = Attributes.from_mapping({"a": "x"})
        clone = attrs.copy()
        clone.add("a", "y")
        assert attrs.get_string("a") == ("x", True)
        assert attrs != clone
