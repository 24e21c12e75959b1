import math
import pytest
import struct
from rollstore.core.types.fields.float_field import FloatField
from rollstore.core.types.type_enum import FieldType


class TestFloatField:
    """Tests for FloatField implementation."""

    def test_init_valid_values(self):
        assert FloatField(88.5).value == 88.5
        assert FloatField(0).value == 0.0
        assert FloatField("70.25").value == 70.25

    def test_init_nan_raises_error(self):
        with pytest.raises(ValueError, match="FloatField does not support NaN values"):
            FloatField(float("nan"))

    def test_init_invalid_values_raise_error(self):
        with pytest.raises(TypeError, match="FloatField requires numeric value"):
            FloatField(None)

        with pytest.raises(TypeError, match="FloatField requires numeric value"):
            FloatField("not a number")

        with pytest.raises(TypeError, match="FloatField requires numeric value"):
            FloatField(True)

    def test_get_type_and_size(self):
        field = FloatField(1.0)
        assert field.get_type() == FieldType.FLOAT
        assert field.get_size() == 4

    def test_serialize_single_precision_little_endian(self):
        assert FloatField(88.5).serialize() == struct.pack('<f', 88.5)
        assert len(FloatField(1.0).serialize()) == 4

    def test_round_trip_exact_for_representable_values(self):
        for value in (0.0, 70.0, 88.5, 91.0, 450.75):
            assert FloatField.deserialize(FloatField(value).serialize()).value == value

    def test_round_trip_rounds_to_float32(self):
        """Test that non-representable values come back as their float32 rounding."""
        restored = FloatField.deserialize(FloatField(0.1).serialize()).value
        assert restored != 0.1
        assert restored == pytest.approx(0.1, rel=1e-7)

    def test_serialize_too_large_raises_error(self):
        with pytest.raises(ValueError, match="does not fit in float32"):
            FloatField(1e39).serialize()

    def test_infinity_round_trip(self):
        assert math.isinf(FloatField.deserialize(FloatField(float("inf")).serialize()).value)

    def test_deserialize_nan_raises_error(self):
        with pytest.raises(ValueError, match="NaN"):
            FloatField.deserialize(struct.pack('<f', float("nan")))

    def test_deserialize_wrong_length_raises_error(self):
        with pytest.raises(ValueError, match="FloatField requires exactly 4 bytes, got 8"):
            FloatField.deserialize(b'\x00' * 8)

    def test_str_formats_two_decimals(self):
        assert str(FloatField(88.5)) == "88.50"
        assert str(FloatField(float("-inf"))) == "-inf"

    def test_repr(self):
        assert repr(FloatField(1.5)) == "FloatField(1.5)"
