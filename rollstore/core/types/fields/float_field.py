import struct
import math
from .field import Field
from ..type_enum import FieldType


class FloatField(Field[float]):
    """
    32-bit floating point field.

    Storage format: 4 bytes, IEEE 754 single precision, little-endian.
    The stored value is the float32 rounding of the input, so values that
    are not exactly representable come back slightly different.
    """

    def __init__(self, value):
        """
        Initialize float field with validation.

        Raises:
            TypeError: If value cannot be converted to float
            ValueError: If value is NaN
        """
        if value is None or isinstance(value, bool):
            raise TypeError(f"FloatField requires numeric value, got {type(value)}")

        try:
            self.value = float(value)
        except (ValueError, TypeError) as e:
            raise TypeError(
                f"FloatField requires numeric value, got {type(value)}: {e}")

        if math.isnan(self.value):
            raise ValueError("FloatField does not support NaN values")

    def get_value(self) -> float:
        return self.value

    def get_type(self) -> FieldType:
        return FieldType.FLOAT

    def serialize(self) -> bytes:
        try:
            return struct.pack('<f', self.value)
        except OverflowError as e:
            raise ValueError(f"Value {self.value} does not fit in float32: {e}")

    @classmethod
    def deserialize(cls, data: bytes) -> 'FloatField':
        """
        Deserialize float field from 4 bytes.

        Raises:
            ValueError: If data length is not 4 bytes or holds a NaN
            TypeError: If data is not bytes/bytearray
        """
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Expected bytes or bytearray, got {type(data)}")

        if len(data) != 4:
            raise ValueError(
                f"FloatField requires exactly 4 bytes, got {len(data)}")

        return cls(struct.unpack('<f', data)[0])

    def get_size(self) -> int:
        return FieldType.FLOAT.get_length()

    def __str__(self) -> str:
        if math.isinf(self.value):
            return "inf" if self.value > 0 else "-inf"
        return f"{self.value:.2f}"

    def __repr__(self) -> str:
        return f"FloatField({self.value})"
