import struct
from .field import Field
from ..type_enum import FieldType


class BoolField(Field[bool]):
    """
    Field implementation for boolean values.

    Storage format: 1 byte (0 for False, 1 for True). Any non-zero byte
    read back from disk is treated as True.
    """

    def __init__(self, value):
        """
        Initialize boolean field.

        Note: Accepts any type and converts to bool using Python's truthiness rules
        """
        if value is None:
            raise TypeError("BoolField cannot accept None value")
        self.value = bool(value)

    def get_value(self) -> bool:
        return self.value

    def get_type(self) -> FieldType:
        return FieldType.BOOLEAN

    def serialize(self) -> bytes:
        """Pack as single byte: 1 for True, 0 for False"""
        return struct.pack('?', self.value)

    @classmethod
    def deserialize(cls, data: bytes) -> 'BoolField':
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Expected bytes or bytearray, got {type(data)}")

        if len(data) != 1:
            raise ValueError(
                f"BoolField requires exactly 1 byte, got {len(data)}")

        return cls(data[0] != 0)

    def get_size(self) -> int:
        return FieldType.BOOLEAN.get_length()

    def __repr__(self) -> str:
        return f"BoolField({self.value})"
