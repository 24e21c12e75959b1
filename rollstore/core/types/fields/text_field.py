from .field import Field
from ..type_enum import FieldType


class TextField(Field[str]):
    """
    Field implementation for bounded, NUL-terminated text columns.

    Storage format:
    - `capacity` bytes in total
    - UTF-8 encoded content, at most `capacity - 1` bytes
    - at least one NUL terminator, then NUL padding up to `capacity`

    Truncation: content longer than `capacity - 1` bytes is cut at byte
    `capacity - 1`, then shortened further to the last complete UTF-8
    character so the stored bytes always decode cleanly. For ASCII text
    this keeps exactly the first `capacity - 1` characters. No error is
    raised; `truncated` records whether it happened.

    On read, only the bytes before the first NUL are content. Anything
    after the terminator is ignored, since files written by older tools
    may leave stale bytes there.
    """

    ENCODING = 'utf-8'

    def __init__(self, value, capacity: int):
        """
        Initialize text field.

        Args:
            value: A string (or something convertible to one)
            capacity: Total column width in bytes, terminator included

        Raises:
            TypeError: If value is None or cannot be converted to string
            ValueError: If capacity < 1 or value contains NUL characters
        """
        if capacity < 1:
            raise ValueError(f"TextField capacity must be at least 1, got {capacity}")

        if value is None:
            raise TypeError("TextField cannot accept None value")

        if not isinstance(value, str):
            try:
                value = str(value)
            except Exception as e:
                raise TypeError(
                    f"TextField requires str, got {type(value)}: {e}")

        if '\x00' in value:
            raise ValueError("TextField cannot contain null bytes")

        self.capacity = capacity
        self._encoded, self.truncated = self._fit(value.encode(self.ENCODING), capacity - 1)
        self.value = self._encoded.decode(self.ENCODING)

    @staticmethod
    def _fit(encoded: bytes, limit: int) -> tuple[bytes, bool]:
        if len(encoded) <= limit:
            return encoded, False

        cut = encoded[:limit]
        # drop a trailing partial multi-byte sequence
        return cut.decode(TextField.ENCODING, errors='ignore').encode(TextField.ENCODING), True

    def get_value(self) -> str:
        return self.value

    def get_type(self) -> FieldType:
        return FieldType.TEXT

    def get_size(self) -> int:
        return self.capacity

    def serialize(self) -> bytes:
        """Serialize to exactly `capacity` bytes: content, then NUL padding."""
        result = self._encoded + b'\0' * (self.capacity - len(self._encoded))
        assert len(result) == self.capacity, f"Expected {self.capacity} bytes, got {len(result)}"
        return result

    @classmethod
    def deserialize(cls, data: bytes) -> 'TextField':
        """
        Create TextField from a full column of bytes; capacity is len(data).

        Raises:
            TypeError: If data is not bytes/bytearray
            ValueError: If data is empty
        """
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"Expected bytes or bytearray, got {type(data)}")

        if len(data) == 0:
            raise ValueError("TextField requires at least 1 byte")

        content = bytes(data).split(b'\0', 1)[0]
        return cls(content.decode(cls.ENCODING, errors='replace'), len(data))

    def __repr__(self) -> str:
        return f"TextField({self.value!r}, capacity={self.capacity})"
