from ..types import Field, FieldType, IntField, TextField, FloatField, BoolField
from .record_desc import RecordDesc
from .student import Student


# Natural layout of the equivalent C struct on x86/x86-64 so C-written files load as-is
# (4-byte int alignment): 4 + 50 + 30 + 100 + 4 + 1 + 3 padding.
STUDENT_DESC = RecordDesc([
    ("roll_number", FieldType.INT, None),
    ("name", FieldType.TEXT, 50),
    ("student_class", FieldType.TEXT, 30),
    ("address", FieldType.TEXT, 100),
    ("total_score", FieldType.FLOAT, None),
    ("fee_paid", FieldType.BOOLEAN, None),
], alignment=4)

RECORD_SIZE = STUDENT_DESC.get_size()


class StudentCodec:
    """
    Encodes Students to fixed-width blocks and back.

    encode() always returns exactly desc.get_size() bytes. decode() accepts
    only a full block; callers are responsible for treating a short tail
    as end-of-data.
    """

    KEY_COLUMN = "roll_number"

    def __init__(self, desc: RecordDesc = STUDENT_DESC):
        self.desc = desc
        self.record_size = desc.get_size()
        self._key_column = desc.get_column(desc.name_to_index(self.KEY_COLUMN))

    def decode_key(self, data: bytes) -> int:
        """Read only the roll number out of a full block."""
        if len(data) != self.record_size:
            raise ValueError(
                f"Record requires exactly {self.record_size} bytes, got {len(data)}")
        return IntField.deserialize(data[self._key_column.offset:self._key_column.end]).get_value()

    def encode(self, student: Student) -> bytes:
        """
        Serialize a student. Over-long text is truncated, never rejected.

        Raises:
            TypeError, ValueError: If a value cannot be stored in its column
        """
        data = b''
        for column in self.desc.columns:
            field = self._make_field(column.field_type, column.size, getattr(student, column.name))
            data += field.serialize()

        data += b'\0' * self.desc.padding
        assert len(data) == self.record_size, f"Expected {self.record_size} bytes, got {len(data)}"
        return data

    def encode_columns(self, data: bytes, student: Student, column_names: list[str]) -> bytes:
        """
        Overwrite only the named columns of an existing block.

        Every other byte of `data` is kept as is, including text the codec
        could not have produced itself (non-UTF-8 bytes, stale bytes after
        a terminator).

        Raises:
            ValueError: If the block has the wrong size or a column is unknown
            TypeError, ValueError: If a value cannot be stored in its column
        """
        if len(data) != self.record_size:
            raise ValueError(
                f"Record requires exactly {self.record_size} bytes, got {len(data)}")

        result = bytearray(data)
        for name in column_names:
            column = self.desc.get_column(self.desc.name_to_index(name))
            field = self._make_field(column.field_type, column.size, getattr(student, column.name))
            result[column.offset:column.end] = field.serialize()
        return bytes(result)

    def decode(self, data: bytes) -> Student:
        """
        Deserialize one full block.

        Raises:
            ValueError: If the block has the wrong size or holds invalid values
        """
        if len(data) != self.record_size:
            raise ValueError(
                f"Record requires exactly {self.record_size} bytes, got {len(data)}")

        values = {}
        for column in self.desc.columns:
            field = self._read_field(column.field_type, data[column.offset:column.end])
            values[column.name] = field.get_value()

        return Student(**values)

    @staticmethod
    def _make_field(field_type: FieldType, size: int, value) -> Field:
        if field_type == FieldType.INT:
            return IntField(value)
        elif field_type == FieldType.TEXT:
            return TextField(value, size)
        elif field_type == FieldType.FLOAT:
            return FloatField(value)
        elif field_type == FieldType.BOOLEAN:
            return BoolField(value)
        raise ValueError(f"Unknown field type: {field_type}")

    @staticmethod
    def _read_field(field_type: FieldType, data: bytes) -> Field:
        if field_type == FieldType.INT:
            return IntField.deserialize(data)
        elif field_type == FieldType.TEXT:
            return TextField.deserialize(data)
        elif field_type == FieldType.FLOAT:
            return FloatField.deserialize(data)
        elif field_type == FieldType.BOOLEAN:
            return BoolField.deserialize(data)
        raise ValueError(f"Unknown field type: {field_type}")
