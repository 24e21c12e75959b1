from enum import Enum


class FieldType(Enum):
    """
    Enum for field types.

    TEXT has no intrinsic length: every text column declares its own
    capacity in the record descriptor.
    """
    INT = "int"
    TEXT = "text"
    FLOAT = "float"
    BOOLEAN = "boolean"

    def get_length(self) -> int:
        """Get the length of the field type in bytes."""
        length_map = {
            FieldType.INT: 4,
            FieldType.FLOAT: 4,
            FieldType.BOOLEAN: 1,
        }

        if self not in length_map:
            raise ValueError(f"{self.value} fields have no fixed length")
        return length_map[self]

    def is_fixed_length(self) -> bool:
        return self != FieldType.TEXT
