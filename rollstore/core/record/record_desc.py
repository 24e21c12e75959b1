from dataclasses import dataclass
from typing import Optional
from ..types import FieldType


@dataclass(frozen=True)
class Column:
    """One column of a record layout: its name, type, width and byte offset."""
    name: str
    field_type: FieldType
    size: int
    offset: int

    @property
    def end(self) -> int:
        return self.offset + self.size


class RecordDesc:
    """
    Layout descriptor for a fixed-width record.

    A RecordDesc defines:
    1. The ordered columns of the record, each with an explicit byte offset
    2. Trailing padding that rounds the record up to an alignment boundary
    3. The total record width, which is the same for every record

    Offsets are computed from the column widths in declaration order, with
    no implicit alignment between columns. Only the record as a whole is
    padded to `alignment` bytes.
    """

    def __init__(self, columns: list[tuple[str, FieldType, Optional[int]]], alignment: int = 1):
        """
        Args:
            columns: (name, type, size) triples. size is required for TEXT
                and must be omitted (None) or equal to the type length otherwise.
            alignment: The record width is rounded up to a multiple of this.
        """
        if not columns:
            raise ValueError("RecordDesc must have at least one column")

        if alignment < 1:
            raise ValueError(f"Alignment must be positive, got {alignment}")

        names = [name for name, _, _ in columns]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate column names in {names}")

        self.columns: list[Column] = []
        offset = 0
        for name, field_type, size in columns:
            size = self._resolve_size(name, field_type, size)
            self.columns.append(Column(name, field_type, size, offset))
            offset += size

        self.data_size = offset
        self.alignment = alignment
        self.padding = (-offset) % alignment

    @staticmethod
    def _resolve_size(name: str, field_type: FieldType, size: Optional[int]) -> int:
        if field_type.is_fixed_length():
            if size is not None and size != field_type.get_length():
                raise ValueError(
                    f"Column '{name}' of type {field_type.value} must be "
                    f"{field_type.get_length()} bytes, got {size}")
            return field_type.get_length()

        if size is None or size < 1:
            raise ValueError(f"Column '{name}' of type {field_type.value} needs a positive size")
        return size

    def num_columns(self) -> int:
        return len(self.columns)

    def get_column(self, column_index: int) -> Column:
        if not (0 <= column_index < len(self.columns)):
            raise IndexError(
                f"Column index {column_index} out of range [0, {len(self.columns)})")
        return self.columns[column_index]

    def name_to_index(self, column_name: str) -> int:
        for i, column in enumerate(self.columns):
            if column.name == column_name:
                return i
        raise ValueError(f"Column '{column_name}' not found in record descriptor")

    def get_size(self) -> int:
        """Total bytes per record, trailing padding included."""
        return self.data_size + self.padding

    def __eq__(self, other: object) -> bool:
        return (isinstance(other, RecordDesc) and
                self.columns == other.columns and
                self.padding == other.padding)

    def __str__(self) -> str:
        parts = [f"{c.name}:{c.field_type.value}[{c.offset}:{c.end}]" for c in self.columns]
        if self.padding:
            parts.append(f"pad[{self.data_size}:{self.get_size()}]")
        return f"RecordDesc({', '.join(parts)})"

    def __repr__(self) -> str:
        return self.__str__()
