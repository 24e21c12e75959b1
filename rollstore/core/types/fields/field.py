from abc import ABC, abstractmethod
from typing import TypeVar, Generic
from ..type_enum import FieldType

T = TypeVar('T')


class Field(ABC, Generic[T]):
    """
    Abstract base class for all column types in a student record.

    A field wraps a single value and knows how to turn it into a
    fixed number of bytes and back. Every encoded record is the plain
    concatenation of its fields' bytes (plus explicit padding), so a
    field's serialized size must never depend on its value.
    """

    @abstractmethod
    def get_value(self) -> T:
        """
        Get the value stored in this field.

        Returns:
            The value of the field with its appropriate type
        """
        pass

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Convert this field to exactly get_size() bytes for storage on disk.
        """
        pass

    @classmethod
    @abstractmethod
    def deserialize(cls, data: bytes) -> 'Field':
        """
        Create field instance from serialized bytes.

        Args:
            data: The bytes to deserialize

        Returns:
            Field instance

        Raises:
            ValueError: If data is invalid or corrupted
        """
        pass

    @abstractmethod
    def get_size(self) -> int:
        """
        Get the fixed size in bytes for this field.

        Returns:
            Size in bytes
        """
        pass

    @abstractmethod
    def get_type(self) -> FieldType:
        """
        Return the type of this field.
        """
        pass

    def __str__(self) -> str:
        return str(self.get_value())

    @abstractmethod
    def __repr__(self) -> str:
        """
        Unambiguous string representation for debugging.
        """
        pass

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.get_value() == other.get_value()

    def __hash__(self) -> int:
        return hash(self.get_value())
