from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...core.record import Student, RecordDesc


class RecordIterator(ABC):
    """
    Pull-based cursor over student records.

    Lifecycle: open() acquires resources, has_next()/next() stream records
    one at a time, rewind() goes back to the first record, close()
    releases everything. Records are produced on demand, so a caller that
    stops early never reads the rest of the file.
    """

    @abstractmethod
    def open(self) -> None:
        """
        Opens the iterator. Must be called before any other method.

        Raises:
            StorageUnavailable: If the backing file exists but cannot be opened
        """
        pass

    @abstractmethod
    def has_next(self) -> bool:
        """
        Returns true if the iterator has more records.

        Does not advance the iterator position.

        Raises:
            RuntimeError: If the iterator has not been opened
            CorruptionError: If the next full block cannot be decoded
        """
        pass

    @abstractmethod
    def next(self) -> 'Student':
        """
        Returns the next record and advances the iterator.

        Raises:
            StopIteration: If there are no more records
            RuntimeError: If the iterator has not been opened
            CorruptionError: If the next full block cannot be decoded
        """
        pass

    @abstractmethod
    def rewind(self) -> None:
        """
        Resets the iterator to the first record.

        Raises:
            RuntimeError: If the iterator has not been opened
        """
        pass

    @abstractmethod
    def get_record_desc(self) -> 'RecordDesc':
        """Returns the layout of the records produced by this iterator."""
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Closes the iterator and releases resources. Safe to call twice.
        """
        pass

    def __enter__(self) -> 'RecordIterator':
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
