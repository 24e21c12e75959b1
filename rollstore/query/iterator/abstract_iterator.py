from typing import Optional
from abc import abstractmethod
from .record_iterator import RecordIterator
from ...core.record import Student


class AbstractRecordIterator(RecordIterator):
    """
    Helper base class for implementing RecordIterators.

    Implements has_next()/next() with a one-record read-ahead buffer, so
    subclasses only provide read_next().
    """

    def __init__(self):
        self._next_record: Optional[Student] = None
        self._is_open = False

    def is_open(self) -> bool:
        return self._is_open

    def has_next(self) -> bool:
        if not self._is_open:
            raise RuntimeError("Iterator not open")

        if self._next_record is None:
            self._next_record = self.read_next()
        return self._next_record is not None

    def next(self) -> Student:
        if not self._is_open:
            raise RuntimeError("Iterator not open")

        if self._next_record is None:
            self._next_record = self.read_next()

        if self._next_record is None:
            raise StopIteration("No more records")

        result = self._next_record
        self._next_record = None
        return result

    def open(self) -> None:
        """Mark iterator as open. Subclasses should override and call super()."""
        self._is_open = True

    def close(self) -> None:
        """Mark iterator as closed and clear buffer. Subclasses should override and call super()."""
        self._is_open = False
        self._next_record = None

    def rewind(self) -> None:
        """Drop the read-ahead buffer. Subclasses reposition and call super()."""
        if not self._is_open:
            raise RuntimeError("Iterator not open")
        self._next_record = None

    @abstractmethod
    def read_next(self) -> Optional[Student]:
        """
        Read the next record from the data source.

        Should return None when no more records are available.
        """
        pass
