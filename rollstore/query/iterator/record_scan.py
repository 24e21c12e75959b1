from typing import BinaryIO, Iterator, Optional
from .abstract_iterator import AbstractRecordIterator
from ...core.record import Student, StudentCodec, RecordDesc
from ...storage.exceptions import CorruptionError
from ...storage.record_file import RecordFile


class RecordScan(AbstractRecordIterator):
    """
    Sequential scan over every record in a RecordFile, oldest first.

    Two ways to consume it:
    1. Plain iteration: each `for s in scan` opens its own handle, starts at
       offset 0 and closes the handle on exhaustion, break or error. The
       scan object can be iterated any number of times.
    2. Explicit cursor: open()/has_next()/next()/rewind()/close(), or
       `with scan: ...`.

    A missing file scans as empty. A trailing partial block ends the scan.
    """

    def __init__(self, record_file: RecordFile, codec: StudentCodec):
        super().__init__()
        self.record_file = record_file
        self.codec = codec
        self._handle: Optional[BinaryIO] = None
        self._next_index = 0
        self._last_index: Optional[int] = None

    def open(self) -> None:
        super().open()
        self._next_index = 0
        self._last_index = None
        try:
            self._handle = self.record_file.open('rb')
        except FileNotFoundError:
            self._handle = None

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        super().close()

    def rewind(self) -> None:
        super().rewind()
        self._next_index = 0
        self._last_index = None
        if self._handle is not None:
            self._handle.seek(0)

    def get_record_desc(self) -> RecordDesc:
        return self.codec.desc

    def last_index(self) -> Optional[int]:
        """Block index of the record most recently returned by next()."""
        return self._last_index

    def next(self) -> Student:
        student = super().next()
        self._last_index = self._next_index
        self._next_index += 1
        return student

    def read_next(self) -> Optional[Student]:
        if self._handle is None:
            return None

        block = self.record_file.read_block(self._handle)
        if block is None:
            return None

        offset = self._handle.tell() - len(block)
        try:
            return self.codec.decode(block)
        except (TypeError, ValueError) as e:
            raise CorruptionError(f"Undecodable record in {self.record_file.file_path}: {e}",
                                  offset) from e

    def __iter__(self) -> Iterator[Student]:
        cursor = RecordScan(self.record_file, self.codec)
        with cursor:
            while cursor.has_next():
                yield cursor.next()
