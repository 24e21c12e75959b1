import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Optional
from .exceptions import StorageUnavailable

logger = logging.getLogger(__name__)


@dataclass
class RecordFileStats:
    records_read: int = 0
    records_written: int = 0
    bytes_read: int = 0
    bytes_written: int = 0
    partial_tails: int = 0


class RecordFile:
    """
    Low-level block I/O against a headerless file of fixed-width records.

    The file is nothing but records laid end to end: record i lives at
    byte offset i * record_size. There is no header, magic number or count,
    so the number of records is inferred from the file length. A trailing
    run of fewer than record_size bytes is never returned as a record.

    RecordFile holds no open handle between calls. Callers get a scoped
    handle from open() and pass it to the read/write helpers.
    """

    def __init__(self, file_path: str | Path, record_size: int):
        if record_size < 1:
            raise ValueError(f"Record size must be positive, got {record_size}")

        self.file_path = Path(file_path)
        self.record_size = record_size
        self.stats = RecordFileStats()

    def exists(self) -> bool:
        return self.file_path.exists()

    def get_file_size(self) -> int:
        """Size of the backing file in bytes, 0 if it does not exist."""
        try:
            return self.file_path.stat().st_size
        except FileNotFoundError:
            return 0

    def num_records(self) -> int:
        """Number of complete records in the file."""
        return self.get_file_size() // self.record_size

    def has_partial_tail(self) -> bool:
        return self.get_file_size() % self.record_size != 0

    def open(self, mode: str) -> BinaryIO:
        """
        Open the backing file in a binary mode.

        Raises:
            FileNotFoundError: If a read mode is requested and the file is missing
            StorageUnavailable: For any other failure to open or create the file
        """
        try:
            if 'a' in mode or 'w' in mode:
                self.file_path.parent.mkdir(parents=True, exist_ok=True)
            return open(self.file_path, mode)
        except FileNotFoundError as e:
            if 'r' in mode:
                raise
            raise StorageUnavailable(f"Cannot create {self.file_path}: {e}") from e
        except OSError as e:
            raise StorageUnavailable(f"Cannot open {self.file_path} ({mode}): {e}") from e

    def read_block(self, f: BinaryIO) -> Optional[bytes]:
        """
        Read the next full record from the handle's current position.

        Returns None at end-of-data, including when only a partial
        record is left.
        """
        block = f.read(self.record_size)

        if len(block) < self.record_size:
            if block:
                self.stats.partial_tails += 1
                logger.warning(f"Ignoring {len(block)} trailing bytes in {self.file_path} "
                               f"(record size {self.record_size})")
            return None

        self.stats.records_read += 1
        self.stats.bytes_read += len(block)
        return block

    def iter_blocks(self, f: BinaryIO) -> Iterator[tuple[int, bytes]]:
        """Yield (index, block) pairs from the start of the file until end-of-data."""
        f.seek(0)
        index = 0
        while True:
            block = self.read_block(f)
            if block is None:
                return
            yield index, block
            index += 1

    def write_block(self, f: BinaryIO, index: int, data: bytes) -> None:
        """
        Overwrite record `index` in place with a single fixed-width write.
        """
        self._check_block(data)
        offset = index * self.record_size
        try:
            f.seek(offset)
            f.write(data)
            self._sync(f)
        except OSError as e:
            raise StorageUnavailable(
                f"Failed to write record {index} to {self.file_path}: {e}") from e

        self.stats.records_written += 1
        self.stats.bytes_written += len(data)

    def append_block(self, data: bytes) -> None:
        """
        Append one record at the end of the file, creating the file if needed.

        A trailing partial record is cut off first so the new record starts
        on a record boundary and stays readable.
        """
        self._check_block(data)
        with self.open('ab') as f:
            try:
                size = os.fstat(f.fileno()).st_size
                tail = size % self.record_size
                if tail:
                    self.stats.partial_tails += 1
                    logger.warning(f"Dropping {tail} trailing bytes in {self.file_path} "
                                   f"before appending (record size {self.record_size})")
                    f.truncate(size - tail)
                    f.seek(size - tail)
                f.write(data)
                self._sync(f)
            except OSError as e:
                raise StorageUnavailable(
                    f"Failed to append record to {self.file_path}: {e}") from e

        self.stats.records_written += 1
        self.stats.bytes_written += len(data)

    def _check_block(self, data: bytes) -> None:
        if len(data) != self.record_size:
            raise ValueError(
                f"Record data must be exactly {self.record_size} bytes, got {len(data)}")

    @staticmethod
    def _sync(f: BinaryIO) -> None:
        f.flush()
        os.fsync(f.fileno())
