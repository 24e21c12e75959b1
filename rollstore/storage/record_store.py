import logging
import os
from copy import copy
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from ..config import StoreSettings
from ..core.exceptions import DuplicateKeyError
from ..core.record import Student, StudentCodec
from ..query.iterator import RecordScan
from .exceptions import StorageUnavailable, CorruptionError
from .outcome import Outcome
from .record_file import RecordFile, RecordFileStats

logger = logging.getLogger(__name__)

Mutator = Callable[[Student], Student]


class RecordStore:
    """
    File-backed store of Student records.

    Every operation opens the backing file, does a bounded amount of work
    and closes it again; nothing is cached between calls. All lookups are
    linear scans in file order, and when several records share a roll
    number only the first one is ever found, updated or deleted.

    Key Design Decisions:
    1. **Append-only creates**: new records always go at the end of the file
    2. **In-place updates**: a record is rewritten at its own offset with
       one fixed-width write; nothing else moves
    3. **Copy-and-replace deletes**: survivors are copied to a temporary
       file next to the data file, which is then renamed over it
    4. **No locking**: callers must not share a data file across processes
    """

    DEFAULT_TEMP_FILE_NAME = "temp_records.dat"
    MUTABLE_COLUMNS = ["total_score", "fee_paid"]

    def __init__(self, data_file: str | Path,
                 temp_file_name: str = DEFAULT_TEMP_FILE_NAME,
                 enforce_unique_keys: bool = False,
                 codec: Optional[StudentCodec] = None):
        """
        Args:
            data_file: Path of the backing record file. It need not exist yet.
            temp_file_name: Name of the scratch file used by deletes, created
                in the same directory as data_file
            enforce_unique_keys: Reject appends whose roll number is already stored
            codec: Record codec, defaults to the standard student layout
        """
        self.codec = codec or StudentCodec()
        self.record_file = RecordFile(data_file, self.codec.record_size)
        self.temp_path = self.record_file.file_path.parent / temp_file_name
        self.enforce_unique_keys = enforce_unique_keys

        if self.temp_path.name == self.record_file.file_path.name:
            raise ValueError(f"Temporary file name must differ from the data file: {temp_file_name}")

        self.recover()

    @classmethod
    def from_settings(cls, settings: StoreSettings) -> 'RecordStore':
        return cls(settings.data_file,
                   temp_file_name=settings.temp_file_name,
                   enforce_unique_keys=settings.enforce_unique_keys)

    @property
    def data_path(self) -> Path:
        return self.record_file.file_path

    def recover(self) -> bool:
        """
        Clean up after a delete that was interrupted mid-way.

        - data file missing, temp file present: the data file was removed
          before the copy was renamed into place, so the copy is promoted.
        - both present: the data file was never replaced and is still
          authoritative, so the copy is discarded.

        A finished copy always holds whole records, so a leftover whose
        size is not a multiple of the record size is never promoted.

        Returns:
            True if a leftover temporary file was found and handled

        Raises:
            CorruptionError: If the data file is missing and the leftover
                is not a whole number of records. Both files are left as they are.
        """
        if not self.temp_path.exists():
            return False

        if not self.record_file.exists():
            size = self.temp_path.stat().st_size
            tail = size % self.codec.record_size
            if tail:
                raise CorruptionError(
                    f"Refusing to restore {self.data_path} from {self.temp_path}: "
                    f"{size} bytes is not a whole number of {self.codec.record_size}-byte records",
                    size - tail)

            logger.warning(f"Restoring {self.data_path} from leftover {self.temp_path} "
                           f"({size} bytes, {size // self.codec.record_size} records)")
            self._replace_original()
        else:
            logger.warning(f"Discarding leftover {self.temp_path}; {self.data_path} is intact")
            self._discard_temp()
        return True

    def append(self, student: Student) -> None:
        """
        Write one record at the end of the file, creating the file if absent.

        Raises:
            StorageUnavailable: If the file cannot be opened, written or flushed
            DuplicateKeyError: If uniqueness is enforced and the key exists
            TypeError, ValueError: If a value cannot be encoded
        """
        data = self.codec.encode(student)

        if self.enforce_unique_keys and self._find_index(student.roll_number) is not None:
            raise DuplicateKeyError(student.roll_number)

        self.record_file.append_block(data)
        logger.info(f"Appended record for roll number {student.roll_number} to {self.data_path}")

    def scan_all(self) -> RecordScan:
        """
        Return a lazy, restartable scan over all records in append order.

        Each iteration re-reads the file from the start. A missing file
        yields nothing.
        """
        return RecordScan(self.record_file, self.codec)

    def find_by_key(self, roll_number: int) -> Optional[Student]:
        """Return the first record with this roll number, or None."""
        f = self._open_existing('rb')
        if f is None:
            return None

        with f:
            for index, block in self.record_file.iter_blocks(f):
                if self.codec.decode_key(block) == roll_number:
                    return self._decode(block, index)

        logger.debug(f"Roll number {roll_number} not found in {self.data_path}")
        return None

    def update_by_key(self, roll_number: int, mutator: Mutator) -> Outcome:
        """
        Rewrite the first record with this roll number in place.

        `mutator` receives the stored record and returns the desired one.
        Only total_score and fee_paid are taken from its result, and only
        their bytes are rewritten; every other byte of the stored block,
        text columns and padding included, is left untouched.

        Raises:
            StorageUnavailable: If the file cannot be opened or written
            CorruptionError: If the matching block cannot be decoded
        """
        f = self._open_existing('r+b')
        if f is None:
            return Outcome.NOT_FOUND

        with f:
            for index, block in self.record_file.iter_blocks(f):
                if self.codec.decode_key(block) != roll_number:
                    continue

                current = self._decode(block, index)
                changed = mutator(current)
                if not isinstance(changed, Student):
                    raise TypeError(f"Mutator must return a Student, got {type(changed)}")

                updated = current.with_score(changed.total_score, changed.fee_paid)
                data = self.codec.encode_columns(block, updated, self.MUTABLE_COLUMNS)
                self.record_file.write_block(f, index, data)
                logger.info(f"Updated roll number {roll_number} at record {index} in {self.data_path}")
                return Outcome.FOUND

        logger.debug(f"Roll number {roll_number} not found in {self.data_path}")
        return Outcome.NOT_FOUND

    def set_score(self, roll_number: int, total_score: float, fee_paid: bool) -> Outcome:
        """Set the score and fee status of the first record with this roll number."""
        return self.update_by_key(roll_number, lambda s: s.with_score(total_score, fee_paid))

    def delete_by_key(self, roll_number: int) -> Outcome:
        """
        Remove the first record with this roll number.

        Survivors are copied, in order, into the temporary file, which then
        replaces the data file with a single os.replace. When nothing
        matches, the temporary file is removed and the data file is left
        as it was.

        Raises:
            StorageUnavailable: If either file cannot be opened, written or replaced
        """
        source = self._open_existing('rb')
        if source is None:
            return Outcome.NOT_FOUND

        try:
            with source:
                found = self._copy_without(source, roll_number)
        except OSError as e:
            self._discard_temp()
            raise StorageUnavailable(f"Failed to rewrite {self.data_path} via {self.temp_path}: {e}") from e
        except Exception:
            self._discard_temp()
            raise

        if not found:
            self._discard_temp()
            logger.debug(f"Roll number {roll_number} not found in {self.data_path}")
            return Outcome.NOT_FOUND

        self._replace_original()
        logger.info(f"Deleted roll number {roll_number} from {self.data_path}")
        return Outcome.FOUND

    def count(self) -> int:
        """Number of complete records in the file."""
        return self.record_file.num_records()

    def is_empty(self) -> bool:
        return self.count() == 0

    def get_stats(self) -> RecordFileStats:
        """Get a snapshot of I/O statistics for this store"""
        return copy(self.record_file.stats)

    def _find_index(self, roll_number: int) -> Optional[int]:
        f = self._open_existing('rb')
        if f is None:
            return None

        with f:
            for index, block in self.record_file.iter_blocks(f):
                if self.codec.decode_key(block) == roll_number:
                    return index
        return None

    def _copy_without(self, source: BinaryIO, roll_number: int) -> bool:
        found = False
        with self._open_temp() as temp:
            for _, block in self.record_file.iter_blocks(source):
                if not found and self.codec.decode_key(block) == roll_number:
                    found = True
                    continue
                temp.write(block)

            if found:
                temp.flush()
                os.fsync(temp.fileno())
        return found

    def _open_existing(self, mode: str) -> Optional[BinaryIO]:
        try:
            return self.record_file.open(mode)
        except FileNotFoundError:
            logger.debug(f"No data file at {self.data_path}")
            return None

    def _open_temp(self) -> BinaryIO:
        try:
            return open(self.temp_path, 'wb')
        except OSError as e:
            raise StorageUnavailable(f"Cannot create temporary file {self.temp_path}: {e}") from e

    def _replace_original(self) -> None:
        try:
            os.replace(self.temp_path, self.data_path)
        except OSError as e:
            raise StorageUnavailable(
                f"Failed to replace {self.data_path} with {self.temp_path}: {e}") from e

    def _discard_temp(self) -> None:
        try:
            self.temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temporary file {self.temp_path}: {e}")

    def _decode(self, block: bytes, index: int) -> Student:
        try:
            return self.codec.decode(block)
        except (TypeError, ValueError) as e:
            raise CorruptionError(f"Undecodable record {index} in {self.data_path}: {e}",
                                  index * self.codec.record_size) from e
