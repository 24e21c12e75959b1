import shutil
import struct
import tempfile
import pytest
from pathlib import Path
from unittest.mock import patch
from rollstore import (
    RecordStore, Student, Outcome, RECORD_SIZE,
    StorageUnavailable, CorruptionError, DuplicateKeyError, StoreSettings,
)


def make_student(roll: int, name: str = None, score: float = 50.0, paid: bool = False) -> Student:
    return Student(roll_number=roll, name=name or f"Student {roll}", student_class="10th Grade",
                   address=f"{roll} School Lane", total_score=score, fee_paid=paid)


class TestRecordStore:
    """Tests for RecordStore operations."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.data_path = Path(self.temp_dir) / "student_records.dat"
        self.store = RecordStore(self.data_path)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _records(self) -> list[bytes]:
        data = self.data_path.read_bytes()
        return [data[i:i + RECORD_SIZE] for i in range(0, len(data), RECORD_SIZE)]

    def _temp_leftovers(self) -> list[Path]:
        return [p for p in Path(self.temp_dir).iterdir() if p != self.data_path]

    # Empty store
    def test_missing_file_is_empty_store(self):
        assert list(self.store.scan_all()) == []
        assert self.store.is_empty()
        assert self.store.count() == 0
        assert not self.data_path.exists()

    def test_missing_file_not_found_everywhere(self):
        assert self.store.find_by_key(1) is None
        assert self.store.set_score(1, 10.0, True) is Outcome.NOT_FOUND
        assert self.store.delete_by_key(1) is Outcome.NOT_FOUND
        assert not self.data_path.exists()
        assert self._temp_leftovers() == []

    # Append / scan
    def test_append_then_find(self):
        s = make_student(7, "Ana", 88.5, True)
        self.store.append(s)
        assert self.store.find_by_key(7) == s

    def test_append_writes_one_record_width(self):
        self.store.append(make_student(1))
        assert self.data_path.stat().st_size == RECORD_SIZE
        self.store.append(make_student(2))
        assert self.data_path.stat().st_size == 2 * RECORD_SIZE

    def test_append_never_touches_existing_records(self):
        self.store.append(make_student(1))
        before = self.data_path.read_bytes()
        self.store.append(make_student(2))
        assert self.data_path.read_bytes()[:RECORD_SIZE] == before

    def test_scan_count_and_order(self):
        students = [make_student(roll) for roll in (30, 10, 20, 50, 40)]
        for s in students:
            self.store.append(s)

        assert list(self.store.scan_all()) == students
        assert self.store.count() == 5
        assert not self.store.is_empty()

    def test_scan_is_restartable(self):
        for roll in (1, 2, 3):
            self.store.append(make_student(roll))

        scan = self.store.scan_all()
        first = [s.roll_number for s in scan]
        second = [s.roll_number for s in scan]
        assert first == second == [1, 2, 3]

    def test_scan_sees_later_appends(self):
        scan = self.store.scan_all()
        assert list(scan) == []
        self.store.append(make_student(1))
        assert [s.roll_number for s in scan] == [1]

    def test_scan_can_short_circuit(self):
        for roll in range(1, 101):
            self.store.append(make_student(roll))

        reads_before = self.store.get_stats().records_read
        for s in self.store.scan_all():
            if s.roll_number == 3:
                break
        assert self.store.get_stats().records_read - reads_before <= 4

    def test_trailing_partial_record_is_ignored(self):
        self.store.append(make_student(1))
        self.store.append(make_student(2))
        with open(self.data_path, 'ab') as f:
            f.write(b"\x01" * (RECORD_SIZE // 2))

        assert [s.roll_number for s in self.store.scan_all()] == [1, 2]
        assert self.store.count() == 2
        assert self.store.find_by_key(2) is not None

    def test_append_after_partial_record_is_visible(self):
        self.store.append(make_student(1))
        with open(self.data_path, 'ab') as f:
            f.write(b"\x07" * 10)

        self.store.append(make_student(2))

        assert self.data_path.stat().st_size == 2 * RECORD_SIZE
        assert self.store.count() == 2
        assert self.store.find_by_key(2) == make_student(2)
        assert [s.roll_number for s in self.store.scan_all()] == [1, 2]

    def test_append_with_invalid_value_writes_nothing(self):
        with pytest.raises(ValueError):
            self.store.append(make_student(2**31))
        assert not self.data_path.exists()

    def test_append_storage_unavailable(self):
        with patch("rollstore.storage.record_file.os.fsync", side_effect=OSError("disk full")):
            with pytest.raises(StorageUnavailable):
                self.store.append(make_student(1))

    # Duplicates
    def test_duplicates_tolerated_first_wins(self):
        self.store.append(make_student(5, "First"))
        self.store.append(make_student(5, "Second"))

        assert self.store.count() == 2
        assert self.store.find_by_key(5).name == "First"

        assert self.store.set_score(5, 99.0, True) is Outcome.FOUND
        records = list(self.store.scan_all())
        assert records[0].total_score == 99.0
        assert records[1].total_score == 50.0

        assert self.store.delete_by_key(5) is Outcome.FOUND
        assert [s.name for s in self.store.scan_all()] == ["Second"]

    def test_enforce_unique_keys(self):
        store = RecordStore(self.data_path, enforce_unique_keys=True)
        store.append(make_student(5))

        with pytest.raises(DuplicateKeyError, match="Roll number 5 already exists") as exc_info:
            store.append(make_student(5, "Again"))

        assert exc_info.value.roll_number == 5
        assert store.count() == 1

    # Update
    def test_update_isolation(self):
        for roll in (1, 2, 3):
            self.store.append(make_student(roll))
        before = self._records()

        assert self.store.set_score(2, 77.5, True) is Outcome.FOUND

        after = self._records()
        assert len(after) == 3
        assert after[0] == before[0]
        assert after[2] == before[2]
        assert after[1] != before[1]

        updated = self.store.find_by_key(2)
        assert updated.total_score == 77.5
        assert updated.fee_paid is True
        assert updated.name == "Student 2"

    def test_update_only_applies_mutable_fields(self):
        self.store.append(make_student(1, "Ana"))

        def rename(current: Student) -> Student:
            return Student(999, "Changed", "X", "Y", 12.0, True)

        assert self.store.update_by_key(1, rename) is Outcome.FOUND
        s = self.store.find_by_key(1)
        assert (s.roll_number, s.name, s.student_class) == (1, "Ana", "10th Grade")
        assert (s.total_score, s.fee_paid) == (12.0, True)
        assert self.store.find_by_key(999) is None

    def test_update_mutator_sees_current_record(self):
        self.store.append(make_student(1, score=40.0))
        seen = []

        def bump(current: Student) -> Student:
            seen.append(current)
            return current.with_score(current.total_score + 10, current.fee_paid)

        self.store.update_by_key(1, bump)
        assert seen == [make_student(1, score=40.0)]
        assert self.store.find_by_key(1).total_score == 50.0

    def test_update_mutator_must_return_student(self):
        self.store.append(make_student(1))
        before = self.data_path.read_bytes()

        with pytest.raises(TypeError, match="Mutator must return a Student"):
            self.store.update_by_key(1, lambda s: None)
        assert self.data_path.read_bytes() == before

    def test_update_not_found_leaves_file_untouched(self):
        self.store.append(make_student(1))
        before = self.data_path.read_bytes()

        called = []
        assert self.store.update_by_key(2, called.append) is Outcome.NOT_FOUND
        assert called == []
        assert self.data_path.read_bytes() == before

    def test_update_invalid_score_leaves_file_untouched(self):
        self.store.append(make_student(1))
        before = self.data_path.read_bytes()

        with pytest.raises(ValueError):
            self.store.set_score(1, -5.0, True)
        assert self.data_path.read_bytes() == before

    def test_update_keeps_undecodable_text_bytes(self):
        """Test that an update rewrites only the score and fee bytes of a C-written block."""
        legacy = bytearray(RECORD_SIZE)
        legacy[0:4] = struct.pack("<i", 1)
        legacy[4:9] = b"Jos\xe9\x00"
        legacy[54:59] = b"10\xba\x00\xff"
        legacy[84:92] = b"Rua \xe7\x00\xde\xad"
        legacy[184:188] = struct.pack("<f", 42.0)
        legacy[189:192] = b"\xcc\xcc\xcc"
        self.data_path.write_bytes(bytes(legacy))

        assert self.store.set_score(1, 60.0, True) is Outcome.FOUND

        after = self.data_path.read_bytes()
        assert len(after) == RECORD_SIZE
        assert after[:184] == bytes(legacy[:184])
        assert struct.unpack("<f", after[184:188])[0] == 60.0
        assert after[188] == 1
        assert after[189:] == b"\xcc\xcc\xcc"

    # Delete
    def test_delete_isolation(self):
        for roll in (1, 2, 3, 4):
            self.store.append(make_student(roll))
        before = self._records()

        assert self.store.delete_by_key(2) is Outcome.FOUND

        assert self.data_path.stat().st_size == 3 * RECORD_SIZE
        assert self._records() == [before[0], before[2], before[3]]
        assert self._temp_leftovers() == []

    def test_delete_last_record_leaves_empty_file(self):
        self.store.append(make_student(1))
        assert self.store.delete_by_key(1) is Outcome.FOUND
        assert self.data_path.exists()
        assert self.data_path.stat().st_size == 0
        assert self.store.is_empty()

    def test_delete_not_found_leaves_file_untouched(self):
        self.store.append(make_student(1))
        before = self.data_path.read_bytes()

        assert self.store.delete_by_key(2) is Outcome.NOT_FOUND
        assert self.data_path.read_bytes() == before
        assert self._temp_leftovers() == []

    def test_delete_drops_trailing_partial_record(self):
        for roll in (1, 2, 3):
            self.store.append(make_student(roll))
        before = self._records()
        with open(self.data_path, 'ab') as f:
            f.write(b"\x07" * 10)

        assert self.store.delete_by_key(2) is Outcome.FOUND

        assert self.data_path.stat().st_size == 2 * RECORD_SIZE
        assert self._records() == [before[0], before[2]]

    def test_delete_not_found_keeps_trailing_partial_record(self):
        self.store.append(make_student(1))
        with open(self.data_path, 'ab') as f:
            f.write(b"\x07" * 10)

        assert self.store.delete_by_key(9) is Outcome.NOT_FOUND
        assert self.data_path.stat().st_size == RECORD_SIZE + 10

    def test_delete_preserves_foreign_bytes_of_survivors(self):
        """Test that surviving blocks are copied verbatim, garbage after terminators included."""
        self.store.append(make_student(1))
        legacy = bytearray(RECORD_SIZE)
        legacy[0:4] = struct.pack("<i", 2)
        legacy[4:12] = b"Ben\x00\xde\xad\xbe\xef"
        legacy[184:188] = struct.pack("<f", 70.0)
        with open(self.data_path, 'ab') as f:
            f.write(bytes(legacy))

        assert self.store.delete_by_key(1) is Outcome.FOUND
        assert self.data_path.read_bytes() == bytes(legacy)
        assert self.store.find_by_key(2).name == "Ben"

    def test_delete_replace_failure_keeps_original(self):
        self.store.append(make_student(1))
        before = self.data_path.read_bytes()

        with patch("rollstore.storage.record_store.os.replace", side_effect=OSError("busy")):
            with pytest.raises(StorageUnavailable, match="Failed to replace"):
                self.store.delete_by_key(1)

        assert self.data_path.read_bytes() == before

    def test_delete_copy_failure_discards_temp(self):
        self.store.append(make_student(1))
        self.store.append(make_student(2))
        before = self.data_path.read_bytes()

        with patch("rollstore.storage.record_store.os.fsync", side_effect=OSError("disk full")):
            with pytest.raises(StorageUnavailable, match="Failed to rewrite"):
                self.store.delete_by_key(1)

        assert self.data_path.read_bytes() == before
        assert self._temp_leftovers() == []

    # Corruption
    def test_corrupt_record_raises_corruption_error(self):
        self.store.append(make_student(1))
        bad = bytearray(RECORD_SIZE)
        bad[0:4] = struct.pack("<i", 2)
        bad[184:188] = struct.pack("<f", -1.0)
        with open(self.data_path, 'ab') as f:
            f.write(bytes(bad))

        with pytest.raises(CorruptionError) as exc_info:
            self.store.find_by_key(2)
        assert exc_info.value.offset == RECORD_SIZE

        with pytest.raises(CorruptionError):
            list(self.store.scan_all())

        # the healthy record is still reachable by key
        assert self.store.find_by_key(1) == make_student(1)

    # Configuration
    def test_temp_file_lives_beside_data_file(self):
        assert self.store.temp_path == Path(self.temp_dir) / "temp_records.dat"

    def test_temp_name_must_differ_from_data_file(self):
        with pytest.raises(ValueError, match="must differ"):
            RecordStore(self.data_path, temp_file_name="student_records.dat")

    def test_from_settings(self):
        settings = StoreSettings(data_file=self.data_path, temp_file_name="scratch.tmp",
                                 enforce_unique_keys=True)
        store = RecordStore.from_settings(settings)
        assert store.data_path == self.data_path
        assert store.temp_path == Path(self.temp_dir) / "scratch.tmp"
        assert store.enforce_unique_keys is True

    def test_get_stats_returns_copy(self):
        self.store.append(make_student(1))
        stats = self.store.get_stats()
        stats.records_written = 100
        assert self.store.get_stats().records_written == 1


class TestWorkedExample:
    """End-to-end walk through create, read, update and delete."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.store = RecordStore(Path(self.temp_dir) / "student_records.dat")

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_crud_sequence(self):
        ana = Student(101, "Ana", "10th Grade", "1 North St", 88.5, True)
        ben = Student(102, "Ben", "10th Grade", "2 South St", 70.0, False)
        self.store.append(ana)
        self.store.append(ben)

        found = self.store.find_by_key(102)
        assert (found.name, found.total_score, found.fee_paid) == ("Ben", 70.0, False)

        assert self.store.set_score(101, 91.0, True) is Outcome.FOUND
        assert self.store.find_by_key(101) == ana.with_score(91.0, True)
        assert self.store.find_by_key(102) == ben

        assert self.store.delete_by_key(101) is Outcome.FOUND
        assert list(self.store.scan_all()) == [ben]
