import shutil
import tempfile
import pytest
from pathlib import Path
from rollstore import RecordStore, Student, RECORD_SIZE, CorruptionError
from rollstore.core.record import StudentCodec


class TestRecovery:
    """Tests for cleanup after an interrupted delete."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.data_path = Path(self.temp_dir) / "student_records.dat"
        self.temp_path = Path(self.temp_dir) / "temp_records.dat"
        self.codec = StudentCodec()

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _encode(self, *rolls: int) -> bytes:
        return b"".join(
            self.codec.encode(Student(r, f"S{r}", "X", "Y", float(r), False)) for r in rolls)

    def test_nothing_to_recover(self):
        store = RecordStore(self.data_path)
        assert store.recover() is False
        assert not self.data_path.exists()

    def test_promotes_temp_when_data_file_missing(self):
        """Crash after removing the data file but before renaming the copy."""
        self.temp_path.write_bytes(self._encode(2, 3))

        store = RecordStore(self.data_path)

        assert not self.temp_path.exists()
        assert [s.roll_number for s in store.scan_all()] == [2, 3]

    def test_discards_temp_when_data_file_present(self):
        """Crash while the copy was still being written."""
        self.data_path.write_bytes(self._encode(1, 2, 3))
        self.temp_path.write_bytes(self._encode(2)[:RECORD_SIZE // 2])

        store = RecordStore(self.data_path)

        assert not self.temp_path.exists()
        assert [s.roll_number for s in store.scan_all()] == [1, 2, 3]

    def test_explicit_recover_reports_work(self):
        store = RecordStore(self.data_path)
        self.temp_path.write_bytes(self._encode(9))

        assert store.recover() is True
        assert store.find_by_key(9) is not None
        assert store.recover() is False

    def test_recovery_is_logged(self, caplog):
        self.data_path.write_bytes(self._encode(1))
        self.temp_path.write_bytes(b"")

        with caplog.at_level("WARNING", logger="rollstore.storage.record_store"):
            RecordStore(self.data_path)

        assert "Discarding leftover" in caplog.text

    def test_custom_temp_name(self):
        custom = Path(self.temp_dir) / "scratch.tmp"
        custom.write_bytes(self._encode(4))

        store = RecordStore(self.data_path, temp_file_name="scratch.tmp")

        assert not custom.exists()
        assert store.find_by_key(4) is not None

    def test_partial_leftover_is_not_promoted(self):
        """A leftover that is not a whole number of records cannot be a finished copy."""
        leftover = self._encode(2, 3)[:RECORD_SIZE + 50]
        self.temp_path.write_bytes(leftover)

        with pytest.raises(CorruptionError, match="not a whole number") as exc_info:
            RecordStore(self.data_path)

        assert exc_info.value.offset == RECORD_SIZE
        assert not self.data_path.exists()
        assert self.temp_path.read_bytes() == leftover

    def test_promotion_is_logged_with_size(self, caplog):
        self.temp_path.write_bytes(self._encode(2, 3))

        with caplog.at_level("WARNING", logger="rollstore.storage.record_store"):
            RecordStore(self.data_path)

        assert "Restoring" in caplog.text
        assert f"{2 * RECORD_SIZE} bytes, 2 records" in caplog.text
