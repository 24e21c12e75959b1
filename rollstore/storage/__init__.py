from .record_file import RecordFile, RecordFileStats
from .outcome import Outcome
from .exceptions import StorageError, StorageUnavailable, CorruptionError

__all__ = ["RecordFile", "RecordFileStats", "Outcome",
           "StorageError", "StorageUnavailable", "CorruptionError"]
