from .core import Student, StudentCodec, RECORD_SIZE, StoreException, DuplicateKeyError
from .config import StoreSettings
from .storage import Outcome, StorageError, StorageUnavailable, CorruptionError
from .storage.record_store import RecordStore

__all__ = [
    "RecordStore",
    "Student",
    "StudentCodec",
    "RECORD_SIZE",
    "StoreSettings",
    "Outcome",
    "StoreException",
    "DuplicateKeyError",
    "StorageError",
    "StorageUnavailable",
    "CorruptionError",
]
