from .exceptions import StoreException, DuplicateKeyError
from .record import Student, StudentCodec, RecordDesc, RECORD_SIZE
from .types import FieldType, Field

__all__ = [
    "StoreException",
    "DuplicateKeyError",
    "Student",
    "StudentCodec",
    "RecordDesc",
    "RECORD_SIZE",
    "FieldType",
    "Field",
]
