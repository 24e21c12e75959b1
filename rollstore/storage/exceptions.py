from ..core.exceptions import StoreException


class StorageError(StoreException):
    """Base class for storage-related errors"""
    pass


class StorageUnavailable(StorageError):
    """Raised when the backing file cannot be opened, created, written or flushed"""
    pass


class CorruptionError(StorageError):
    """Raised when a full record block cannot be decoded"""

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} (at byte offset {offset})")
        self.offset = offset
