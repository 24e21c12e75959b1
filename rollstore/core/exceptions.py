"""Custom exceptions for the record store."""


class StoreException(Exception):
    """Base exception for record-store errors."""
    pass


class DuplicateKeyError(StoreException):
    """Raised when an append would introduce a roll number that already exists."""

    def __init__(self, roll_number: int):
        super().__init__(f"Roll number {roll_number} already exists")
        self.roll_number = roll_number
