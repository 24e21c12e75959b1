from enum import Enum


class Outcome(Enum):
    """
    Result of a keyed mutation (update or delete).

    A missing key is a normal result, not an error: FOUND means the first
    record with the key was changed, NOT_FOUND means nothing was touched.
    """

    FOUND = 1
    NOT_FOUND = 0

    def is_found(self) -> bool:
        return self == Outcome.FOUND

    def __bool__(self) -> bool:
        return self.is_found()

    def __str__(self) -> str:
        return "FOUND" if self.is_found() else "NOT_FOUND"
