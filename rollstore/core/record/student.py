import math
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Student:
    """
    A single student record.

    Text fields may be longer than their on-disk columns; they are
    truncated when the record is encoded (see TextField).
    """
    roll_number: int
    name: str
    student_class: str
    address: str
    total_score: float
    fee_paid: bool

    def __post_init__(self):
        if isinstance(self.roll_number, bool) or not isinstance(self.roll_number, int):
            raise TypeError(f"roll_number must be int, got {type(self.roll_number)}")

        for attr in ("name", "student_class", "address"):
            if not isinstance(getattr(self, attr), str):
                raise TypeError(f"{attr} must be str, got {type(getattr(self, attr))}")

        if isinstance(self.total_score, bool) or not isinstance(self.total_score, (int, float)):
            raise TypeError(f"total_score must be a number, got {type(self.total_score)}")

        if math.isnan(self.total_score) or self.total_score < 0:
            raise ValueError(f"total_score must be non-negative, got {self.total_score}")

        object.__setattr__(self, "total_score", float(self.total_score))
        object.__setattr__(self, "fee_paid", bool(self.fee_paid))

    def with_score(self, total_score: float, fee_paid: bool) -> 'Student':
        """Return a copy with only the mutable fields changed."""
        return replace(self, total_score=total_score, fee_paid=fee_paid)

    def __str__(self) -> str:
        return '\t'.join([
            str(self.roll_number),
            self.name,
            self.student_class,
            self.address,
            f"{self.total_score:.2f}",
            "PAID" if self.fee_paid else "NOT PAID",
        ])
