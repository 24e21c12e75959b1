from .record_desc import RecordDesc, Column
from .student import Student
from .codec import StudentCodec, STUDENT_DESC, RECORD_SIZE

__all__ = ["RecordDesc", "Column", "Student", "StudentCodec", "STUDENT_DESC", "RECORD_SIZE"]
