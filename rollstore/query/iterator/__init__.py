from .record_iterator import RecordIterator
from .abstract_iterator import AbstractRecordIterator
from .record_scan import RecordScan

__all__ = ["RecordIterator", "AbstractRecordIterator", "RecordScan"]
