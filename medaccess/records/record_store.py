"""Per-subject append-only record sequences. Emits nothing; auditing is the caller's job."""

from datetime import datetime

from medaccess.domain.models.record import DataRecord
from medaccess.domain.validators.record_validator import validate_range, validate_record_inputs


class RecordStore:
    """
    Owns subject -> ordered list of DataRecord. Sole mutator of that mapping.
    Records are never reordered or removed once appended.
    """

    def __init__(self) -> None:
        self._sequences: dict[str, list[DataRecord]] = {}

    def append(self, subject: str, data_hash: str, description: str, timestamp: datetime) -> int:
        """
        Append a record for subject and return its index. Raises InvalidInputError.
        A timestamp earlier than the subject's last record is clamped up to it,
        so created_at never decreases along a sequence.
        """
        validate_record_inputs(data_hash, description)
        sequence = self._sequences.setdefault(subject, [])
        if sequence:
            timestamp = max(timestamp, sequence[-1].created_at)
        sequence.append(DataRecord(data_hash=data_hash, description=description, created_at=timestamp))
        return len(sequence) - 1

    def get(self, subject: str, index: int) -> DataRecord:
        return self._sequences[subject][index]

    def read_range(self, subject: str, start: int, end: int) -> list[DataRecord]:
        """
        Return records [start, end) for subject.
        end <= start always fails (InvalidRangeError); end is then clamped to the length.
        """
        validate_range(start, end)
        sequence = self._sequences.get(subject, [])
        end = min(end, len(sequence))
        if start >= end:
            return []
        return sequence[start:end]

    def count(self, subject: str) -> int:
        return len(self._sequences.get(subject, ()))
