"""Domain model for data records. Opaque references only — no medical payloads."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class DataRecord:
    """
    One entry in a subject's append-only record sequence.
    Immutable once created; never mutated or removed after append.
    """

    data_hash: str
    description: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data_hash": self.data_hash,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
        }
