"""Time source for governance operations. Injected; never read ambiently by the core."""

from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """Supplies 'now' for the serialized operation stream."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC. Used by the HTTP app; tests inject a fixed clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
