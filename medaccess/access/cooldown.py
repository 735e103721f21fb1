"""Per-requester cooldown for access requests. Time is supplied by the caller."""

from datetime import datetime, timedelta
from typing import Any

DEFAULT_COOLDOWN = timedelta(minutes=5)


class CooldownTracker:
    """
    requester -> timestamp of last accepted request.
    A request is accepted if none was recorded or strictly more than the window has passed.
    Optional metrics callback, as with the tenant rate limiter.
    """

    def __init__(self, window: timedelta = DEFAULT_COOLDOWN, metrics_callback: Any = None) -> None:
        self._window = window
        self._last_request: dict[str, datetime] = {}
        self._metrics = metrics_callback

    @property
    def window(self) -> timedelta:
        return self._window

    def last_request(self, requester: str) -> datetime | None:
        return self._last_request.get(requester)

    def remaining(self, requester: str, now: datetime) -> timedelta:
        """Time left before requester may ask again; zero when allowed."""
        last = self._last_request.get(requester)
        if last is None:
            return timedelta(0)
        elapsed = now - last
        if elapsed > self._window:
            return timedelta(0)
        # Acceptance needs elapsed > window, so equality still waits a tick.
        return self._window - elapsed + timedelta(microseconds=1)

    def allow(self, requester: str, now: datetime) -> bool:
        """Check only; does not record. Records a metric when denied."""
        allowed = self.remaining(requester, now) == timedelta(0)
        if self._metrics and not allowed:
            if callable(self._metrics):
                self._metrics("cooldown_rejections", requester=requester)
            elif hasattr(self._metrics, "increment"):
                self._metrics.increment("cooldown_rejections", 1, requester=requester)
        return allowed

    def record(self, requester: str, now: datetime) -> None:
        self._last_request[requester] = now
