"""Grant relation (subject -> grantee -> bool) and access-request throttling."""

from datetime import datetime, timedelta

from medaccess.access.cooldown import CooldownTracker
from medaccess.domain.exceptions import CooldownActiveError
from medaccess.domain.validators.record_validator import validate_identity


class AccessRegistry:
    """
    Owns the sparse grant relation and the cooldown tracker.
    Role checks on grantees belong to the caller (GovernanceService), evaluated at grant time.
    """

    def __init__(self, cooldown: CooldownTracker | None = None) -> None:
        self._cooldown = cooldown or CooldownTracker()
        # subject -> {grantee: granted}; dict order doubles as grant order.
        self._grants: dict[str, dict[str, bool]] = {}

    @property
    def cooldown_window(self) -> timedelta:
        return self._cooldown.window

    def request_access(self, requester: str, subject: str, now: datetime) -> None:
        """
        Accept a rate-limited access request and stamp the requester's clock.
        Raises InvalidInputError for a missing identity, CooldownActiveError inside the window.
        Does not grant anything.
        """
        validate_identity(requester, "requester")
        validate_identity(subject, "subject")
        if not self._cooldown.allow(requester, now):
            retry_after = self._cooldown.remaining(requester, now)
            raise CooldownActiveError(
                f"Requester '{requester}' must wait {retry_after.total_seconds():.0f}s before requesting again",
                retry_after=retry_after,
            )
        self._cooldown.record(requester, now)

    def grant(self, subject: str, grantee: str) -> None:
        """Set (subject, grantee) to granted. Idempotent."""
        row = self._grants.setdefault(subject, {})
        if not row.get(grantee, False):
            row.pop(grantee, None)
            row[grantee] = True

    def revoke(self, subject: str, grantee: str) -> None:
        """Set (subject, grantee) to not granted. Idempotent; never-granted pairs are fine."""
        row = self._grants.get(subject)
        if row is not None and grantee in row:
            row[grantee] = False

    def is_granted(self, subject: str, grantee: str) -> bool:
        return self._grants.get(subject, {}).get(grantee, False)

    def grantees(self, subject: str) -> list[str]:
        """Currently granted grantees of subject, in grant order."""
        return [grantee for grantee, granted in self._grants.get(subject, {}).items() if granted]
