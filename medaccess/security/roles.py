"""Role membership authority. The governance core queries it; it owns no policy."""

import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "ADMIN"
    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"


class RoleAuthority(Protocol):
    """Answers and changes role membership. Implemented by the identity system."""

    def has_role(self, principal: str, role: Role) -> bool: ...
    def grant_role(self, principal: str, role: Role) -> None: ...
    def revoke_role(self, principal: str, role: Role) -> None: ...


class InMemoryRoleAuthority:
    """In-memory role assignments: role -> set of principals. For tests or single-node."""

    def __init__(self, admins: tuple[str, ...] = ()) -> None:
        self._members: dict[Role, set[str]] = {role: set() for role in Role}
        for admin in admins:
            self._members[Role.ADMIN].add(admin)

    def has_role(self, principal: str, role: Role) -> bool:
        return principal in self._members[role]

    def grant_role(self, principal: str, role: Role) -> None:
        if principal not in self._members[role]:
            self._members[role].add(principal)
            logger.info("role_granted", extra={"target": principal, "role": role.value})

    def revoke_role(self, principal: str, role: Role) -> None:
        if principal in self._members[role]:
            self._members[role].discard(principal)
            logger.info("role_revoked", extra={"target": principal, "role": role.value})
