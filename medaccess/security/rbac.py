"""Role-based access control for governance actions. No FastAPI."""

from medaccess.security.exceptions import UnauthorizedError
from medaccess.security.roles import Role, RoleAuthority


# Permission matrix:
# Action            ADMIN  PATIENT  DOCTOR
# add_data_record   ✗      ✓        ✗
# request_access    ✗      ✗        ✓
# grant_access      ✗      ✓        ✗
# revoke_access     ✗      ✓        ✗
# register_patient  ✓      ✗        ✗
# register_doctor   ✓      ✗        ✗
# view_audit_trail  ✓      ✗        ✗
#
# Reading records is not role-gated: the subject or a granted grantee may read.

_ACTION_ROLES: dict[str, Role] = {
    "add_data_record": Role.PATIENT,
    "request_access": Role.DOCTOR,
    "grant_access": Role.PATIENT,
    "revoke_access": Role.PATIENT,
    "register_patient": Role.ADMIN,
    "register_doctor": Role.ADMIN,
    "view_audit_trail": Role.ADMIN,
}


class RBACService:
    """Check the caller's role for an action against the injected RoleAuthority."""

    def __init__(self, authority: RoleAuthority) -> None:
        self._authority = authority

    def check_permission(self, principal: str, action: str) -> None:
        """Raises UnauthorizedError if principal does not hold the role the action requires."""
        role = _ACTION_ROLES.get(action)
        if role is None or not principal or not self._authority.has_role(principal, role):
            raise UnauthorizedError(
                f"Principal '{principal}' does not have permission for action '{action}'"
            )

    def require_role(self, principal: str, role: Role, *, subject_label: str = "Principal") -> None:
        """Raises UnauthorizedError if principal does not currently hold role."""
        if not self._authority.has_role(principal, role):
            raise UnauthorizedError(f"{subject_label} '{principal}' does not hold role {role.value}")
