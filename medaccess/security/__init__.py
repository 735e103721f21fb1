"""Security: roles, role authority, RBAC. No FastAPI."""

from medaccess.security.rbac import RBACService
from medaccess.security.roles import InMemoryRoleAuthority, Role, RoleAuthority

__all__ = [
    "RBACService",
    "Role",
    "RoleAuthority",
    "InMemoryRoleAuthority",
]
