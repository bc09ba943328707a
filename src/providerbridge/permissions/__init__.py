"""Permission index consulted by the request gate."""

from .index import PermissionIndex, index_permissions, revoke_permissions
from .models import PermissionGrant, PermissionKey

__all__ = [
    "PermissionGrant",
    "PermissionKey",
    "PermissionIndex",
    "index_permissions",
    "revoke_permissions",
]
