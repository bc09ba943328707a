"""Provider bridge core.

Indexes dApp permission grants and normalizes RPC failures into canonical
EIP-1193 provider errors.
"""

from providerbridge.errors import CanonicalError, ErrorNormalizer, normalize
from providerbridge.permissions import (
    PermissionGrant,
    PermissionIndex,
    index_permissions,
    revoke_permissions,
)

__version__ = "0.1.0"

__all__ = [
    "CanonicalError",
    "ErrorNormalizer",
    "normalize",
    "PermissionGrant",
    "PermissionIndex",
    "index_permissions",
    "revoke_permissions",
]
