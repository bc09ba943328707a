"""Permission grant model.

A grant scopes wallet access to one ``(chainID, accountAddress, origin)``
triple. Any other fields the approval flow attaches (``key``, ``title``,
``faviconUrl``, ``state``...) are carried along untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from providerbridge.core.exceptions import InvalidGrantError

PermissionKey = tuple[str, str, str]


class PermissionGrant(BaseModel):
    """A single approved permission request."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    chain_id: str = Field(..., min_length=1, alias="chainID")
    account_address: str = Field(..., min_length=1, alias="accountAddress")
    origin: str = Field(..., min_length=1)

    @property
    def identity(self) -> PermissionKey:
        """Identity triple of this grant."""
        return (self.chain_id, self.account_address, self.origin)

    @classmethod
    def coerce(cls, value: PermissionGrant | Mapping[str, Any]) -> PermissionGrant:
        """Accept either a grant or its wire mapping.

        Raises:
            InvalidGrantError: If a key field is missing or empty.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise InvalidGrantError(
                f"Permission grant must be a mapping, got {type(value).__name__}"
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise InvalidGrantError(
                f"Invalid permission grant, bad fields: {', '.join(fields)}",
                fields=fields,
            ) from e

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the camelCase field names the page side expects."""
        return self.model_dump(by_alias=True)


__all__ = ["PermissionGrant", "PermissionKey"]
