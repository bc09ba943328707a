"""Permission index configuration."""

from pydantic import BaseModel, ConfigDict

from .base import DEFAULT_PERMISSION_NAMESPACE


class PermissionsConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Envelope key used by PermissionIndex.as_dict() / from_dict()
    namespace: str = DEFAULT_PERMISSION_NAMESPACE
