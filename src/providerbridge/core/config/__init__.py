"""Modular configuration system for the provider bridge core."""

from .base import (
    DEFAULT_PERMISSION_NAMESPACE,
    RAW_ERROR_DESCRIPTION,
    get_bool_env,
    get_env,
)
from .errors import ErrorsConfig
from .main import (
    Config,
    get_core_config,
    set_core_config,
)
from .permissions import PermissionsConfig

__all__ = [
    # Main classes
    "Config",
    # Main functions
    "get_core_config",
    "set_core_config",
    # Base utilities
    "get_env",
    "get_bool_env",
    "DEFAULT_PERMISSION_NAMESPACE",
    "RAW_ERROR_DESCRIPTION",
    # Section configs
    "ErrorsConfig",
    "PermissionsConfig",
]
