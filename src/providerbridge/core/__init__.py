"""Core infrastructure: configuration and exceptions."""

from .config import Config, get_core_config, set_core_config
from .exceptions import ConfigurationError, InvalidGrantError, ProviderBridgeError

__all__ = [
    "Config",
    "get_core_config",
    "set_core_config",
    "ProviderBridgeError",
    "ConfigurationError",
    "InvalidGrantError",
]
