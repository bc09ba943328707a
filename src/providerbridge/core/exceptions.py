"""Exception hierarchy for providerbridge.

Only permission indexing raises: grants come from a trusted collaborator, so a
malformed grant is a programming error and fails fast. Error normalization
never raises (see ``providerbridge.errors``).

Usage:
    from providerbridge.core.exceptions import InvalidGrantError
"""

from __future__ import annotations


class ProviderBridgeError(Exception):
    """Base exception for providerbridge."""

    code: str = "PROVIDER_BRIDGE_ERROR"

    def __init__(self, message: str = "", **details: object) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(ProviderBridgeError):
    """Invalid or inconsistent configuration."""

    code = "CONFIGURATION_ERROR"


class InvalidGrantError(ProviderBridgeError, ValueError):
    """A permission grant is missing one of its key fields."""

    code = "INVALID_GRANT"


__all__ = ["ProviderBridgeError", "ConfigurationError", "InvalidGrantError"]
