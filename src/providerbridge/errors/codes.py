"""EIP-1193 provider error codes and the canonical wire error."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class EIP1193ErrorCode:
    code: int
    message: str


EIP1193_ERROR_CODES: dict[str, EIP1193ErrorCode] = {
    "userRejectedRequest": EIP1193ErrorCode(4001, "User Rejected Request"),
    "unauthorized": EIP1193ErrorCode(4100, "Unauthorized"),
    "unsupportedMethod": EIP1193ErrorCode(4200, "Unsupported Method"),
    "disconnected": EIP1193ErrorCode(4900, "Disconnected"),
    "chainDisconnected": EIP1193ErrorCode(4901, "Chain Disconnected"),
}

USER_REJECTED_REQUEST = EIP1193_ERROR_CODES["userRejectedRequest"]

_KNOWN_CODES = frozenset(entry.code for entry in EIP1193_ERROR_CODES.values())


class CanonicalError(BaseModel):
    """The ``{code, message}`` error returned to the requesting page.

    Extra keys of a passed-through provider payload (e.g. ``data``) are kept.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    code: int
    message: str

    def to_json(self) -> dict[str, Any]:
        return self.model_dump()


class EIP1193Error(Exception):
    """Raised by wallet-side handlers to reject a request with a provider code."""

    def __init__(self, error: EIP1193ErrorCode, data: Any = None) -> None:
        super().__init__(error.message)
        self.code = error.code
        self.message = error.message
        self.data = data

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


def is_eip1193_error(value: Any) -> bool:
    """Whether ``value`` is a provider error payload with a code from the table."""
    if not isinstance(value, Mapping):
        return False
    code = value.get("code")
    message = value.get("message")
    # bool is an int subclass; True must not pass as code 1
    if not isinstance(code, int) or isinstance(code, bool):
        return False
    return code in _KNOWN_CODES and isinstance(message, str)


def user_rejected_request() -> CanonicalError:
    """Fresh default error for any unrecognized or ambiguous failure."""
    return CanonicalError(**EIP1193Error(USER_REJECTED_REQUEST).to_json())


__all__ = [
    "EIP1193ErrorCode",
    "EIP1193_ERROR_CODES",
    "USER_REJECTED_REQUEST",
    "CanonicalError",
    "EIP1193Error",
    "is_eip1193_error",
    "user_rejected_request",
]
