"""Normalization of RPC transport failures into canonical provider errors.

Whatever the transport or the wallet backend throws, the page receives one
``{code, message}`` payload from the EIP-1193 table. Unrecognized failures all
collapse to 4001 "User Rejected Request": dApps universally handle that code,
while an unknown code can crash their error path.

Messages extracted from an RPC node's JSON body (``insufficient funds``,
``nonce too low``...) are also sent as 4001, with the first letter
capitalized, since a non-rejection code would not be displayed.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from providerbridge.core.config import RAW_ERROR_DESCRIPTION, Config, get_core_config

from .codes import (
    USER_REJECTED_REQUEST,
    CanonicalError,
    is_eip1193_error,
    user_rejected_request,
)
from .shapes import (
    ErrorShape,
    NestedTransportShape,
    ProviderErrorShape,
    TransportBodyShape,
    classify,
)
from .sinks import ErrorSink, LoggingErrorSink, NullErrorSink

logger = logging.getLogger(__name__)


def capitalize_first(text: str) -> str:
    """Upper-case the first character only; ``str.capitalize`` would lower the rest.

    A first character whose upper case spans several characters (``"ß"`` ->
    ``"SS"``) is left as is, so the message never grows.
    """
    first = text[:1]
    upper = first.upper()
    return (upper if len(upper) == 1 else first) + text[1:]


def parse_rpc_error_body(body: Any) -> CanonicalError | None:
    """Derive a canonical error from a JSON-RPC response body.

    Returns:
        ``{4001, <capitalized message>}`` when ``body`` decodes to an object
        whose ``error.message`` is a non-empty string, the default error when
        the ``error`` object has no usable message, and None when the body
        cannot be decoded or holds no ``error`` object.
    """
    try:
        parsed = json.loads(body)
    except (ValueError, TypeError, RecursionError):
        return None

    error = parsed.get("error") if isinstance(parsed, Mapping) else None
    if not isinstance(error, Mapping):
        return None

    message = error.get("message")
    if isinstance(message, str) and message:
        return CanonicalError(code=USER_REJECTED_REQUEST.code, message=capitalize_first(message))
    return user_rejected_request()


class ErrorNormalizer:
    """Turns any raw failure into a ``CanonicalError``. Never raises."""

    def __init__(self, sink: ErrorSink | None = None) -> None:
        self.sink = sink if sink is not None else LoggingErrorSink()

    @classmethod
    def from_core_config(cls, config: Config | None = None) -> ErrorNormalizer:
        cfg = config or get_core_config()
        if not cfg.errors.log_raw_errors:
            return cls(NullErrorSink())
        return cls(LoggingErrorSink(level=cfg.errors.raw_error_levelno))

    def normalize(self, raw: Any) -> CanonicalError:
        self._record(raw)
        try:
            result = self._resolve(classify(raw))
        except Exception:
            logger.exception("Unexpected failure normalizing RPC error; using default")
            result = None
        return result if result is not None else user_rejected_request()

    def _record(self, raw: Any) -> None:
        try:
            self.sink.record(RAW_ERROR_DESCRIPTION, raw)
        except Exception:
            # Diagnostics never affect the result
            pass

    @staticmethod
    def _resolve(shape: ErrorShape) -> CanonicalError | None:
        if isinstance(shape, ProviderErrorShape):
            if is_eip1193_error(shape.payload):
                return CanonicalError(**dict(shape.payload))
            return None
        if isinstance(shape, (TransportBodyShape, NestedTransportShape)):
            return parse_rpc_error_body(shape.body)
        return None


def normalize(raw: Any, sink: ErrorSink | None = None) -> CanonicalError:
    """Normalize ``raw`` with a one-off normalizer (logging sink by default)."""
    return ErrorNormalizer(sink).normalize(raw)


__all__ = [
    "ErrorNormalizer",
    "capitalize_first",
    "normalize",
    "parse_rpc_error_body",
]
