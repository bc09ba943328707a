"""Canonical provider errors for the page-facing response channel."""

from .codes import (
    EIP1193_ERROR_CODES,
    USER_REJECTED_REQUEST,
    CanonicalError,
    EIP1193Error,
    EIP1193ErrorCode,
    is_eip1193_error,
    user_rejected_request,
)
from .normalizer import ErrorNormalizer, capitalize_first, normalize, parse_rpc_error_body
from .shapes import (
    ErrorShape,
    NestedTransportShape,
    ProviderErrorShape,
    TransportBodyShape,
    UnrecognizedShape,
    classify,
)
from .sinks import ErrorSink, LoggingErrorSink, NullErrorSink

__all__ = [
    "EIP1193_ERROR_CODES",
    "USER_REJECTED_REQUEST",
    "CanonicalError",
    "EIP1193Error",
    "EIP1193ErrorCode",
    "is_eip1193_error",
    "user_rejected_request",
    "ErrorNormalizer",
    "capitalize_first",
    "normalize",
    "parse_rpc_error_body",
    "ErrorShape",
    "ProviderErrorShape",
    "TransportBodyShape",
    "NestedTransportShape",
    "UnrecognizedShape",
    "classify",
    "ErrorSink",
    "LoggingErrorSink",
    "NullErrorSink",
]
