"""Classification of raw RPC failures into the shapes the normalizer knows.

A raw failure is inspected once and mapped to exactly one variant:

- ``ProviderErrorShape``   -- carries an ``eip1193Error`` payload
- ``TransportBodyShape``   -- carries a ``body`` string (JSON-RPC response)
- ``NestedTransportShape`` -- carries ``error.body``
- ``UnrecognizedShape``    -- anything else

"Carries a field" means a mapping key or, for non-primitive objects such as
exceptions raised by RPC client libraries, an attribute.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

PROVIDER_ERROR_FIELD = "eip1193Error"
BODY_FIELD = "body"
ERROR_FIELD = "error"

_MISSING = object()
_PRIMITIVES = (str, bytes, bytearray, int, float, complex)


@dataclass(frozen=True)
class ProviderErrorShape:
    payload: Any


@dataclass(frozen=True)
class TransportBodyShape:
    body: Any


@dataclass(frozen=True)
class NestedTransportShape:
    body: Any


@dataclass(frozen=True)
class UnrecognizedShape:
    raw: Any


ErrorShape = Union[ProviderErrorShape, TransportBodyShape, NestedTransportShape, UnrecognizedShape]


def _field(value: Any, name: str) -> Any:
    """Return the named field of ``value`` or ``_MISSING``."""
    if value is None or isinstance(value, _PRIMITIVES):
        return _MISSING
    try:
        if isinstance(value, Mapping):
            return value[name] if name in value else _MISSING
        return getattr(value, name, _MISSING)
    except Exception:
        # Foreign mappings and properties may raise on access
        return _MISSING


def classify(raw: Any) -> ErrorShape:
    """Map ``raw`` to its shape variant; first matching rule wins."""
    payload = _field(raw, PROVIDER_ERROR_FIELD)
    if payload is not _MISSING:
        return ProviderErrorShape(payload)

    body = _field(raw, BODY_FIELD)
    if body is not _MISSING:
        return TransportBodyShape(body)

    nested = _field(raw, ERROR_FIELD)
    if nested is not _MISSING:
        nested_body = _field(nested, BODY_FIELD)
        if nested_body is not _MISSING:
            return NestedTransportShape(nested_body)

    return UnrecognizedShape(raw)


__all__ = [
    "ErrorShape",
    "ProviderErrorShape",
    "TransportBodyShape",
    "NestedTransportShape",
    "UnrecognizedShape",
    "classify",
]
