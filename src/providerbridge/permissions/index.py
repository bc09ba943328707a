"""Three-level permission index: chainID -> accountAddress -> origin -> grant.

The permission gate looks up ``index[chain_id][address][origin]`` before
forwarding a page request to the wallet. A missing path at any level means
the permission was not granted.

Instances are not synchronized. Callers sharing one index across concurrently
dispatched requests must serialize mutations themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from providerbridge.core.config import DEFAULT_PERMISSION_NAMESPACE
from providerbridge.core.exceptions import InvalidGrantError

from .models import PermissionGrant, PermissionKey

logger = logging.getLogger(__name__)

OriginMap = dict[str, PermissionGrant]
AddressMap = dict[str, OriginMap]

GrantLike = PermissionGrant | Mapping[str, Any]


class PermissionIndex(Mapping[str, AddressMap]):
    """Nested lookup of granted permissions, keyed by chain ID at the top level."""

    def __init__(self) -> None:
        self._chains: dict[str, AddressMap] = {}

    # ---- Mapping protocol (top level = chain IDs) ----

    def __getitem__(self, chain_id: str) -> AddressMap:
        return self._chains[chain_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._chains)

    def __len__(self) -> int:
        return len(self._chains)

    def __repr__(self) -> str:
        return f"PermissionIndex(chains={len(self._chains)}, grants={self.grant_count()})"

    # ---- Lookup ----

    def get_grant(self, chain_id: str, address: str, origin: str) -> PermissionGrant | None:
        """Return the grant stored for the triple, or None if not granted."""
        by_address = self._chains.get(chain_id)
        if by_address is None:
            return None
        by_origin = by_address.get(address)
        if by_origin is None:
            return None
        return by_origin.get(origin)

    def has_permission(self, chain_id: str, address: str, origin: str) -> bool:
        return self.get_grant(chain_id, address, origin) is not None

    def grants(self) -> Iterator[PermissionGrant]:
        """Iterate over every stored grant in insertion order."""
        for by_address in self._chains.values():
            for by_origin in by_address.values():
                yield from by_origin.values()

    def grant_count(self) -> int:
        return sum(
            len(by_origin)
            for by_address in self._chains.values()
            for by_origin in by_address.values()
        )

    # ---- Mutation ----

    def put(self, grant: PermissionGrant) -> None:
        """Store ``grant`` at its triple, creating each level on first use."""
        by_address = self._chains.get(grant.chain_id)
        if by_address is None:
            by_address = {}
            self._chains[grant.chain_id] = by_address

        by_origin = by_address.get(grant.account_address)
        if by_origin is None:
            by_origin = {}
            by_address[grant.account_address] = by_origin

        by_origin[grant.origin] = grant

    def revoke(self, chain_id: str, address: str, origin: str) -> PermissionGrant | None:
        """Remove the grant at the triple and prune levels left empty.

        Returns:
            The removed grant, or None if nothing was stored there.
        """
        by_address = self._chains.get(chain_id)
        if by_address is None:
            return None
        by_origin = by_address.get(address)
        if by_origin is None:
            return None
        removed = by_origin.pop(origin, None)
        if removed is None:
            return None

        if not by_origin:
            del by_address[address]
        if not by_address:
            del self._chains[chain_id]
        return removed

    # ---- Wire form ----

    def as_dict(self, namespace: str = DEFAULT_PERMISSION_NAMESPACE) -> dict[str, Any]:
        """Serialize to ``{namespace: {chainID: {address: {origin: grant}}}}``."""
        chains: dict[str, Any] = {}
        for chain_id, by_address in self._chains.items():
            chains[chain_id] = {
                address: {origin: grant.to_wire() for origin, grant in by_origin.items()}
                for address, by_origin in by_address.items()
            }
        return {namespace: chains}

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        namespace: str = DEFAULT_PERMISSION_NAMESPACE,
    ) -> PermissionIndex:
        """Rebuild an index from its wire form.

        Each leaf is re-validated, and its own triple must match the keys it
        is stored under.

        Raises:
            InvalidGrantError: If the envelope or any leaf is malformed, or a
                leaf disagrees with its path.
        """
        chains = data.get(namespace, {})
        if not isinstance(chains, Mapping):
            raise InvalidGrantError(f"Permission map '{namespace}' section must be a mapping")

        leaves: list[PermissionGrant] = []
        for chain_id, by_address in chains.items():
            if not isinstance(by_address, Mapping):
                raise InvalidGrantError(f"Chain entry {chain_id!r} must be a mapping")
            for address, by_origin in by_address.items():
                if not isinstance(by_origin, Mapping):
                    raise InvalidGrantError(
                        f"Address entry {chain_id!r}/{address!r} must be a mapping"
                    )
                for origin, leaf in by_origin.items():
                    grant = PermissionGrant.coerce(leaf)
                    if grant.identity != (chain_id, address, origin):
                        raise InvalidGrantError(
                            f"Grant stored at {chain_id!r}/{address!r}/{origin!r} "
                            f"belongs to {grant.identity!r}",
                            path=(chain_id, address, origin),
                        )
                    leaves.append(grant)
        return index_permissions(leaves)


def index_permissions(
    grants: Iterable[GrantLike],
    existing: PermissionIndex | None = None,
) -> PermissionIndex:
    """Key grants by chain ID, account address and origin.

    Args:
        grants: Grants to store, in order. A later grant replaces an earlier
            one with the same triple.
        existing: Index to merge into. It is mutated in place and returned.
            When omitted a fresh index is allocated.

    Raises:
        InvalidGrantError: If a grant lacks ``chainID``, ``accountAddress`` or
            ``origin``.
    """
    # Validate the whole batch first so a bad grant leaves `existing` untouched
    validated = [PermissionGrant.coerce(raw) for raw in grants]

    index = existing if existing is not None else PermissionIndex()
    for grant in validated:
        index.put(grant)
    logger.debug(
        "Indexed %d permission grant(s); index now holds %d", len(validated), index.grant_count()
    )
    return index


def revoke_permissions(
    keys: Iterable[PermissionKey | GrantLike],
    index: PermissionIndex,
) -> list[PermissionGrant]:
    """Revoke a batch of grants (or bare triples) from ``index``.

    Returns:
        The grants actually removed, in order.
    """
    resolved = [
        item if isinstance(item, tuple) else PermissionGrant.coerce(item).identity for item in keys
    ]
    removed: list[PermissionGrant] = []
    for key in resolved:
        grant = index.revoke(*key)
        if grant is not None:
            removed.append(grant)
    logger.debug("Revoked %d permission grant(s)", len(removed))
    return removed


__all__ = [
    "PermissionIndex",
    "index_permissions",
    "revoke_permissions",
]
