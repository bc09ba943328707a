"""Tests for the chainID -> address -> origin permission index."""

from __future__ import annotations

import itertools

import pytest

from providerbridge.core.exceptions import InvalidGrantError
from providerbridge.permissions import (
    PermissionGrant,
    PermissionIndex,
    index_permissions,
    revoke_permissions,
)

ADDR_A = "0x208e94d5661a73360d9387d3ca169e5c130090cd"
ADDR_B = "0x6e80164ea60673d64d5d6228beb684a1274bb017"


def grant(chain_id: str = "1", address: str = ADDR_A, origin: str = "https://app.uniswap.org", **extra):
    return {"chainID": chain_id, "accountAddress": address, "origin": origin, **extra}


class TestIndexPermissions:
    def test_empty_grants_gives_empty_index(self):
        index = index_permissions([])
        assert isinstance(index, PermissionIndex)
        assert len(index) == 0
        assert index.grant_count() == 0

    def test_lookup_returns_submitted_grant(self):
        index = index_permissions([grant(title="Uniswap")])
        stored = index["1"][ADDR_A]["https://app.uniswap.org"]
        assert stored.origin == "https://app.uniswap.org"
        assert stored.model_extra == {"title": "Uniswap"}

    def test_distinct_triples_order_independent(self):
        grants = [
            grant("1", ADDR_A, "https://a.example"),
            grant("1", ADDR_A, "https://b.example"),
            grant("1", ADDR_B, "https://a.example"),
            grant("137", ADDR_A, "https://a.example"),
        ]
        for ordering in itertools.permutations(grants):
            index = index_permissions(list(ordering))
            assert index.grant_count() == 4
            for g in grants:
                stored = index[g["chainID"]][g["accountAddress"]][g["origin"]]
                assert stored == PermissionGrant.coerce(g)

    def test_last_write_wins(self):
        first = grant(state="allow", key="first")
        second = grant(state="deny", key="second")
        index = index_permissions([first, second])
        stored = index.get_grant("1", ADDR_A, "https://app.uniswap.org")
        assert stored is not None
        assert stored.model_extra["key"] == "second"
        assert stored.model_extra["state"] == "deny"
        assert index.grant_count() == 1

    def test_existing_is_mutated_and_returned(self):
        existing = index_permissions([grant("1", ADDR_A, "https://a.example")])
        result = index_permissions([grant("1", ADDR_B, "https://b.example")], existing)
        assert result is existing
        assert existing.has_permission("1", ADDR_A, "https://a.example")
        assert existing.has_permission("1", ADDR_B, "https://b.example")

    def test_without_existing_allocates_fresh(self):
        first = index_permissions([grant()])
        second = index_permissions([grant()])
        assert first is not second
        assert first == second

    def test_two_calls_equal_one_concatenated_call(self):
        a = [grant("1", ADDR_A, "https://a.example"), grant("5", ADDR_B, "https://c.example")]
        b = [grant("1", ADDR_A, "https://a.example", state="deny"), grant("1", ADDR_B, "https://b.example")]
        merged = index_permissions(b, index_permissions(a))
        assert merged == index_permissions(a + b)
        assert merged.get_grant("1", ADDR_A, "https://a.example").model_extra == {"state": "deny"}

    def test_accepts_grant_instances(self):
        g = PermissionGrant(chain_id="10", account_address=ADDR_A, origin="https://x.example")
        index = index_permissions([g])
        assert index["10"][ADDR_A]["https://x.example"] is g

    def test_accepts_generator(self):
        index = index_permissions(grant(origin=f"https://{i}.example") for i in range(3))
        assert index.grant_count() == 3

    @pytest.mark.parametrize("missing", ["chainID", "accountAddress", "origin"])
    def test_missing_key_field_fails_fast(self, missing):
        bad = grant()
        del bad[missing]
        with pytest.raises(InvalidGrantError) as exc_info:
            index_permissions([bad])
        assert missing in exc_info.value.details["fields"]

    def test_empty_key_field_fails_fast(self):
        with pytest.raises(InvalidGrantError):
            index_permissions([grant(origin="")])

    def test_invalid_grant_is_value_error(self):
        with pytest.raises(ValueError):
            index_permissions(["not-a-grant"])

    def test_failed_merge_leaves_existing_unchanged(self):
        existing = index_permissions([grant("1", ADDR_A, "https://a.example")])
        before = existing.as_dict()
        batch = [
            grant("1", ADDR_B, "https://b.example"),
            {"chainID": "1", "origin": "https://c.example"},
        ]
        with pytest.raises(InvalidGrantError):
            index_permissions(batch, existing)
        assert existing.as_dict() == before
        assert existing.grant_count() == 1
        assert not existing.has_permission("1", ADDR_B, "https://b.example")


class TestLookup:
    def test_missing_paths_are_not_granted(self):
        index = index_permissions([grant()])
        assert index.get_grant("5", ADDR_A, "https://app.uniswap.org") is None
        assert index.get_grant("1", ADDR_B, "https://app.uniswap.org") is None
        assert index.get_grant("1", ADDR_A, "https://evil.example") is None
        assert not index.has_permission("5", ADDR_A, "https://app.uniswap.org")

    def test_mapping_protocol(self):
        index = index_permissions([grant("1"), grant("137")])
        assert set(index) == {"1", "137"}
        assert "1" in index
        assert "5" not in index
        with pytest.raises(KeyError):
            index["5"]

    def test_grants_iterates_everything(self):
        grants = [grant("1", ADDR_A), grant("1", ADDR_B), grant("137", ADDR_A)]
        index = index_permissions(grants)
        assert [g.identity for g in index.grants()] == [
            PermissionGrant.coerce(g).identity for g in grants
        ]


class TestRevoke:
    def test_revoke_single_entry_keeps_siblings(self):
        index = index_permissions(
            [grant(origin="https://a.example"), grant(origin="https://b.example")]
        )
        removed = index.revoke("1", ADDR_A, "https://a.example")
        assert removed is not None and removed.origin == "https://a.example"
        assert index.has_permission("1", ADDR_A, "https://b.example")
        assert list(index["1"][ADDR_A]) == ["https://b.example"]

    def test_revoke_prunes_empty_parents(self):
        index = index_permissions([grant("1", ADDR_A), grant("137", ADDR_B)])
        index.revoke("1", ADDR_A, "https://app.uniswap.org")
        assert "1" not in index
        assert set(index) == {"137"}

    def test_revoke_missing_returns_none(self):
        index = index_permissions([grant()])
        assert index.revoke("5", ADDR_A, "https://app.uniswap.org") is None
        assert index.revoke("1", ADDR_B, "https://app.uniswap.org") is None
        assert index.revoke("1", ADDR_A, "https://other.example") is None
        assert index.grant_count() == 1

    def test_revoke_permissions_batch(self):
        index = index_permissions([grant("1"), grant("137"), grant("10")])
        removed = revoke_permissions(
            [grant("1"), ("137", ADDR_A, "https://app.uniswap.org"), ("5", ADDR_A, "x")],
            index,
        )
        assert [g.chain_id for g in removed] == ["1", "137"]
        assert set(index) == {"10"}

    def test_revoke_permissions_bad_item_revokes_nothing(self):
        index = index_permissions([grant("1"), grant("137")])
        with pytest.raises(InvalidGrantError):
            revoke_permissions([grant("1"), {"chainID": "137"}], index)
        assert index.grant_count() == 2


class TestWireForm:
    def test_as_dict_uses_evm_envelope_and_wire_names(self):
        index = index_permissions([grant(title="Uniswap")])
        assert index.as_dict() == {
            "evm": {
                "1": {
                    ADDR_A: {
                        "https://app.uniswap.org": {
                            "chainID": "1",
                            "accountAddress": ADDR_A,
                            "origin": "https://app.uniswap.org",
                            "title": "Uniswap",
                        }
                    }
                }
            }
        }

    def test_from_dict_restores_index(self):
        index = index_permissions([grant("1", ADDR_A), grant("137", ADDR_B, key="k")])
        assert PermissionIndex.from_dict(index.as_dict()) == index

    def test_custom_namespace(self):
        index = index_permissions([grant()])
        data = index.as_dict(namespace="solana")
        assert set(data) == {"solana"}
        assert PermissionIndex.from_dict(data, namespace="solana") == index
        assert len(PermissionIndex.from_dict(data)) == 0

    def test_from_dict_rejects_bad_levels(self):
        with pytest.raises(InvalidGrantError):
            PermissionIndex.from_dict({"evm": []})
        with pytest.raises(InvalidGrantError):
            PermissionIndex.from_dict({"evm": {"1": "nope"}})
        with pytest.raises(InvalidGrantError):
            PermissionIndex.from_dict({"evm": {"1": {ADDR_A: ["nope"]}}})

    def test_from_dict_rejects_leaf_stored_under_wrong_path(self):
        misplaced = {
            "evm": {
                "137": {
                    ADDR_A: {
                        "https://a.example": grant("1", ADDR_A, "https://a.example"),
                    }
                }
            }
        }
        with pytest.raises(InvalidGrantError) as exc_info:
            PermissionIndex.from_dict(misplaced)
        assert exc_info.value.details["path"] == ("137", ADDR_A, "https://a.example")

    def test_from_dict_rejects_leaf_under_wrong_origin_key(self):
        data = {"evm": {"1": {ADDR_A: {"https://b.example": grant("1", ADDR_A, "https://a.example")}}}}
        with pytest.raises(InvalidGrantError):
            PermissionIndex.from_dict(data)
