"""Tests for the guard layer predicates and their raising forms."""

from __future__ import annotations

import pytest

from access_gate.domain.enums import Role
from access_gate.domain.exceptions import PriceMismatchError, UnauthorizedError
from access_gate.domain.guards import (
    is_administrator,
    is_eligible_for_access,
    is_pending_administrator,
    is_pending_recipient,
    require_administrator,
    require_exact_price,
    require_pending,
)
from access_gate.domain.role_store import RoleStore


@pytest.fixture
def store(ids) -> RoleStore:
    return RoleStore(administrator=ids.admin, recipient=ids.recipient, price=10)


class TestAdministratorGuard:
    def test_administrator_passes(self, store: RoleStore, ids) -> None:
        assert is_administrator(store, ids.admin)
        require_administrator(store, ids.admin)

    def test_other_identity_is_unauthorized(self, store: RoleStore, ids) -> None:
        assert not is_administrator(store, ids.outsider)
        with pytest.raises(UnauthorizedError) as exc_info:
            require_administrator(store, ids.outsider)
        assert exc_info.value.code == "UNAUTHORIZED"
        assert exc_info.value.required_role == "administrator"

    def test_recipient_is_not_administrator(self, store: RoleStore, ids) -> None:
        with pytest.raises(UnauthorizedError):
            require_administrator(store, ids.recipient)


class TestPendingGuards:
    def test_empty_slot_matches_nobody(self, store: RoleStore, ids) -> None:
        assert not is_pending_administrator(store, ids.candidate)
        assert not is_pending_recipient(store, ids.candidate)
        with pytest.raises(UnauthorizedError, match="pending administrator"):
            require_pending(store, Role.ADMINISTRATOR, ids.candidate)

    def test_pending_administrator(self, store: RoleStore, ids) -> None:
        store.pending_administrator = ids.candidate
        assert is_pending_administrator(store, ids.candidate)
        require_pending(store, Role.ADMINISTRATOR, ids.candidate)
        # Slots are independent per role.
        with pytest.raises(UnauthorizedError, match="pending recipient"):
            require_pending(store, Role.RECIPIENT, ids.candidate)

    def test_pending_recipient(self, store: RoleStore, ids) -> None:
        store.pending_recipient = ids.candidate
        assert is_pending_recipient(store, ids.candidate)
        require_pending(store, Role.RECIPIENT, ids.candidate)
        with pytest.raises(UnauthorizedError):
            require_pending(store, Role.RECIPIENT, ids.outsider)


class TestPriceGuard:
    def test_exact_price_passes(self, store: RoleStore) -> None:
        assert is_eligible_for_access(store, 10)
        require_exact_price(store, 10)

    @pytest.mark.parametrize("value", [0, 5, 9, 11, 10**18])
    def test_any_other_value_mismatches(self, store: RoleStore, value: int) -> None:
        assert not is_eligible_for_access(store, value)
        with pytest.raises(PriceMismatchError) as exc_info:
            require_exact_price(store, value)
        assert exc_info.value.expected == 10
        assert exc_info.value.attached == value
        assert exc_info.value.code == "PRICE_MISMATCH"

    def test_zero_price_accepts_zero(self, store: RoleStore) -> None:
        store.price = 0
        require_exact_price(store, 0)
