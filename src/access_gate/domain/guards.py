"""Guard Layer — preconditions evaluated before any gated operation mutates state.

Each ``is_*`` predicate answers the question; each ``require_*`` form raises
the typed failure. Gate operations call the ``require_*`` forms first, so a
failing guard aborts the call with nothing changed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from access_gate.domain.enums import Role
from access_gate.domain.exceptions import PriceMismatchError, UnauthorizedError

if TYPE_CHECKING:
    from access_gate.domain.role_store import RoleStore


def is_administrator(store: RoleStore, caller: str) -> bool:
    return caller == store.administrator


def is_pending_administrator(store: RoleStore, caller: str) -> bool:
    return store.pending_administrator is not None and caller == store.pending_administrator


def is_pending_recipient(store: RoleStore, caller: str) -> bool:
    return store.pending_recipient is not None and caller == store.pending_recipient


def is_eligible_for_access(store: RoleStore, value: int) -> bool:
    """True when the attached value equals the current price exactly."""
    return value == store.price


def require_administrator(store: RoleStore, caller: str) -> None:
    """Raise UnauthorizedError unless the caller is the current Administrator."""
    if not is_administrator(store, caller):
        raise UnauthorizedError(caller, Role.ADMINISTRATOR.value)


def require_pending(store: RoleStore, role: Role, caller: str) -> None:
    """Raise UnauthorizedError unless the caller is the pending invitee for ``role``."""
    if role is Role.ADMINISTRATOR:
        allowed = is_pending_administrator(store, caller)
    else:
        allowed = is_pending_recipient(store, caller)
    if not allowed:
        raise UnauthorizedError(caller, f"pending {role.value}")


def require_exact_price(store: RoleStore, value: int) -> None:
    """Raise PriceMismatchError unless ``value`` equals the current price."""
    if not is_eligible_for_access(store, value):
        raise PriceMismatchError(expected=store.price, attached=value)
