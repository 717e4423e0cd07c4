"""In-memory value ledger.

Models the host ledger's account balances explicitly, so that forwarding a
payment is an observable state mutation rather than an external settlement.

Accounts can be marked as rejecting deposits, which models a recipient that
refuses incoming value. ``atomic()`` snapshots every balance and restores the
snapshot if the block raises, then re-raises.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import TYPE_CHECKING

from access_gate.domain.exceptions import InsufficientFundsError, TransferFailureError
from access_gate.domain.identity import normalize_amount, normalize_identity
from access_gate.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)


class InMemoryLedger:
    """Balance map with all-or-nothing transactions."""

    def __init__(self, balances: dict[str, int] | None = None) -> None:
        self._lock = threading.RLock()
        self._balances: dict[str, int] = defaultdict(int)
        self._rejecting: set[str] = set()
        for identity, amount in (balances or {}).items():
            self.credit(identity, amount)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def balance_of(self, identity: str) -> int:
        return self._balances.get(normalize_identity(identity), 0)

    def total_supply(self) -> int:
        return sum(self._balances.values())

    # ------------------------------------------------------------------
    # Account setup
    # ------------------------------------------------------------------

    def credit(self, identity: str, amount: int) -> int:
        """Add ``amount`` to an account out of thin air. Returns the new balance."""
        identity = normalize_identity(identity)
        amount = normalize_amount(amount)
        with self._lock:
            self._balances[identity] += amount
            balance = self._balances[identity]
        logger.info("ledger.credited", identity=identity, amount=amount, balance=balance)
        return balance

    def reject_deposits(self, identity: str) -> None:
        """Make every future transfer into ``identity`` fail."""
        with self._lock:
            self._rejecting.add(normalize_identity(identity))

    def accept_deposits(self, identity: str) -> None:
        with self._lock:
            self._rejecting.discard(normalize_identity(identity))

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def transfer(self, source: str, destination: str, amount: int) -> None:
        """Move ``amount`` between accounts or raise with nothing changed."""
        source = normalize_identity(source)
        destination = normalize_identity(destination)
        amount = normalize_amount(amount)

        with self._lock:
            if destination in self._rejecting:
                raise TransferFailureError(
                    f"Account {destination} rejected a deposit of {amount}",
                    source=source,
                    destination=destination,
                    amount=amount,
                )
            available = self._balances.get(source, 0)
            if available < amount:
                raise InsufficientFundsError(source, required=amount, available=available)

            self._balances[source] -= amount
            self._balances[destination] += amount

        logger.debug(
            "ledger.transferred",
            source=source,
            destination=destination,
            amount=amount,
        )

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Apply every transfer in the block, or restore all balances on error."""
        with self._lock:
            snapshot = dict(self._balances)
            try:
                yield
            except Exception:
                self._balances.clear()
                self._balances.update(snapshot)
                logger.warning("ledger.rolled_back", accounts=len(snapshot))
                raise
