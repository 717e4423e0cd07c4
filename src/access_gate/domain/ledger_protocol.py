"""Value Ledger Protocol.

Defines the interface the gate uses to move value. This is a Protocol
(structural subtyping) so a ledger does not need to inherit from a base
class — it just needs to match the shape.

Concrete implementations:
    - infrastructure/ledger.py  (InMemoryLedger)
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable


@runtime_checkable
class ValueLedger(Protocol):
    """Protocol that every ledger implementation must satisfy."""

    def balance_of(self, identity: str) -> int:
        """Return the balance held by ``identity`` (0 for unknown accounts)."""
        ...

    def transfer(self, source: str, destination: str, amount: int) -> None:
        """Move ``amount`` from ``source`` to ``destination``.

        Raises:
            TransferFailureError: If the move cannot complete. The ledger
                must be unchanged when this is raised.
        """
        ...

    def atomic(self) -> AbstractContextManager[None]:
        """Group several transfers so they all apply or none do."""
        ...
