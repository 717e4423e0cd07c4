"""Notification record and listener callback shape.

A Notification is emitted once per successful payment. Listeners receive it
positionally as ``(payer, timestamp)``; the channel additionally stamps each
record with its ``sequence`` number so listeners can replay what they missed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

NotificationCallback = Callable[[str, int], None]


@dataclass(frozen=True)
class Notification:
    """Immutable record of one successful payment.

    Attributes:
        payer: Identity that paid.
        timestamp: Seconds since the epoch at which the payment was finalized.
        sequence: Position in the ledger-ordered notification record.
    """

    payer: str
    timestamp: int
    sequence: int = 0
