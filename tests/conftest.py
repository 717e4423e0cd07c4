"""Shared test fixtures for the Access Gate test suite.

Provides:
    - A fixed cast of identities (administrator, recipient, payer, ...)
    - A controllable clock
    - Ledger, channel and gate fixtures for both variants
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from access_gate.infrastructure.ledger import InMemoryLedger
from access_gate.infrastructure.notification_channel import NotificationChannel
from access_gate.services.gate_service import AccessGate, SimpleAccessGate

PRICE = 10
START_TIME = 1_700_000_000


@dataclass(frozen=True)
class Identities:
    admin: str = "0x1111111111111111111111111111111111111111"
    recipient: str = "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
    payer: str = "0xbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb"
    candidate: str = "0xcccccccccccccccccccccccccccccccccccccccc"
    outsider: str = "0xdddddddddddddddddddddddddddddddddddddddd"
    other: str = "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"
    gate: str = "0x9999999999999999999999999999999999999999"


class FakeClock:
    """Callable clock whose time only moves when a test says so."""

    def __init__(self, now: int = START_TIME) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


# ---------------------------------------------------------------------------
# Domain Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def ids() -> Identities:
    return Identities()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ledger(ids: Identities) -> InMemoryLedger:
    """Ledger where the payer and the outsider can each afford several payments."""
    return InMemoryLedger({ids.payer: 100, ids.outsider: 100})


@pytest.fixture
def channel() -> NotificationChannel:
    return NotificationChannel()


@pytest.fixture
def gate(
    ids: Identities,
    ledger: InMemoryLedger,
    channel: NotificationChannel,
    clock: FakeClock,
) -> AccessGate:
    """Secure gate: recipient A, price 10."""
    return AccessGate(
        ids.admin,
        ids.recipient,
        PRICE,
        ledger=ledger,
        channel=channel,
        clock=clock,
        address=ids.gate,
    )


@pytest.fixture
def simple_gate(
    ids: Identities,
    ledger: InMemoryLedger,
    channel: NotificationChannel,
    clock: FakeClock,
) -> SimpleAccessGate:
    """Simple gate with the same cast and price as ``gate``."""
    return SimpleAccessGate(
        ids.admin,
        ids.recipient,
        PRICE,
        ledger=ledger,
        channel=channel,
        clock=clock,
        address=ids.gate,
    )
