#!/usr/bin/env python3
"""Access Gate — End-to-End Simulation.

Runs three scenarios in-process against an in-memory ledger:

    Scenario 1: Paid Access and Role Handover (secure gate)
        - Payer pays the exact price -> recipient credited, access granted
        - Administrator invites a successor, successor accepts
        - Recipient is rotated the same way; later payments follow it

    Scenario 2: Rejected Calls (secure gate)
        - Wrong payment amount -> PriceMismatch, nothing moves
        - Outsider tries to change the price -> Unauthorized
        - Recipient refuses deposits -> TransferFailure, payer refunded

    Scenario 3: Direct Reassignment (simple gate)
        - Administrator reassigns both roles in one step each

Usage:
    uv run python simulation.py
    uv run python simulation.py --scenario 2
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from datetime import UTC

# ---------------------------------------------------------------------------
# Configure structured logging BEFORE importing app modules
# ---------------------------------------------------------------------------
from access_gate.logging_config import get_logger, setup_logging

setup_logging(log_level="INFO", json_logs=False)
logger = get_logger("simulation")

from access_gate.domain.exceptions import AccessGateError  # noqa: E402
from access_gate.infrastructure.ledger import InMemoryLedger  # noqa: E402
from access_gate.services.gate_service import AccessGate, Gate, SimpleAccessGate  # noqa: E402
from access_gate.services.listener import AccessListener  # noqa: E402

PRICE = 10**16  # 0.01 ether in wei


# ---------------------------------------------------------------------------
# Bot Agents
# ---------------------------------------------------------------------------
@dataclass
class PayerBot:
    """Simulated user paying for access."""

    wallet: str
    paid: int = field(default=0)

    def pay(self, gate: Gate, value: int) -> bool:
        """Attempt a payment. Returns True if the gate accepted it."""
        try:
            notification = gate.pay(self.wallet, value)
        except AccessGateError as exc:
            logger.info("🔴 PAYER: Payment rejected", payer=self.wallet, code=exc.code)
            return False
        self.paid += value
        logger.info(
            "🔵 PAYER: Payment accepted",
            payer=self.wallet,
            sequence=notification.sequence,
        )
        return True


@dataclass
class AdminBot:
    """Simulated holder of a privileged role."""

    wallet: str

    def attempt(self, description: str, operation, *args) -> bool:
        """Run a gate operation as this identity, reporting the outcome."""
        try:
            operation(self.wallet, *args)
        except AccessGateError as exc:
            logger.info("🔴 ADMIN: Refused", action=description, caller=self.wallet, code=exc.code)
            return False
        logger.info("🟢 ADMIN: Done", action=description, caller=self.wallet)
        return True


# ---------------------------------------------------------------------------
# Print helpers
# ---------------------------------------------------------------------------
def banner(text: str) -> None:
    """Print a prominent banner."""
    width = 70
    print("\n" + "=" * width)
    print(f"  {text}")
    print("=" * width + "\n")


def section(text: str) -> None:
    """Print a section header."""
    print(f"\n--- {text} ---\n")


def print_state(gate: Gate, ledger: InMemoryLedger, *wallets: str) -> None:
    """Pretty-print roles, price and the balances of interest."""
    snapshot = gate.snapshot()
    print(f"  Administrator: {snapshot.administrator}")
    print(f"  Recipient:     {snapshot.recipient}")
    print(f"  Price:         {snapshot.price}")
    if snapshot.pending_administrator or snapshot.pending_recipient:
        print(f"  Pending admin: {snapshot.pending_administrator or '-'}")
        print(f"  Pending recv:  {snapshot.pending_recipient or '-'}")
    for wallet in wallets:
        print(f"  Balance {wallet[:10]}...: {ledger.balance_of(wallet)}")


def print_notifications(gate: Gate) -> None:
    """Print every notification the gate has emitted."""
    print("\n  📜 Notifications:")
    for notification in gate.channel.history():
        print(f"    {notification.sequence}. {notification.payer} at {notification.timestamp}")
    print()


def _wallet(digit: str) -> str:
    return "0x" + digit * 40


# ===========================================================================
# Scenario 1: Paid Access and Role Handover
# ===========================================================================
def scenario_1_handover() -> None:
    """Pay, hand over both roles, and check the new holders take effect."""
    banner("SCENARIO 1: Paid Access and Role Handover")

    admin, successor = AdminBot(_wallet("1")), AdminBot(_wallet("2"))
    recipient, new_recipient = _wallet("a"), _wallet("c")
    payer = PayerBot(_wallet("b"))

    ledger = InMemoryLedger({payer.wallet: 5 * PRICE})
    gate = AccessGate(admin.wallet, recipient, PRICE, ledger=ledger)
    granted: list[str] = []
    listener = AccessListener(gate.channel, grant=lambda payer, _: granted.append(payer), tz=UTC)
    listener.attach()

    section("Step 1: Payer pays the exact price")
    payer.pay(gate, PRICE)
    print_state(gate, ledger, payer.wallet, recipient)

    section("Step 2: Administrator invites a successor, successor accepts")
    admin.attempt("invite administrator", gate.invite_administrator, successor.wallet)
    successor.attempt("accept administrator", gate.accept_administrator_invite)
    admin.attempt("set price", gate.set_price, 2 * PRICE)

    section("Step 3: New administrator rotates the recipient")
    successor.attempt("invite recipient", gate.invite_recipient, new_recipient)
    AdminBot(new_recipient).attempt("accept recipient", gate.accept_recipient_invite)

    section("Step 4: Payment follows the new recipient")
    payer.pay(gate, PRICE)
    print_state(gate, ledger, payer.wallet, recipient, new_recipient)

    listener.detach()
    print(f"\n  🛡️  Access granted {len(granted)} time(s)")
    print_notifications(gate)


# ===========================================================================
# Scenario 2: Rejected Calls
# ===========================================================================
def scenario_2_rejections() -> None:
    """Every failing call leaves balances and roles untouched."""
    banner("SCENARIO 2: Rejected Calls")

    admin, outsider = AdminBot(_wallet("1")), AdminBot(_wallet("d"))
    recipient = _wallet("a")
    payer = PayerBot(_wallet("b"))

    ledger = InMemoryLedger({payer.wallet: 5 * PRICE})
    gate = AccessGate(admin.wallet, recipient, PRICE, ledger=ledger)

    section("Attempt 1: Payment with the wrong amount")
    payer.pay(gate, PRICE - 1)

    section("Attempt 2: Outsider changes the price")
    outsider.attempt("set price", gate.set_price, 0)

    section("Attempt 3: Recipient refuses deposits")
    ledger.reject_deposits(recipient)
    payer.pay(gate, PRICE)
    ledger.accept_deposits(recipient)

    section("Final State")
    print_state(gate, ledger, payer.wallet, recipient)
    assert ledger.balance_of(payer.wallet) == 5 * PRICE, "payer balance changed"
    print(f"  🛡️  Notifications emitted: {len(gate.channel)}")


# ===========================================================================
# Scenario 3: Direct Reassignment
# ===========================================================================
def scenario_3_simple_gate() -> None:
    """The simple gate reassigns roles without a handshake."""
    banner("SCENARIO 3: Direct Reassignment")

    admin, heir = AdminBot(_wallet("1")), AdminBot(_wallet("2"))
    recipient, new_recipient = _wallet("a"), _wallet("c")
    payer = PayerBot(_wallet("b"))

    ledger = InMemoryLedger({payer.wallet: PRICE})
    gate = SimpleAccessGate(admin.wallet, recipient, PRICE, ledger=ledger)

    section("Step 1: Administrator reassigns the recipient")
    admin.attempt("set recipient", gate.set_recipient, new_recipient)

    section("Step 2: Administrator hands over the role")
    admin.attempt("set administrator", gate.set_administrator, heir.wallet)
    admin.attempt("set price", gate.set_price, 1)

    section("Step 3: Payment")
    payer.pay(gate, PRICE)
    print_state(gate, ledger, payer.wallet, recipient, new_recipient)


# ===========================================================================
# Main
# ===========================================================================
SCENARIOS = {
    1: scenario_1_handover,
    2: scenario_2_rejections,
    3: scenario_3_simple_gate,
}


def run_all() -> None:
    """Run all scenarios sequentially."""
    print("\n" + "🚀" * 35)
    print("  ACCESS GATE — SIMULATION")
    print("🚀" * 35 + "\n")

    for scenario in SCENARIOS.values():
        scenario()

    print("\n" + "=" * 70)
    print("  ✅ ALL SCENARIOS COMPLETED SUCCESSFULLY")
    print("=" * 70 + "\n")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Access Gate Simulation")
    parser.add_argument(
        "--scenario",
        type=int,
        default=0,
        help="Run a specific scenario (1, 2, or 3). Default: run all.",
    )
    args = parser.parse_args()

    if args.scenario == 0:
        run_all()
    elif args.scenario not in SCENARIOS:
        print(f"Unknown scenario {args.scenario}. Available: 1, 2, 3")
    else:
        SCENARIOS[args.scenario]()
