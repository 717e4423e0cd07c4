"""Gate Service — the payment gate and role transfer protocol.

This is the application layer that coordinates between:
    - Role store (administrator, recipient, pending slots, price)
    - Guard layer (caller identity and exact-price checks)
    - Transfer state machine (secure variant invite/accept handshake)
    - Value ledger (forwarding payments to the recipient)
    - Notification channel (one event per successful payment)

Both the REST routes and the simulation script call into these classes,
ensuring a single source of truth for all business rules.

Every public operation takes the gate lock, runs its guards, and only then
mutates state, so a failing call changes nothing.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

from statemachine.exceptions import TransitionNotAllowed

from access_gate.config import get_settings
from access_gate.domain.enums import GateVariant, Role, TransferStatus
from access_gate.domain.exceptions import (
    InvalidIdentityError,
    InvalidStateTransitionError,
    TransferFailureError,
)
from access_gate.domain.guards import (
    require_administrator,
    require_exact_price,
    require_pending,
)
from access_gate.domain.identity import (
    generate_identity,
    is_zero_identity,
    normalize_amount,
    normalize_identity,
    require_nonzero_identity,
)
from access_gate.domain.role_store import GateSnapshot, RoleStore
from access_gate.domain.state_machine import RoleTransferStateMachine, validate_transition
from access_gate.infrastructure.ledger import InMemoryLedger
from access_gate.infrastructure.notification_channel import NotificationChannel
from access_gate.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from access_gate.config import Settings
    from access_gate.domain.ledger_protocol import ValueLedger
    from access_gate.domain.notification import Notification

logger = get_logger(__name__)


def unix_now() -> int:
    """Current time in whole seconds since the epoch."""
    return int(time.time())


class _BaseGate:
    """Behaviour shared by both variants: construction, reads, pay, set_price."""

    variant: GateVariant

    def __init__(
        self,
        creator: str,
        recipient: str,
        price: int | None = None,
        *,
        ledger: ValueLedger | None = None,
        channel: NotificationChannel | None = None,
        clock: Callable[[], int] | None = None,
        address: str | None = None,
    ) -> None:
        """Create a gate owned by ``creator`` that forwards payments to ``recipient``.

        Args:
            creator: Identity deploying the gate; becomes the Administrator.
            recipient: Identity that receives every gated payment.
            price: Exact value a payment must carry. Defaults to GATE_DEFAULT_PRICE.
            ledger: Where value moves. A fresh InMemoryLedger if omitted.
            channel: Where notifications are published. A fresh channel if omitted.
            clock: Returns the current timestamp in seconds.
            address: The gate's own ledger account. Generated if omitted.
        """
        if price is None:
            price = get_settings().gate_default_price

        self.address = require_nonzero_identity(address) if address else generate_identity()
        self._store = RoleStore(
            administrator=self._require_not_gate(require_nonzero_identity(creator)),
            recipient=self._require_not_gate(require_nonzero_identity(recipient)),
            price=normalize_amount(price),
        )
        self._ledger: ValueLedger = ledger if ledger is not None else InMemoryLedger()
        self._channel = channel if channel is not None else NotificationChannel()
        self._clock = clock or unix_now
        self._lock = threading.RLock()

        logger.info(
            "gate.created",
            variant=self.variant.value,
            administrator=self._store.administrator,
            recipient=self._store.recipient,
            price=self._store.price,
            address=self.address,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def administrator(self) -> str:
        return self._store.administrator

    @property
    def recipient(self) -> str:
        return self._store.recipient

    @property
    def price(self) -> int:
        return self._store.price

    @property
    def ledger(self) -> ValueLedger:
        return self._ledger

    @property
    def channel(self) -> NotificationChannel:
        return self._channel

    def snapshot(self) -> GateSnapshot:
        with self._lock:
            return self._store.snapshot()

    def _require_not_gate(self, identity: str) -> str:
        """Reject the gate's own account as a role holder or invitee.

        A payment to a gate that is its own Recipient would stay in the gate.
        """
        if identity == self.address:
            raise InvalidIdentityError(
                identity, reason="the gate's own account cannot hold a role"
            )
        return identity

    # ------------------------------------------------------------------
    # Payment Gate
    # ------------------------------------------------------------------

    def pay(self, caller: str, value: int) -> Notification:
        """Accept ``value`` from ``caller``, forward it to the recipient, and notify.

        Raises:
            PriceMismatchError: If ``value`` is not exactly the current price.
            TransferFailureError: If the payer cannot fund the value or the
                recipient rejects it. Balances are left untouched.
        """
        payer = require_nonzero_identity(caller)
        value = normalize_amount(value)

        with self._lock:
            require_exact_price(self._store, value)
            recipient = self._store.recipient
            timestamp = self._clock()

            try:
                with self._ledger.atomic():
                    self._ledger.transfer(payer, self.address, value)
                    self._ledger.transfer(self.address, recipient, value)
            except TransferFailureError as exc:
                logger.warning(
                    "gate.transfer_failed",
                    payer=payer,
                    recipient=recipient,
                    value=value,
                    code=exc.code,
                )
                raise

            notification = self._channel.publish(payer, timestamp)

        logger.info(
            "gate.paid",
            payer=payer,
            recipient=recipient,
            value=value,
            sequence=notification.sequence,
            timestamp=notification.timestamp,
        )
        return notification

    # ------------------------------------------------------------------
    # Price Change
    # ------------------------------------------------------------------

    def set_price(self, caller: str, new_price: int) -> int:
        """Administrator-only: replace the price for every later payment."""
        caller = require_nonzero_identity(caller)
        with self._lock:
            require_administrator(self._store, caller)
            new_price = normalize_amount(new_price)
            old_price = self._store.price
            self._store.price = new_price

        logger.info("gate.price_changed", old_price=old_price, new_price=new_price)
        return new_price


class AccessGate(_BaseGate):
    """Secure variant: roles move only through the invite/accept handshake."""

    variant = GateVariant.SECURE

    def __init__(
        self,
        creator: str,
        recipient: str,
        price: int | None = None,
        *,
        clear_pending_on_accept: bool = False,
        **kwargs,
    ) -> None:
        """See _BaseGate.

        Args:
            clear_pending_on_accept: Clear the pending slot when an invite is
                accepted. Off by default, so the accepted identity stays in the
                slot and may re-accept (re-asserting the same holder).
        """
        self._clear_pending_on_accept = clear_pending_on_accept
        super().__init__(creator, recipient, price, **kwargs)

    @property
    def pending_administrator(self) -> str | None:
        return self._store.pending_administrator

    @property
    def pending_recipient(self) -> str | None:
        return self._store.pending_recipient

    def allowed_transfer_events(self, role: Role) -> list[str]:
        """Transfer events that can fire next for ``role``."""
        with self._lock:
            status = self._store.transfer_status(role)
        return RoleTransferStateMachine(current_status=status.value).get_allowed_events()

    # ------------------------------------------------------------------
    # Transfer Protocol
    # ------------------------------------------------------------------

    def invite_administrator(self, caller: str, candidate: str) -> None:
        """Administrator-only: propose ``candidate`` as the next Administrator."""
        self._invite(Role.ADMINISTRATOR, caller, candidate)

    def accept_administrator_invite(self, caller: str) -> str:
        """Pending Administrator only: become the Administrator."""
        return self._accept(Role.ADMINISTRATOR, caller)

    def invite_recipient(self, caller: str, candidate: str) -> None:
        """Administrator-only: propose ``candidate`` as the next Recipient."""
        self._invite(Role.RECIPIENT, caller, candidate)

    def accept_recipient_invite(self, caller: str) -> str:
        """Pending Recipient only: become the Recipient."""
        return self._accept(Role.RECIPIENT, caller)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _invite(self, role: Role, caller: str, candidate: str) -> None:
        caller = require_nonzero_identity(caller)
        with self._lock:
            require_administrator(self._store, caller)
            candidate = self._require_not_gate(normalize_identity(candidate))
            replaced = self._store.pending(role)
            status = self._next_status(self._store.transfer_status(role), "invite")

            self._store.set_pending(role, candidate)
            self._store.set_transfer_status(role, status)

        logger.info(
            "gate.invited",
            role=role.value,
            candidate=candidate,
            replaced=replaced,
        )

    def _accept(self, role: Role, caller: str) -> str:
        caller = require_nonzero_identity(caller)
        with self._lock:
            require_pending(self._store, role, caller)
            previous_status = self._store.transfer_status(role)
            previous_holder = self._store.holder(role)

            status = self._next_status(previous_status, "accept")
            if self._clear_pending_on_accept:
                status = self._next_status(status, "settle")

            self._store.set_holder(role, caller)
            if status is TransferStatus.STABLE:
                self._store.set_pending(role, None)
            self._store.set_transfer_status(role, status)

        if previous_status is TransferStatus.ACCEPTED:
            logger.warning("gate.stale_invite_reaccepted", role=role.value, holder=caller)
        logger.info(
            "gate.invite_accepted",
            role=role.value,
            previous=previous_holder,
            holder=caller,
            pending_cleared=status is TransferStatus.STABLE,
        )
        return caller

    @staticmethod
    def _next_status(current: TransferStatus, event_name: str) -> TransferStatus:
        """Validate a transfer event and return the resulting status.

        Raises InvalidStateTransitionError if the transition is illegal.
        """
        try:
            return TransferStatus(validate_transition(current.value, event_name))
        except TransitionNotAllowed as err:
            raise InvalidStateTransitionError(current.value, event_name) from err


class SimpleAccessGate(_BaseGate):
    """Simple variant: the Administrator reassigns either role in one step.

    There is no acceptance step, so nothing stops the Administrator from
    assigning a role to an identity nobody controls.
    """

    variant = GateVariant.SIMPLE

    def set_administrator(self, caller: str, identity: str) -> None:
        """Administrator-only: hand the Administrator role to ``identity``."""
        self._reassign(Role.ADMINISTRATOR, caller, identity)

    def set_recipient(self, caller: str, identity: str) -> None:
        """Administrator-only: send future payments to ``identity``."""
        self._reassign(Role.RECIPIENT, caller, identity)

    def _reassign(self, role: Role, caller: str, identity: str) -> None:
        caller = require_nonzero_identity(caller)
        with self._lock:
            require_administrator(self._store, caller)
            identity = self._require_not_gate(normalize_identity(identity))
            previous = self._store.holder(role)
            self._store.set_holder(role, identity)

        if is_zero_identity(identity):
            logger.warning("gate.role_assigned_to_zero_identity", role=role.value)
        logger.info("gate.role_reassigned", role=role.value, previous=previous, holder=identity)


Gate = AccessGate | SimpleAccessGate


def build_gate(
    settings: Settings | None = None,
    *,
    ledger: ValueLedger | None = None,
    channel: NotificationChannel | None = None,
) -> Gate:
    """Create the gate described by the application settings.

    Raises:
        ValueError: If GATE_ADMINISTRATOR or GATE_RECIPIENT is not configured.
    """
    settings = settings or get_settings()
    if not settings.gate_administrator:
        raise ValueError("GATE_ADMINISTRATOR must be set to the creator's identity")
    if not settings.gate_recipient:
        raise ValueError("GATE_RECIPIENT must be set to the recipient's identity")

    common = {
        "price": settings.gate_default_price,
        "ledger": ledger,
        "channel": channel,
        "address": settings.gate_address or None,
    }
    if settings.gate_variant == GateVariant.SIMPLE:
        return SimpleAccessGate(settings.gate_administrator, settings.gate_recipient, **common)
    return AccessGate(
        settings.gate_administrator,
        settings.gate_recipient,
        clear_pending_on_accept=settings.gate_clear_pending_on_accept,
        **common,
    )
