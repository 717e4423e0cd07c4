"""Role Store — the gate's privileged identities, pending slots and price.

The store is a plain data holder. Only the gate service writes to it, and
only after every guard for the operation has passed.
"""

from __future__ import annotations

from dataclasses import dataclass

from access_gate.domain.enums import Role, TransferStatus


@dataclass(frozen=True)
class GateSnapshot:
    """Immutable read view of the RoleStore at one instant."""

    administrator: str
    recipient: str
    price: int
    pending_administrator: str | None = None
    pending_recipient: str | None = None
    administrator_transfer: TransferStatus = TransferStatus.STABLE
    recipient_transfer: TransferStatus = TransferStatus.STABLE

    def to_dict(self) -> dict:
        return {
            "administrator": self.administrator,
            "recipient": self.recipient,
            "price": self.price,
            "pending_administrator": self.pending_administrator,
            "pending_recipient": self.pending_recipient,
            "administrator_transfer": self.administrator_transfer.value,
            "recipient_transfer": self.recipient_transfer.value,
        }


@dataclass
class RoleStore:
    """Mutable role state of one gate."""

    administrator: str
    recipient: str
    price: int
    pending_administrator: str | None = None
    pending_recipient: str | None = None
    administrator_transfer: TransferStatus = TransferStatus.STABLE
    recipient_transfer: TransferStatus = TransferStatus.STABLE

    def holder(self, role: Role) -> str:
        if role is Role.ADMINISTRATOR:
            return self.administrator
        return self.recipient

    def pending(self, role: Role) -> str | None:
        if role is Role.ADMINISTRATOR:
            return self.pending_administrator
        return self.pending_recipient

    def transfer_status(self, role: Role) -> TransferStatus:
        if role is Role.ADMINISTRATOR:
            return self.administrator_transfer
        return self.recipient_transfer

    def set_holder(self, role: Role, identity: str) -> None:
        if role is Role.ADMINISTRATOR:
            self.administrator = identity
        else:
            self.recipient = identity

    def set_pending(self, role: Role, identity: str | None) -> None:
        if role is Role.ADMINISTRATOR:
            self.pending_administrator = identity
        else:
            self.pending_recipient = identity

    def set_transfer_status(self, role: Role, status: TransferStatus) -> None:
        if role is Role.ADMINISTRATOR:
            self.administrator_transfer = status
        else:
            self.recipient_transfer = status

    def snapshot(self) -> GateSnapshot:
        return GateSnapshot(
            administrator=self.administrator,
            recipient=self.recipient,
            price=self.price,
            pending_administrator=self.pending_administrator,
            pending_recipient=self.pending_recipient,
            administrator_transfer=self.administrator_transfer,
            recipient_transfer=self.recipient_transfer,
        )
