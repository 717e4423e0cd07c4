"""Domain layer — pure business rules with zero framework dependencies."""

from access_gate.domain.enums import GateVariant, Role, TransferStatus
from access_gate.domain.exceptions import (
    AccessGateError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidIdentityError,
    InvalidStateTransitionError,
    PriceMismatchError,
    TransferFailureError,
    UnauthorizedError,
    UnsupportedOperationError,
)
from access_gate.domain.ledger_protocol import ValueLedger
from access_gate.domain.notification import Notification
from access_gate.domain.role_store import GateSnapshot, RoleStore
from access_gate.domain.state_machine import (
    RoleTransferStateMachine,
    validate_transition,
)

__all__ = [
    "GateVariant",
    "Role",
    "TransferStatus",
    "AccessGateError",
    "InsufficientFundsError",
    "InvalidAmountError",
    "InvalidIdentityError",
    "InvalidStateTransitionError",
    "PriceMismatchError",
    "TransferFailureError",
    "UnauthorizedError",
    "UnsupportedOperationError",
    "ValueLedger",
    "Notification",
    "GateSnapshot",
    "RoleStore",
    "RoleTransferStateMachine",
    "validate_transition",
]
