"""Domain exceptions for the Access Gate.

These exceptions are framework-agnostic and represent business rule violations.
Every one of them aborts the call before any state is mutated. They are
caught and translated to HTTP responses by the API layer's middleware.
"""


class AccessGateError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "ACCESS_GATE_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Guard Errors ---


class UnauthorizedError(AccessGateError):
    """Raised when the caller does not hold the role an operation requires.

    Example: a non-Administrator calling set_price, or an identity other than
    the pending invitee calling accept_administrator_invite.
    """

    def __init__(self, caller: str, required_role: str) -> None:
        super().__init__(
            message=f"Caller {caller} is not the {required_role}",
            code="UNAUTHORIZED",
        )
        self.caller = caller
        self.required_role = required_role


class PriceMismatchError(AccessGateError):
    """Raised when the value attached to pay() differs from the current price."""

    def __init__(self, expected: int, attached: int) -> None:
        super().__init__(
            message=f"Attached value {attached} does not match price {expected}",
            code="PRICE_MISMATCH",
        )
        self.expected = expected
        self.attached = attached


# --- Value Transfer Errors ---


class TransferFailureError(AccessGateError):
    """Raised when moving value between ledger accounts does not succeed."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        destination: str | None = None,
        amount: int | None = None,
    ) -> None:
        super().__init__(message=message, code="TRANSFER_FAILURE")
        self.source = source
        self.destination = destination
        self.amount = amount


class InsufficientFundsError(TransferFailureError):
    """Raised when the source account holds less than the amount to move."""

    def __init__(self, identity: str, required: int, available: int) -> None:
        super().__init__(
            message=(
                f"Insufficient funds in {identity}: "
                f"required {required}, available {available}"
            ),
            source=identity,
            amount=required,
        )
        self.code = "INSUFFICIENT_FUNDS"
        self.required = required
        self.available = available


# --- Input Errors ---


class InvalidIdentityError(AccessGateError):
    """Raised when a value is not a well-formed identity (0x + 40 hex digits)."""

    def __init__(self, value: object, reason: str = "malformed identity") -> None:
        super().__init__(
            message=f"Invalid identity {value!r}: {reason}",
            code="INVALID_IDENTITY",
        )
        self.value = value


class InvalidAmountError(AccessGateError):
    """Raised when an amount falls outside the unsigned 256-bit range."""

    def __init__(self, value: object) -> None:
        super().__init__(
            message=f"Invalid amount {value!r}: must be an integer in [0, 2**256)",
            code="INVALID_AMOUNT",
        )
        self.value = value


# --- Protocol Errors ---


class InvalidStateTransitionError(AccessGateError):
    """Raised when a role transfer event is not allowed from the current state."""

    def __init__(self, current_state: str, attempted_event: str) -> None:
        super().__init__(
            message=f"Invalid state transition: {attempted_event} from {current_state}",
            code="INVALID_STATE_TRANSITION",
        )
        self.current_state = current_state
        self.attempted_event = attempted_event


class UnsupportedOperationError(AccessGateError):
    """Raised when an operation is not part of the gate variant's surface."""

    def __init__(self, operation: str, variant: str) -> None:
        super().__init__(
            message=f"Operation {operation} is not supported by the {variant} gate",
            code="UNSUPPORTED_OPERATION",
        )
        self.operation = operation
        self.variant = variant
