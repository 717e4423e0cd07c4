"""Pydantic schemas for the Access Gate API.

These schemas define the request/response shapes for the REST API. They
are separate from the domain dataclasses to keep clean boundaries between
the API and the gate. Identity fields are checked for shape here and
normalized by the domain layer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from access_gate.domain.identity import MAX_UINT256

IDENTITY_PATTERN = r"^0x[0-9a-fA-F]{40}$"


def _identity_field(description: str) -> object:
    return Field(
        ...,
        min_length=42,
        max_length=42,
        pattern=IDENTITY_PATTERN,
        description=description,
        examples=["0x742d35Cc6634C0532925a3b844Bc9e7595f2bD18"],
    )


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------


class CallerRequest(BaseModel):
    """Body of any call that needs only the acting identity."""

    caller: str = _identity_field("Identity submitting the call")


class PayRequest(CallerRequest):
    """Request body for paying for access."""

    value: int = Field(
        ...,
        ge=0,
        le=MAX_UINT256,
        description="Value attached to the call, in the smallest ledger unit",
        examples=[10_000_000_000_000_000],
    )


class InviteRequest(CallerRequest):
    """Request body for inviting a successor to a role (secure variant)."""

    candidate: str = _identity_field("Identity proposed as the next role holder")


class AssignRoleRequest(CallerRequest):
    """Request body for reassigning a role in one step (simple variant)."""

    identity: str = _identity_field("Identity that takes over the role")


class SetPriceRequest(CallerRequest):
    """Request body for changing the price."""

    price: int = Field(
        ...,
        ge=0,
        le=MAX_UINT256,
        description="New exact price for pay()",
    )


class FundAccountRequest(BaseModel):
    """Request body for crediting a ledger account (development only)."""

    amount: int = Field(..., ge=0, le=MAX_UINT256)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class GateStateResponse(BaseModel):
    """Current role store contents."""

    variant: str
    address: str
    administrator: str
    recipient: str
    price: int
    pending_administrator: str | None = None
    pending_recipient: str | None = None
    administrator_transfer: str = "STABLE"
    recipient_transfer: str = "STABLE"
    allowed_events: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Transfer events that can fire next, per role (secure variant)",
    )


class NotificationResponse(BaseModel):
    """One payment notification."""

    model_config = ConfigDict(from_attributes=True)

    sequence: int
    payer: str
    timestamp: int


class RoleChangeResponse(BaseModel):
    """Result of an invite, accept or reassignment."""

    role: str
    holder: str
    pending: str | None = None


class PriceResponse(BaseModel):
    price: int


class BalanceResponse(BaseModel):
    identity: str
    balance: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    variant: str = "unknown"
    notifications: int = 0
