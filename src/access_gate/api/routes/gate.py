"""Gate REST API routes.

These endpoints are the host's entry points into the gate. Each request
names the acting identity in its ``caller`` field; the gate's guards decide
whether that identity may perform the operation.

Routes:
    GET    /api/v1/gate                         — Current state
    POST   /api/v1/gate/pay                     — Pay for access
    POST   /api/v1/gate/price                   — Change the price
    POST   /api/v1/gate/administrator/invite    — Invite a new administrator (secure)
    POST   /api/v1/gate/administrator/accept    — Accept the administrator invite (secure)
    POST   /api/v1/gate/recipient/invite        — Invite a new recipient (secure)
    POST   /api/v1/gate/recipient/accept        — Accept the recipient invite (secure)
    POST   /api/v1/gate/administrator           — Reassign the administrator (simple)
    POST   /api/v1/gate/recipient               — Reassign the recipient (simple)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from access_gate.api.deps import get_gate
from access_gate.domain.enums import Role
from access_gate.domain.exceptions import UnsupportedOperationError
from access_gate.logging_config import get_logger
from access_gate.schemas.gate import (
    AssignRoleRequest,
    CallerRequest,
    GateStateResponse,
    InviteRequest,
    NotificationResponse,
    PayRequest,
    PriceResponse,
    RoleChangeResponse,
    SetPriceRequest,
)
from access_gate.services.gate_service import AccessGate, Gate, SimpleAccessGate

router = APIRouter(prefix="/api/v1/gate", tags=["Gate"])
logger = get_logger(__name__)


def _require_secure(gate: Gate, operation: str) -> AccessGate:
    if not isinstance(gate, AccessGate):
        raise UnsupportedOperationError(operation, gate.variant.value)
    return gate


def _require_simple(gate: Gate, operation: str) -> SimpleAccessGate:
    if not isinstance(gate, SimpleAccessGate):
        raise UnsupportedOperationError(operation, gate.variant.value)
    return gate


def _role_change(gate: Gate, role: Role) -> RoleChangeResponse:
    snapshot = gate.snapshot()
    if role is Role.ADMINISTRATOR:
        return RoleChangeResponse(
            role=role.value,
            holder=snapshot.administrator,
            pending=snapshot.pending_administrator,
        )
    return RoleChangeResponse(
        role=role.value,
        holder=snapshot.recipient,
        pending=snapshot.pending_recipient,
    )


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=GateStateResponse,
    summary="Get the gate's current state",
)
async def get_state(gate: Gate = Depends(get_gate)) -> GateStateResponse:
    """Return roles, pending invitees, price and the next allowed transfer events."""
    snapshot = gate.snapshot()
    allowed: dict[str, list[str]] = {}
    if isinstance(gate, AccessGate):
        allowed = {role.value: gate.allowed_transfer_events(role) for role in Role}
    return GateStateResponse(
        variant=gate.variant.value,
        address=gate.address,
        allowed_events=allowed,
        **snapshot.to_dict(),
    )


# ---------------------------------------------------------------------------
# Payment Gate
# ---------------------------------------------------------------------------


@router.post(
    "/pay",
    response_model=NotificationResponse,
    summary="Pay the exact price for access",
)
async def pay(request: PayRequest, gate: Gate = Depends(get_gate)) -> NotificationResponse:
    """Forward the attached value to the recipient and emit a notification."""
    notification = gate.pay(request.caller, request.value)
    return NotificationResponse.model_validate(notification)


# ---------------------------------------------------------------------------
# Price Change
# ---------------------------------------------------------------------------


@router.post(
    "/price",
    response_model=PriceResponse,
    summary="Change the price (administrator only)",
)
async def set_price(
    request: SetPriceRequest,
    gate: Gate = Depends(get_gate),
) -> PriceResponse:
    price = gate.set_price(request.caller, request.price)
    return PriceResponse(price=price)


# ---------------------------------------------------------------------------
# Transfer Protocol (secure variant)
# ---------------------------------------------------------------------------


@router.post(
    "/administrator/invite",
    response_model=RoleChangeResponse,
    summary="Invite a new administrator",
)
async def invite_administrator(
    request: InviteRequest,
    gate: Gate = Depends(get_gate),
) -> RoleChangeResponse:
    secure = _require_secure(gate, "invite_administrator")
    secure.invite_administrator(request.caller, request.candidate)
    return _role_change(secure, Role.ADMINISTRATOR)


@router.post(
    "/administrator/accept",
    response_model=RoleChangeResponse,
    summary="Accept the administrator invite",
)
async def accept_administrator_invite(
    request: CallerRequest,
    gate: Gate = Depends(get_gate),
) -> RoleChangeResponse:
    secure = _require_secure(gate, "accept_administrator_invite")
    secure.accept_administrator_invite(request.caller)
    return _role_change(secure, Role.ADMINISTRATOR)


@router.post(
    "/recipient/invite",
    response_model=RoleChangeResponse,
    summary="Invite a new recipient",
)
async def invite_recipient(
    request: InviteRequest,
    gate: Gate = Depends(get_gate),
) -> RoleChangeResponse:
    secure = _require_secure(gate, "invite_recipient")
    secure.invite_recipient(request.caller, request.candidate)
    return _role_change(secure, Role.RECIPIENT)


@router.post(
    "/recipient/accept",
    response_model=RoleChangeResponse,
    summary="Accept the recipient invite",
)
async def accept_recipient_invite(
    request: CallerRequest,
    gate: Gate = Depends(get_gate),
) -> RoleChangeResponse:
    secure = _require_secure(gate, "accept_recipient_invite")
    secure.accept_recipient_invite(request.caller)
    return _role_change(secure, Role.RECIPIENT)


# ---------------------------------------------------------------------------
# Direct reassignment (simple variant)
# ---------------------------------------------------------------------------


@router.post(
    "/administrator",
    response_model=RoleChangeResponse,
    summary="Reassign the administrator in one step",
)
async def set_administrator(
    request: AssignRoleRequest,
    gate: Gate = Depends(get_gate),
) -> RoleChangeResponse:
    simple = _require_simple(gate, "set_administrator")
    simple.set_administrator(request.caller, request.identity)
    return _role_change(simple, Role.ADMINISTRATOR)


@router.post(
    "/recipient",
    response_model=RoleChangeResponse,
    summary="Reassign the recipient in one step",
)
async def set_recipient(
    request: AssignRoleRequest,
    gate: Gate = Depends(get_gate),
) -> RoleChangeResponse:
    simple = _require_simple(gate, "set_recipient")
    simple.set_recipient(request.caller, request.identity)
    return _role_change(simple, Role.RECIPIENT)
