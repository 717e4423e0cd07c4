"""Pydantic API schemas."""

from access_gate.schemas.gate import (
    AssignRoleRequest,
    BalanceResponse,
    CallerRequest,
    FundAccountRequest,
    GateStateResponse,
    HealthResponse,
    InviteRequest,
    NotificationResponse,
    PayRequest,
    PriceResponse,
    RoleChangeResponse,
    SetPriceRequest,
)

__all__ = [
    "AssignRoleRequest",
    "BalanceResponse",
    "CallerRequest",
    "FundAccountRequest",
    "GateStateResponse",
    "HealthResponse",
    "InviteRequest",
    "NotificationResponse",
    "PayRequest",
    "PriceResponse",
    "RoleChangeResponse",
    "SetPriceRequest",
]
