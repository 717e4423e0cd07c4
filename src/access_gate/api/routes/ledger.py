"""Ledger endpoints.

Routes:
    GET    /api/v1/ledger/{identity}        — Account balance
    POST   /api/v1/ledger/{identity}/fund   — Credit an account (development only)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from access_gate.api.deps import get_app_settings, get_ledger
from access_gate.config import Settings
from access_gate.domain.identity import normalize_identity
from access_gate.domain.ledger_protocol import ValueLedger
from access_gate.infrastructure.ledger import InMemoryLedger
from access_gate.logging_config import get_logger
from access_gate.schemas.gate import BalanceResponse, FundAccountRequest

router = APIRouter(prefix="/api/v1/ledger", tags=["Ledger"])
logger = get_logger(__name__)


@router.get(
    "/{identity}",
    response_model=BalanceResponse,
    summary="Get an account balance",
)
async def get_balance(
    identity: str,
    ledger: ValueLedger = Depends(get_ledger),
) -> BalanceResponse:
    identity = normalize_identity(identity)
    return BalanceResponse(identity=identity, balance=ledger.balance_of(identity))


@router.post(
    "/{identity}/fund",
    response_model=BalanceResponse,
    summary="Credit an account (development only)",
)
async def fund_account(
    identity: str,
    request: FundAccountRequest,
    ledger: ValueLedger = Depends(get_ledger),
    settings: Settings = Depends(get_app_settings),
) -> BalanceResponse:
    """Mint value into an account so it can pay. Disabled outside development."""
    if not settings.is_development or not isinstance(ledger, InMemoryLedger):
        raise HTTPException(status_code=404, detail="Funding is only available in development")
    identity = normalize_identity(identity)
    balance = ledger.credit(identity, request.amount)
    return BalanceResponse(identity=identity, balance=balance)
