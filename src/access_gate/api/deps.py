"""FastAPI dependency injection providers.

These are used with Depends() in route handlers to inject the gate, its
notification channel and ledger, and configuration. The gate itself is
built once per application and stored on ``app.state``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request

from access_gate.config import Settings, get_settings

if TYPE_CHECKING:
    from access_gate.domain.ledger_protocol import ValueLedger
    from access_gate.infrastructure.notification_channel import NotificationChannel
    from access_gate.services.gate_service import Gate


def get_gate(request: Request) -> Gate:
    """Provide the application's gate."""
    gate = getattr(request.app.state, "gate", None)
    if gate is None:
        raise RuntimeError("Gate not initialized. Start the app through its lifespan.")
    return gate


def get_channel(gate: Gate = Depends(get_gate)) -> NotificationChannel:
    """Provide the gate's notification channel."""
    return gate.channel


def get_ledger(gate: Gate = Depends(get_gate)) -> ValueLedger:
    """Provide the gate's value ledger."""
    return gate.ledger


def get_app_settings() -> Settings:
    """Provide the application settings."""
    return get_settings()
