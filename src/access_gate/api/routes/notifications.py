"""Notification history endpoint.

Listeners that were offline call this to replay what they missed. The
``payer`` filter is served from the channel's payer index.

Routes:
    GET    /api/v1/notifications   — Recorded notifications, oldest first
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from access_gate.api.deps import get_channel
from access_gate.infrastructure.notification_channel import NotificationChannel
from access_gate.schemas.gate import NotificationResponse

router = APIRouter(prefix="/api/v1/notifications", tags=["Notifications"])


@router.get(
    "",
    response_model=list[NotificationResponse],
    summary="Replay recorded notifications",
)
async def list_notifications(
    payer: str | None = Query(
        default=None,
        pattern=r"^0x[0-9a-fA-F]{40}$",
        description="Only notifications paid by this identity",
    ),
    since: int = Query(default=0, ge=0, description="First sequence number to return"),
    channel: NotificationChannel = Depends(get_channel),
) -> list[NotificationResponse]:
    """Return every notification with sequence >= since, optionally for one payer."""
    return [
        NotificationResponse.model_validate(notification)
        for notification in channel.history(since=since, payer=payer)
    ]
