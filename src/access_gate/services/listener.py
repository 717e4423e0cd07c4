"""Access Listener — reacts to payment notifications by granting access.

The listener subscribes to the NotificationChannel, turns each notification's
timestamp into local wall-clock time, logs the authorization and hands the
payer to an optional grant callback (the out-of-band privilege).

Offline gap:
    The channel does not redeliver. ``detach()`` remembers the sequence
    number of the first notification the listener missed, and ``attach()``
    replays from there, so a listener that reconnects catches up.

Usage:
    listener = AccessListener(gate.channel, grant=grant_vpn_access)
    listener.attach()
    ...
    listener.detach()
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import TYPE_CHECKING

from access_gate.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from access_gate.infrastructure.notification_channel import (
        NotificationChannel,
        Subscription,
    )

logger = get_logger(__name__)


def to_wall_clock(timestamp: int, tz: tzinfo | None = None) -> datetime:
    """Convert seconds since the epoch to an aware datetime in ``tz`` (local if None)."""
    return datetime.fromtimestamp(timestamp, tz=tz).astimezone(tz)


def format_clock(timestamp: int, tz: tzinfo | None = None) -> str:
    """Render a timestamp as ``HH:MM:SS`` wall-clock time."""
    return to_wall_clock(timestamp, tz).strftime("%H:%M:%S")


class AccessListener:
    """Subscribes to payment notifications and grants access to each payer."""

    def __init__(
        self,
        channel: NotificationChannel,
        grant: Callable[[str, datetime], None] | None = None,
        *,
        tz: tzinfo | None = None,
        payer: str | None = None,
        start_from: int = 0,
    ) -> None:
        """Create a detached listener.

        Args:
            channel: The channel to subscribe to.
            grant: Called as ``grant(payer, paid_at)`` for every notification.
            tz: Time zone for wall-clock conversion. Local time if None.
            payer: Only react to notifications from this identity.
            start_from: Sequence number to replay from on the first attach.
        """
        self._channel = channel
        self._grant = grant
        self._tz = tz
        self._payer = payer
        self._cursor = start_from
        self._subscription: Subscription | None = None

    @property
    def attached(self) -> bool:
        return self._subscription is not None

    @property
    def cursor(self) -> int:
        """Sequence number the next attach() replays from."""
        return self._cursor

    def attach(self) -> None:
        """Subscribe, first replaying everything recorded since the cursor."""
        if self._subscription is not None:
            return
        self._subscription = self._channel.subscribe(
            self.on_paid_for_access,
            payer=self._payer,
            replay_from=self._cursor,
        )
        logger.info("listener.attached", replay_from=self._cursor, payer=self._payer)

    def detach(self) -> None:
        """Unsubscribe and remember where to resume."""
        if self._subscription is None:
            return
        self._cursor = self._subscription.cancel()
        self._subscription = None
        logger.info("listener.detached", cursor=self._cursor)

    def on_paid_for_access(self, payer: str, timestamp: int) -> None:
        """Notification callback: receives ``(payer, timestamp)`` positionally."""
        paid_at = to_wall_clock(timestamp, self._tz)
        clock = format_clock(timestamp, self._tz)
        logger.info(
            "listener.access_granted",
            message=f"New user authorized: {payer} at {clock}",
            payer=payer,
            clock=clock,
        )
        if self._grant is not None:
            self._grant(payer, paid_at)
