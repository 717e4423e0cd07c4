"""Notification Channel — one-way broadcast of payment notifications.

The channel keeps the ordered record of every notification (the host
ledger's event log) with a payer index, and delivers each new notification
to the callbacks currently subscribed. Listeners that were offline bridge the
gap by subscribing with ``replay_from`` set to their cursor.

Usage:
    channel = NotificationChannel()
    sub = channel.subscribe(lambda payer, ts: print(payer, ts))
    channel.publish("0xabc...", 1700000000)
    sub.cancel()
"""

from __future__ import annotations

import threading
from collections import defaultdict

from access_gate.domain.identity import normalize_identity
from access_gate.domain.notification import Notification, NotificationCallback
from access_gate.logging_config import get_logger

logger = get_logger(__name__)


class Subscription:
    """Handle returned by NotificationChannel.subscribe."""

    def __init__(
        self,
        channel: NotificationChannel,
        callback: NotificationCallback,
        payer: str | None,
    ) -> None:
        self._channel = channel
        self.callback = callback
        self.payer = payer
        self.active = True

    def cancel(self) -> int:
        """Stop receiving notifications. Safe to call more than once.

        Returns the sequence number of the first notification this
        subscription did not receive, for use as a later replay_from.
        """
        cursor = self._channel._remove(self)
        self.active = False
        return cursor


class NotificationChannel:
    """Ordered, payer-indexed notification record with live subscribers."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: list[Notification] = []
        self._by_payer: dict[str, list[int]] = defaultdict(list)
        # Key None holds the unfiltered subscribers.
        self._subscribers: dict[str | None, list[Subscription]] = defaultdict(list)

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def publish(self, payer: str, timestamp: int) -> Notification:
        """Record a notification and deliver it to matching subscribers."""
        payer = normalize_identity(payer)
        with self._lock:
            notification = Notification(
                payer=payer,
                timestamp=timestamp,
                sequence=len(self._records),
            )
            self._records.append(notification)
            self._by_payer[payer].append(notification.sequence)

            targets = [*self._subscribers[None], *self._subscribers.get(payer, [])]
            for subscription in targets:
                self._deliver(subscription, notification)

        logger.debug(
            "notification.published",
            sequence=notification.sequence,
            payer=payer,
            subscribers=len(targets),
        )
        return notification

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(
        self,
        callback: NotificationCallback,
        payer: str | None = None,
        replay_from: int | None = None,
    ) -> Subscription:
        """Register a callback, optionally filtered by payer.

        Args:
            callback: Called as ``callback(payer, timestamp)`` per notification.
            payer: Only deliver notifications from this identity.
            replay_from: Deliver recorded notifications with sequence >= this
                value before any live ones. Replay and registration happen
                under one lock, so nothing is missed or delivered twice.
        """
        if payer is not None:
            payer = normalize_identity(payer)
        subscription = Subscription(self, callback, payer)

        with self._lock:
            if replay_from is not None:
                for notification in self.history(since=replay_from, payer=payer):
                    self._deliver(subscription, notification)
            self._subscribers[payer].append(subscription)

        logger.debug("notification.subscribed", payer=payer, replay_from=replay_from)
        return subscription

    def _remove(self, subscription: Subscription) -> int:
        with self._lock:
            subscribers = self._subscribers.get(subscription.payer, [])
            if subscription in subscribers:
                subscribers.remove(subscription)
            return len(self._records)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def history(self, since: int = 0, payer: str | None = None) -> list[Notification]:
        """Return recorded notifications with ``sequence >= since``, oldest first."""
        since = max(since, 0)
        with self._lock:
            if payer is None:
                return self._records[since:]
            payer = normalize_identity(payer)
            return [
                self._records[index]
                for index in self._by_payer.get(payer, [])
                if index >= since
            ]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _deliver(self, subscription: Subscription, notification: Notification) -> None:
        try:
            subscription.callback(notification.payer, notification.timestamp)
        except Exception:
            logger.exception(
                "notification.listener_failed",
                sequence=notification.sequence,
                payer=notification.payer,
            )
