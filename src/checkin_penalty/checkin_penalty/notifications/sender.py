from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class NotificationSender(Protocol):
    def send(self, *, token: str, title: str, body: str) -> None:
        """Deliver one push message; raise ``NotificationError`` on failure."""

        raise NotImplementedError


class LogOnlyNotificationSender(NotificationSender):
    """Stand-in used when no push project is configured (local/dev)."""

    def send(self, *, token: str, title: str, body: str) -> None:
        logger.info("notification.log_only token_suffix=%s title=%s body=%s", token[-6:], title, body)
