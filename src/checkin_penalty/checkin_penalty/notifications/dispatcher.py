from __future__ import annotations

import logging
from decimal import Decimal

from ..common.validators import format_amount
from ..core.constants import LATE_CHECKIN_BODY, LATE_CHECKIN_TITLE
from ..users.repository import UserRepository
from .sender import NotificationSender

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Best-effort push about an applied late deduction.

    Runs only after the ledger transaction committed; nothing here can undo
    or fail that write. Every error is logged and swallowed.
    """

    def __init__(self, users: UserRepository, sender: NotificationSender):
        self._users = users
        self._sender = sender

    def notify_late_check_in(self, photographer_id: str, amount: Decimal) -> None:
        try:
            profile = self._users.get_by_id(photographer_id)
            token = profile.fcm_token if profile else None
            if not token:
                logger.debug("notification.skipped photographer_id=%s reason=no_token", photographer_id)
                return

            self._sender.send(
                token=token,
                title=LATE_CHECKIN_TITLE,
                body=LATE_CHECKIN_BODY.format(amount=format_amount(amount)),
            )
            logger.info("notification.sent photographer_id=%s", photographer_id)
        except Exception:
            logger.exception("notification.failed photographer_id=%s", photographer_id)
