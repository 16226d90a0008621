from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.processor import CheckInProcessor
from .attendance.repository import AttendanceRepository
from .attendance.time_window import TimeWindowEvaluator
from .core.constants import (
    DEFAULT_FCM_TIMEOUT_SECONDS,
    DEFAULT_LEDGER_MAX_ATTEMPTS,
    DEFAULT_LEDGER_RETRY_BACKOFF_SECONDS,
)
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .ledger.mysql_ledger_repository import MySQLLedgerRepository
from .ledger.repository import LedgerRepository
from .ledger.service import LedgerUpdater
from .notifications import fcm_sender
from .notifications.dispatcher import NotificationDispatcher
from .notifications.sender import LogOnlyNotificationSender, NotificationSender
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    checkin_processor: CheckInProcessor


def build_notification_sender(settings: Any) -> NotificationSender:
    project_id = str(getattr(settings, "FCM_PROJECT_ID", "") or "")
    if not project_id:
        return LogOnlyNotificationSender()
    credentials = fcm_sender.load_fcm_credentials(str(getattr(settings, "FCM_CREDENTIALS_FILE", "") or ""))
    return fcm_sender.FcmNotificationSender(
        project_id=project_id,
        credentials=credentials,
        timeout_seconds=float(getattr(settings, "FCM_TIMEOUT_SECONDS", DEFAULT_FCM_TIMEOUT_SECONDS)),
    )


def assemble(
    *,
    attendance_repo: AttendanceRepository,
    events_repo: EventRepository,
    ledger_repo: LedgerRepository,
    users_repo: UserRepository,
    notification_sender: NotificationSender,
    ledger_max_attempts: int = DEFAULT_LEDGER_MAX_ATTEMPTS,
    ledger_backoff_seconds: float = DEFAULT_LEDGER_RETRY_BACKOFF_SECONDS,
) -> Container:
    """Wire services over the given repositories (MySQL in prod, in-memory in tests)."""

    ledger_updater = LedgerUpdater(
        ledger_repo,
        max_attempts=ledger_max_attempts,
        backoff_seconds=ledger_backoff_seconds,
    )
    checkin_processor = CheckInProcessor(
        attendance_repo,
        events_repo,
        ledger_updater,
        NotificationDispatcher(users_repo, notification_sender),
        evaluator=TimeWindowEvaluator(),
    )

    return Container(checkin_processor=checkin_processor)


def build_container(*, settings: Any) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(dict(getattr(settings, "DB_CONFIG"))))

    return assemble(
        attendance_repo=MySQLAttendanceRepository(conn),
        events_repo=MySQLEventRepository(conn),
        ledger_repo=MySQLLedgerRepository(conn),
        users_repo=MySQLUserRepository(conn),
        notification_sender=build_notification_sender(settings),
        ledger_max_attempts=int(getattr(settings, "LEDGER_MAX_ATTEMPTS", DEFAULT_LEDGER_MAX_ATTEMPTS)),
        ledger_backoff_seconds=float(
            getattr(settings, "LEDGER_RETRY_BACKOFF_SECONDS", DEFAULT_LEDGER_RETRY_BACKOFF_SECONDS)
        ),
    )
