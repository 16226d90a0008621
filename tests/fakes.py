from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Iterator, Optional

from src.checkin_penalty.checkin_penalty.core.exceptions import NotificationError, TransientStoreError
from src.checkin_penalty.checkin_penalty.events.model import EventConfig
from src.checkin_penalty.checkin_penalty.ledger.model import LedgerDeduction, PhotographerLedger
from src.checkin_penalty.checkin_penalty.users.model import UserProfile


class InMemoryAttendance:
    def __init__(self, record_ids: Optional[set[str]] = None):
        self.record_ids = set(record_ids or ())
        self.stamps: dict[str, tuple[bool, Decimal]] = {}
        self.writes = 0

    def stamp_lateness(self, record_id: str, *, is_late: bool, late_deduction_applied: Decimal) -> bool:
        if record_id not in self.record_ids:
            return False
        self.writes += 1
        self.stamps[record_id] = (is_late, late_deduction_applied)
        return True


@dataclass
class InMemoryEvents:
    events: dict[str, EventConfig] = field(default_factory=dict)

    def get_by_id(self, event_id: str) -> Optional[EventConfig]:
        return self.events.get(event_id)


@dataclass
class InMemoryUsers:
    users: dict[str, UserProfile] = field(default_factory=dict)

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        return self.users.get(user_id)


class RecordingSender:
    def __init__(self):
        self.sent: list[dict[str, str]] = []

    def send(self, *, token: str, title: str, body: str) -> None:
        self.sent.append({"token": token, "title": title, "body": body})


class FailingSender:
    def __init__(self):
        self.attempts = 0

    def send(self, *, token: str, title: str, body: str) -> None:
        self.attempts += 1
        raise NotificationError("channel unavailable")


class _InMemoryLedgerTransaction:
    def __init__(self, repo: "InMemoryLedgerRepository"):
        self._repo = repo
        self.read_versions: dict[str, int] = {}
        self.pending_ledgers: dict[str, PhotographerLedger] = {}
        self.pending_deductions: dict[str, LedgerDeduction] = {}

    def get_for_update(self, photographer_id: str) -> Optional[PhotographerLedger]:
        with self._repo.lock:
            row = self._repo.rows.get(photographer_id)
        if row is None:
            return None
        ledger, version = row
        self.read_versions[photographer_id] = version
        if self._repo.after_read is not None:
            self._repo.after_read(photographer_id)
        return ledger

    def save(self, ledger: PhotographerLedger) -> None:
        self.pending_ledgers[ledger.photographer_id] = ledger

    def get_deduction(self, attendance_id: str) -> Optional[LedgerDeduction]:
        if attendance_id in self.pending_deductions:
            return self.pending_deductions[attendance_id]
        with self._repo.lock:
            return self._repo.deductions.get(attendance_id)

    def add_deduction(self, deduction: LedgerDeduction) -> None:
        self.pending_deductions[deduction.attendance_id] = deduction


class InMemoryLedgerRepository:
    """Ledger store with optimistic concurrency.

    Commits fail with ``TransientStoreError`` when a row read in the
    transaction changed since it was read, like a serialization conflict.
    """

    def __init__(self, ledgers: Optional[list[PhotographerLedger]] = None):
        self.lock = threading.Lock()
        self.rows: dict[str, tuple[PhotographerLedger, int]] = {}
        self.deductions: dict[str, LedgerDeduction] = {}
        self.commits = 0
        self.conflicts = 0
        self.writes = 0
        self.after_read: Optional[Callable[[str], None]] = None
        for ledger in ledgers or []:
            self.rows[ledger.photographer_id] = (ledger, 0)

    @contextmanager
    def transaction(self) -> Iterator[_InMemoryLedgerTransaction]:
        txn = _InMemoryLedgerTransaction(self)
        yield txn
        self._commit(txn)

    def _commit(self, txn: _InMemoryLedgerTransaction) -> None:
        with self.lock:
            for photographer_id, version in txn.read_versions.items():
                current = self.rows.get(photographer_id)
                if current is None or current[1] != version:
                    self.conflicts += 1
                    raise TransientStoreError(f"write conflict on {photographer_id}")
            for attendance_id in txn.pending_deductions:
                if attendance_id in self.deductions:
                    self.conflicts += 1
                    raise TransientStoreError(f"duplicate deduction {attendance_id}")

            for photographer_id, ledger in txn.pending_ledgers.items():
                _, version = self.rows[photographer_id]
                self.rows[photographer_id] = (ledger, version + 1)
                self.writes += 1
            self.deductions.update(txn.pending_deductions)
            self.writes += len(txn.pending_deductions)
            self.commits += 1

    def ledger_of(self, photographer_id: str) -> Optional[PhotographerLedger]:
        with self.lock:
            row = self.rows.get(photographer_id)
        return row[0] if row else None


class AlwaysConflictingLedgerRepository(InMemoryLedgerRepository):
    def _commit(self, txn: _InMemoryLedgerTransaction) -> None:
        with self.lock:
            self.conflicts += 1
        raise TransientStoreError("lock wait timeout")
