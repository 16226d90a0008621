from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import UserProfile
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id, fcm_token FROM users WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            if not r:
                return None
            return UserProfile(user_id=str(r["user_id"]), fcm_token=r.get("fcm_token") or None)
