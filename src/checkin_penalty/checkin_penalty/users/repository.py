from __future__ import annotations

from typing import Optional, Protocol

from .model import UserProfile


class UserRepository(Protocol):
    """Read-only user lookup.

    Note: photographer ids double as user ids.
    """

    def get_by_id(self, user_id: str) -> Optional[UserProfile]:
        raise NotImplementedError
