from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UserProfile:
    """Domain entity: the app user behind a photographer id."""

    user_id: str
    fcm_token: Optional[str] = None
