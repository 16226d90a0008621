from __future__ import annotations

from typing import Optional, Protocol

from .model import EventConfig


class EventRepository(Protocol):
    def get_by_id(self, event_id: str) -> Optional[EventConfig]:
        raise NotImplementedError
