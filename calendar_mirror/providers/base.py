"""Abstract calendar client and CalendarEvent data model."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class CalendarEvent:
    """Event as read from (and written back to) a remote calendar."""
    id: str = ""
    recurring_event_id: str = ""
    summary: str = ""
    description: str = ""
    location: str = ""
    start: dict = field(default_factory=dict)   # {"dateTime": ...} or {"date": ...}
    end: dict = field(default_factory=dict)
    attendees: list[dict] = field(default_factory=list)
    attachments: list[dict] = field(default_factory=list)
    organizer: dict = field(default_factory=dict)
    reminders: Optional[dict] = None
    color_id: str = ""
    raw: dict = field(default_factory=dict)  # Original API payload for lossless re-import

    @property
    def start_time(self) -> str:
        return _time_value(self.start)

    @property
    def end_time(self) -> str:
        return _time_value(self.end)

    @property
    def is_recurring_instance(self) -> bool:
        return bool(self.recurring_event_id)


def _time_value(container: dict) -> str:
    if not container:
        return ""
    return container.get('dateTime') or container.get('date') or ""


class CalendarClient(ABC):
    """Capability the sync engine needs from one vendor's calendar."""

    def __init__(self, vendor: str, calendar_id: str = 'primary'):
        self.vendor = vendor
        self.calendar_id = calendar_id

    @abstractmethod
    def list_upcoming_events(self, time_min: datetime, max_results: int) -> list[CalendarEvent]:
        """Upcoming single events ordered by start time, deleted events excluded."""
        ...

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[CalendarEvent]:
        """Fetch one event by id. Returns None if it does not exist."""
        ...

    @abstractmethod
    def get_primary_address(self) -> str:
        """Address (calendar id) of the account's primary calendar."""
        ...

    @abstractmethod
    def import_event(self, event: CalendarEvent) -> CalendarEvent:
        """Import an event as a private copy. Returns the stored event."""
        ...

    def __repr__(self):
        return f"<{self.__class__.__name__} '{self.vendor}'>"
