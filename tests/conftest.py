"""Shared fixtures: an in-memory calendar client and event factory."""
import copy
import itertools
from typing import Optional

import pytest

from calendar_mirror.config import Side, SyncOptions, Vendor
from calendar_mirror.errors import RemoteError
from calendar_mirror.providers.base import CalendarClient, CalendarEvent
from calendar_mirror.sync.state import StateStore


def make_event(event_id='e1', summary='Standup', start='2030-01-07T09:00:00Z',
               end='2030-01-07T09:30:00Z', **kwargs) -> CalendarEvent:
    """Create a CalendarEvent with sensible defaults."""
    return CalendarEvent(
        id=event_id,
        summary=summary,
        start={'dateTime': start},
        end={'dateTime': end},
        **kwargs,
    )


class FakeCalendarClient(CalendarClient):
    """Calendar kept in memory. Imported events show up in later listings."""

    _ids = itertools.count(1)

    def __init__(self, vendor, events=None, masters=None, address=None):
        super().__init__(vendor)
        self.events = list(events or [])
        self.masters = dict(masters or {})
        self.address = address or f"{vendor}@example.com"
        self.imported: list[CalendarEvent] = []
        self.get_calls: list[str] = []
        self.fail_on: set[str] = set()

    def list_upcoming_events(self, time_min, max_results):
        if 'list' in self.fail_on:
            raise RemoteError(f"{self.vendor} events.list", "backend error")
        return [copy.deepcopy(e) for e in self.events[:max_results]]

    def get_event(self, event_id) -> Optional[CalendarEvent]:
        self.get_calls.append(event_id)
        if 'get' in self.fail_on:
            raise RemoteError(f"{self.vendor} events.get", "backend error")
        master = self.masters.get(event_id)
        return copy.deepcopy(master) if master else None

    def get_primary_address(self):
        if 'calendar' in self.fail_on:
            raise RemoteError(f"{self.vendor} calendars.get", "backend error")
        return self.address

    def import_event(self, event):
        if 'import' in self.fail_on:
            raise RemoteError(f"{self.vendor} events.import", "backend error")
        stored = copy.deepcopy(event)
        stored.id = f"{self.vendor}-imported-{next(self._ids)}"
        self.imported.append(copy.deepcopy(event))
        self.events.append(stored)
        return stored


@pytest.fixture
def source_vendor():
    return Vendor('source', Side.SOURCE)


@pytest.fixture
def destination_vendor():
    return Vendor('destination', Side.DESTINATION)


@pytest.fixture
def options():
    return SyncOptions()


@pytest.fixture
def state_store(tmp_path):
    return StateStore(tmp_path / 'event_checksums.json')
