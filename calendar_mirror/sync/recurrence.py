"""Collapse recurring-event instances into their master events."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import RemoteError
from ..providers.base import CalendarClient, CalendarEvent


class RecurrenceResolver:
    """
    Replaces each recurring instance in a listing with its master event.

    Every master is emitted at most once per resolve() call, at the position
    of the first instance that referenced it. Master lookups are best-effort:
    an instance whose master cannot be fetched is dropped.
    """

    def __init__(self, client: CalendarClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self._log = logger or logging.getLogger(__name__)
        self.collapsed = 0
        self.dropped = 0

    def resolve(self, events: list[CalendarEvent]) -> list[CalendarEvent]:
        resolved = []
        seen_masters: set[str] = set()
        masters: dict[str, CalendarEvent] = {}

        for event in events:
            if not event.is_recurring_instance:
                resolved.append(event)
                continue

            master_id = event.recurring_event_id
            master = masters.get(master_id)
            if master is None:
                # Failed lookups are retried by the next instance of the series.
                master = self._fetch_master(master_id)
                if master is not None:
                    masters[master_id] = master

            if master is None:
                self.dropped += 1
                continue
            if master.id in seen_masters:
                self.collapsed += 1
                continue
            seen_masters.add(master.id)
            resolved.append(master)

        return resolved

    def _fetch_master(self, master_id: str) -> Optional[CalendarEvent]:
        try:
            master = self.client.get_event(master_id)
        except RemoteError as e:
            self._log.debug("Dropping an instance of %s, master lookup failed: %s", master_id, e)
            return None
        if master is None:
            self._log.debug("Dropping an instance of %s, master event not found", master_id)
        return master
