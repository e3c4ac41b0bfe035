"""Core sync engine — mirrors upcoming events between two vendor calendars."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from ..config import Side, SyncOptions, Vendor
from ..providers.base import CalendarClient, CalendarEvent
from .changes import ChangeDetector, ChangeKind
from .guard import LoopGuard
from .recurrence import RecurrenceResolver
from .redaction import Redactor
from .state import StateStore


class SyncDirection(Enum):
    ONE_WAY = "one_way"       # Source → Destination
    TWO_WAY = "two_way"       # Source ↔ Destination


@dataclass
class SyncChange:
    """Record of a single imported event."""
    event_id: str
    event_summary: str
    source_name: str
    target_name: str
    kind: ChangeKind = ChangeKind.NEW
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class SyncResult:
    """Result of a sync run."""
    imported: int = 0
    new: int = 0
    changed: int = 0
    unchanged: int = 0
    guarded: int = 0
    collapsed: int = 0
    dropped: int = 0
    changes: list[SyncChange] = field(default_factory=list)

    def summary(self) -> str:
        parts = []
        if self.imported:
            parts.append(f"{self.imported} imported")
        if self.new:
            parts.append(f"{self.new} new")
        if self.changed:
            parts.append(f"{self.changed} changed")
        if self.unchanged:
            parts.append(f"{self.unchanged} unchanged")
        if self.guarded:
            parts.append(f"{self.guarded} already mirrored")
        if self.collapsed:
            parts.append(f"{self.collapsed} recurring instances collapsed")
        if self.dropped:
            parts.append(f"{self.dropped} recurring instances dropped")
        return ", ".join(parts) if parts else "No changes"


class SyncEngine:
    """Runs one sync pass per direction over a shared fingerprint map."""

    def __init__(
        self,
        source: Vendor,
        destination: Vendor,
        clients: dict[Side, CalendarClient],
        options: SyncOptions,
        state_store: StateStore,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if source.side is not Side.SOURCE or destination.side is not Side.DESTINATION:
            raise ValueError("source and destination vendors are swapped")
        missing = [side.value for side in Side if side not in clients]
        if missing:
            raise ValueError(f"No calendar client for: {', '.join(missing)}")

        self.vendors = {Side.SOURCE: source, Side.DESTINATION: destination}
        self.clients = clients
        self.options = options
        self.state_store = state_store
        self.direction = SyncDirection.TWO_WAY if options.two_way_sync else SyncDirection.ONE_WAY
        self._log = logger or logging.getLogger("calendar_mirror.sync")
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def run(self) -> SyncResult:
        """
        Execute one run. Returns SyncResult.

        Any RemoteError aborts the run before the state map is saved.
        """
        result = SyncResult()
        checksums = self.state_store.load()
        detector = ChangeDetector(
            checksums,
            refresh_changed=self.options.refresh_changed_fingerprints,
            logger=self._log,
        )

        sides = [Side.SOURCE]
        if self.direction == SyncDirection.TWO_WAY:
            sides.append(Side.DESTINATION)

        pending = {side: self._collect(side, detector, result) for side in sides}

        for side in sides:
            self._import(side, pending[side], result)

        result.new = detector.counts[ChangeKind.NEW]
        result.changed = detector.counts[ChangeKind.CHANGED]
        result.unchanged = detector.counts[ChangeKind.UNCHANGED]

        self.state_store.save(checksums)
        self._log.info("Sync complete: %s", result.summary())
        return result

    def _other(self, side: Side) -> Side:
        return Side.DESTINATION if side is Side.SOURCE else Side.SOURCE

    def _collect(
        self,
        side: Side,
        detector: ChangeDetector,
        result: SyncResult,
    ) -> list[tuple[CalendarEvent, ChangeKind]]:
        """Fetch and filter one vendor's events into its import buffer."""
        vendor = self.vendors[side]
        client = self.clients[side]

        self._log.info("Getting events for %s", vendor)
        events = client.list_upcoming_events(self._clock(), self.options.max_results)
        if not events:
            self._log.info("No upcoming events found for %s", vendor)
            return []

        guard = LoopGuard(vendor, self.vendors[self._other(side)], logger=self._log)
        resolver = RecurrenceResolver(client, logger=self._log)

        candidates = guard.filter(events)
        candidates = resolver.resolve(candidates)
        # Masters can carry a tag their instances did not show.
        candidates = guard.filter(candidates)

        result.guarded += guard.excluded
        result.collapsed += resolver.collapsed
        result.dropped += resolver.dropped

        return detector.select(candidates)

    def _import(
        self,
        side: Side,
        buffer: list[tuple[CalendarEvent, ChangeKind]],
        result: SyncResult,
    ):
        source = self.vendors[side]
        destination = self.vendors[self._other(side)]

        if not buffer:
            self._log.info("No events to import from %s to %s", source, destination)
            return

        self._log.info("[%s] => [%s] Importing %d events", source, destination, len(buffer))
        target = self.clients[self._other(side)]
        redactor = Redactor(self.options, source, target.get_primary_address())

        for event, kind in buffer:
            redactor.apply(event)
            target.import_event(event)
            result.imported += 1
            result.changes.append(SyncChange(
                event_id=event.id,
                event_summary=event.summary,
                source_name=source.label,
                target_name=destination.label,
                kind=kind,
            ))
