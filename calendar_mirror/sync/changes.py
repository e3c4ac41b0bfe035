"""Change detection by content fingerprint."""

from __future__ import annotations

import hashlib
import json
import logging
from enum import Enum
from typing import Optional

from ..providers.base import CalendarEvent


def compute_fingerprint(event: CalendarEvent) -> str:
    """
    SHA-256 over summary, start, end, location and description.

    Attendees, organizer, color and the other fields are not part of the
    fingerprint, so changing only those does not count as a change.
    """
    fields = [
        event.summary or "",
        event.start_time,
        event.end_time,
        event.location or "",
        event.description or "",
    ]
    raw = json.dumps(fields, ensure_ascii=False).encode('utf-8')
    return hashlib.sha256(raw).hexdigest()


class ChangeKind(Enum):
    NEW = "new"
    UNCHANGED = "unchanged"
    CHANGED = "changed"


class ChangeDetector:
    """Classifies candidate events against the persisted fingerprint map."""

    def __init__(
        self,
        checksums: dict[str, str],
        refresh_changed: bool = False,
        logger: Optional[logging.Logger] = None,
    ):
        self.checksums = checksums
        # Off by default: a changed event keeps its old fingerprint and is
        # offered for import again on every later run.
        self.refresh_changed = refresh_changed
        self._log = logger or logging.getLogger(__name__)
        self.counts = {kind: 0 for kind in ChangeKind}

    def classify(self, event: CalendarEvent) -> ChangeKind:
        fingerprint = compute_fingerprint(event)
        stored = self.checksums.get(event.id)

        if stored is None:
            self.checksums[event.id] = fingerprint
            kind = ChangeKind.NEW
            self._log.info("Event %s is new, adding it", event.id)
        elif stored == fingerprint:
            kind = ChangeKind.UNCHANGED
            self._log.info("Event %s is the same, won't be imported", event.id)
        else:
            kind = ChangeKind.CHANGED
            if self.refresh_changed:
                self.checksums[event.id] = fingerprint
            self._log.info("Event %s has changed, importing it again", event.id)

        self.counts[kind] += 1
        return kind

    def select(self, candidates: list[CalendarEvent]) -> list[tuple[CalendarEvent, ChangeKind]]:
        """Events to import (new or changed) with their kind, in candidate order."""
        selected = []
        for event in candidates:
            kind = self.classify(event)
            if kind is not ChangeKind.UNCHANGED:
                selected.append((event, kind))
        return selected
