"""Recognize events produced by an earlier sync pass."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import Vendor
from ..providers.base import CalendarEvent


class LoopGuard:
    """
    Excludes events mirrored into `scanned` from `other`.

    Mirrored events carry the other vendor's provenance tag at the start of
    their summary, so they must never be offered back as source material.
    """

    def __init__(self, scanned: Vendor, other: Vendor, logger: Optional[logging.Logger] = None):
        if scanned.side is other.side:
            raise ValueError("LoopGuard needs the two vendors of a run")
        self.scanned = scanned
        self.other = other
        self.prefix = other.tag
        self._log = logger or logging.getLogger(__name__)
        self.excluded = 0

    def is_mirrored(self, event: CalendarEvent) -> bool:
        return (event.summary or "").startswith(self.prefix)

    def filter(self, events: list[CalendarEvent]) -> list[CalendarEvent]:
        kept = []
        for event in events:
            if self.is_mirrored(event):
                self.excluded += 1
                self._log.debug("Skipping %s on %s, it was mirrored from %s",
                                event.id, self.scanned, self.other)
                continue
            kept.append(event)
        return kept
