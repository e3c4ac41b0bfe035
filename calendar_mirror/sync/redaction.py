"""Privacy redaction and provenance tagging applied before import."""

from __future__ import annotations

from ..config import SyncOptions, Vendor
from ..providers.base import CalendarEvent

PLACEHOLDER = "Redacted"


def disabled_reminders() -> dict:
    """No overrides and the calendar default explicitly switched off."""
    return {'useDefault': False, 'overrides': []}


class Redactor:
    """Applies the configured redactions for one source -> destination pass."""

    def __init__(self, options: SyncOptions, source: Vendor, destination_address: str):
        self.options = options
        self.source = source
        # Resolved once per pass from the destination's primary calendar.
        self.destination_address = destination_address

    def apply(self, event: CalendarEvent) -> CalendarEvent:
        """Rewrite `event` in place and return it."""
        opts = self.options

        # Redact before tagging so the tag itself survives.
        if opts.redacted_summary:
            event.summary = PLACEHOLDER
        event.summary = f"{self.source.tag}{event.summary}"

        if opts.redacted_description:
            event.description = PLACEHOLDER

        if opts.disable_reminders:
            event.reminders = disabled_reminders()

        if opts.redacted_location:
            event.location = PLACEHOLDER

        if opts.redacted_attendees:
            event.attendees = []

        if opts.redacted_attachments:
            event.attachments = []

        # The destination account becomes the organizer on import.
        event.organizer = {}

        event.color_id = opts.color_id

        if opts.redacted_organizer:
            event.organizer = {
                'displayName': self.source.label,
                'email': self.destination_address,
            }

        return event
