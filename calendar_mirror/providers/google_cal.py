"""Google Calendar client over the discovery-built v3 service."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from google.auth.exceptions import TransportError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..auth import get_credentials
from ..errors import RemoteError
from .base import CalendarClient, CalendarEvent

# Keys modeled on CalendarEvent; everything else rides along in `raw`.
_MODELED_KEYS = (
    'id', 'recurringEventId', 'summary', 'description', 'location', 'start', 'end',
    'attendees', 'attachments', 'organizer', 'reminders', 'colorId',
)


def parse_google_event(item: dict) -> CalendarEvent:
    """Build a CalendarEvent from an events resource dict."""
    return CalendarEvent(
        id=item.get('id', ''),
        recurring_event_id=item.get('recurringEventId', ''),
        summary=item.get('summary', ''),
        description=item.get('description', ''),
        location=item.get('location', ''),
        start=dict(item.get('start') or {}),
        end=dict(item.get('end') or {}),
        attendees=list(item.get('attendees') or []),
        attachments=list(item.get('attachments') or []),
        organizer=dict(item.get('organizer') or {}),
        reminders=item.get('reminders'),
        color_id=item.get('colorId', ''),
        raw=copy.deepcopy(item),
    )


def event_to_google(event: CalendarEvent) -> dict:
    """Events resource body for import: the raw payload with modeled fields overlaid."""
    body = {k: v for k, v in copy.deepcopy(event.raw).items() if k not in _MODELED_KEYS}
    if event.id:
        body['id'] = event.id
    if event.recurring_event_id:
        body['recurringEventId'] = event.recurring_event_id
    body['summary'] = event.summary
    body['description'] = event.description
    body['location'] = event.location
    if event.start:
        body['start'] = dict(event.start)
    if event.end:
        body['end'] = dict(event.end)
    body['attendees'] = [dict(a) for a in event.attendees]
    body['attachments'] = [dict(a) for a in event.attachments]
    body['organizer'] = dict(event.organizer)
    if event.reminders is not None:
        body['reminders'] = copy.deepcopy(event.reminders)
    if event.color_id:
        body['colorId'] = event.color_id
    return body


def _rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


class GoogleCalendarClient(CalendarClient):
    """Google Calendar API client for one vendor account."""

    def __init__(self, vendor: str, service: Any, calendar_id: str = 'primary'):
        super().__init__(vendor, calendar_id)
        self._service = service

    @classmethod
    def connect(cls, vendor: str, credentials_file: str, port: int,
                token_dir: str = '.') -> GoogleCalendarClient:
        """Authorize (interactively if needed) and build the v3 service."""
        creds = get_credentials(vendor, credentials_file, port, token_dir=token_dir)
        service = build('calendar', 'v3', credentials=creds, cache_discovery=False)
        return cls(vendor, service)

    def list_upcoming_events(self, time_min: datetime, max_results: int) -> list[CalendarEvent]:
        result = self._execute('events.list', lambda: self._service.events().list(
            calendarId=self.calendar_id,
            timeMin=_rfc3339(time_min),
            maxResults=max_results,
            singleEvents=True,
            orderBy='startTime',
            showDeleted=False,
        ).execute())
        return [parse_google_event(item) for item in result.get('items', [])]

    def get_event(self, event_id: str) -> Optional[CalendarEvent]:
        try:
            item = self._service.events().get(
                calendarId=self.calendar_id,
                eventId=event_id,
            ).execute()
        except HttpError as e:
            if e.resp.status in (404, 410):
                return None
            raise self._remote_error('events.get', e) from e
        except (TransportError, OSError) as e:
            raise self._remote_error('events.get', e) from e
        if not item:
            return None
        return parse_google_event(item)

    def get_primary_address(self) -> str:
        calendar = self._execute('calendars.get', lambda: self._service.calendars().get(
            calendarId=self.calendar_id,
        ).execute())
        return calendar.get('id', '')

    def import_event(self, event: CalendarEvent) -> CalendarEvent:
        stored = self._execute('events.import', lambda: self._service.events().import_(
            calendarId=self.calendar_id,
            body=event_to_google(event),
        ).execute())
        return parse_google_event(stored or {})

    def _execute(self, operation: str, call: Callable[[], Any]) -> Any:
        try:
            return call()
        except (HttpError, TransportError, OSError) as e:
            raise self._remote_error(operation, e) from e

    def _remote_error(self, operation: str, error: Exception) -> RemoteError:
        return RemoteError(f"{self.vendor} {operation}", str(error))
