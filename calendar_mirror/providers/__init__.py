"""Calendar clients for Calendar Mirror."""

from .base import CalendarClient, CalendarEvent
from .google_cal import GoogleCalendarClient, parse_google_event, event_to_google

__all__ = [
    'CalendarClient', 'CalendarEvent',
    'GoogleCalendarClient', 'parse_google_event', 'event_to_google',
]
