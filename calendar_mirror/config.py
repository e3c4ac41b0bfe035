"""Configuration loading for Calendar Mirror."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .errors import ConfigError

DEFAULT_CONFIG_FILE = 'config.json'
DEFAULT_STATE_FILE = 'event_checksums.json'
DEFAULT_CALLBACK_PORT = 5000
MAX_PORT = 65535
DEFAULT_MAX_RESULTS = 10


class EventColor(Enum):
    """Google Calendar event color ids."""
    LAVENDER = 1
    SAGE = 2
    GRAPE = 3
    FLAMINGO = 4
    BANANA = 5
    TANGERINE = 6
    PEACOCK = 7
    GRAPHITE = 8
    BLUEBERRY = 9
    BASIL = 10
    TOMATO = 11


def resolve_color(value: Any) -> str:
    """Turn a color name or id into a Google color id string ('' = unset)."""
    if value is None or value == '':
        return ''
    if isinstance(value, bool):
        raise ConfigError(f"Invalid eventColor: {value!r}")
    text = str(value).strip()
    if text.isdigit():
        number = int(text)
        if number not in {c.value for c in EventColor}:
            raise ConfigError(f"Invalid eventColor id: {text}")
        return str(number)
    try:
        return str(EventColor[text.upper()].value)
    except KeyError:
        names = ', '.join(c.name.title() for c in EventColor)
        raise ConfigError(f"Unknown eventColor {text!r}, expected one of: {names}") from None


class Side(Enum):
    SOURCE = "source"
    DESTINATION = "destination"


@dataclass(frozen=True)
class Vendor:
    """One of the two calendar accounts taking part in a run."""
    label: str
    side: Side
    credentials_file: str = ""

    @property
    def tag(self) -> str:
        """Provenance prefix put on summaries of events copied from this vendor."""
        return f"[{self.label}] "

    def __str__(self):
        return self.label


@dataclass
class SyncOptions:
    two_way_sync: bool = False
    redacted_summary: bool = False
    redacted_description: bool = False
    redacted_location: bool = False
    redacted_attendees: bool = False
    redacted_organizer: bool = False
    redacted_attachments: bool = False
    disable_reminders: bool = False
    color_id: str = ""
    refresh_changed_fingerprints: bool = False
    max_results: int = DEFAULT_MAX_RESULTS


@dataclass
class Config:
    source: str
    source_credentials_file: str
    destination: str
    destination_credentials_file: str
    callback_server_port: int = DEFAULT_CALLBACK_PORT
    state_file: str = DEFAULT_STATE_FILE
    sync_options: SyncOptions = field(default_factory=SyncOptions)

    def vendors(self) -> tuple[Vendor, Vendor]:
        return (
            Vendor(self.source, Side.SOURCE, self.source_credentials_file),
            Vendor(self.destination, Side.DESTINATION, self.destination_credentials_file),
        )


# JSON key -> SyncOptions attribute
_BOOL_OPTIONS = {
    'twoWaySync': 'two_way_sync',
    'redactedSummary': 'redacted_summary',
    'redactedDescription': 'redacted_description',
    'redactedLocation': 'redacted_location',
    'redactedAttendees': 'redacted_attendees',
    'redactedOrganizer': 'redacted_organizer',
    'redactedAttachments': 'redacted_attachments',
    'redactedAtachments': 'redacted_attachments',  # spelling used by older config files
    'disableReminders': 'disable_reminders',
    'refreshChangedFingerprints': 'refresh_changed_fingerprints',
}


def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> Config:
    """Read and validate the JSON configuration file."""
    config_file = Path(path)
    try:
        data = json.loads(config_file.read_text(encoding='utf-8'))
    except OSError as e:
        raise ConfigError(f"Unable to load configuration {config_file}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_file}: {e}") from e
    return parse_config(data)


def parse_config(data: Any) -> Config:
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    values = {}
    for key in ('source', 'sourceCredentialsFile', 'destination', 'destinationCredentialsFile'):
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Missing required configuration key: {key}")
        values[key] = value.strip()

    if values['source'] == values['destination']:
        raise ConfigError("source and destination must be different vendors")

    port = _positive_int(data.get('callbackServerPort', DEFAULT_CALLBACK_PORT), 'callbackServerPort')
    if port > MAX_PORT:
        raise ConfigError(f"callbackServerPort must be at most {MAX_PORT}")
    state_file = data.get('stateFile') or DEFAULT_STATE_FILE
    if not isinstance(state_file, str):
        raise ConfigError("stateFile must be a string")

    return Config(
        source=values['source'],
        source_credentials_file=values['sourceCredentialsFile'],
        destination=values['destination'],
        destination_credentials_file=values['destinationCredentialsFile'],
        callback_server_port=port,
        state_file=state_file,
        sync_options=_parse_sync_options(data.get('syncOptions') or {}),
    )


def _parse_sync_options(raw: Any) -> SyncOptions:
    if not isinstance(raw, dict):
        raise ConfigError("syncOptions must be a JSON object")

    options = SyncOptions()
    for key, attr in _BOOL_OPTIONS.items():
        if key not in raw:
            continue
        value = raw[key]
        if not isinstance(value, bool):
            raise ConfigError(f"syncOptions.{key} must be true or false")
        if value or not getattr(options, attr):
            setattr(options, attr, value)

    options.color_id = resolve_color(raw.get('eventColor'))
    options.max_results = _positive_int(raw.get('maxResults', DEFAULT_MAX_RESULTS), 'syncOptions.maxResults')
    return options


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{name} must be a positive integer")
    return value
