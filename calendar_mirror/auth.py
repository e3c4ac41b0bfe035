"""OAuth2 authorization for Google Calendar accounts."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from .errors import AuthError, ConfigError

SCOPES = ['https://www.googleapis.com/auth/calendar']

logger = logging.getLogger(__name__)


def token_path(vendor: str, token_dir: str = '.') -> Path:
    """Token cache file for a vendor: `<vendor>-token.json`."""
    return Path(token_dir) / f"{vendor}-token.json"


def get_credentials(vendor: str, credentials_file: str, port: int,
                    token_dir: str = '.') -> Credentials:
    """
    Return valid credentials for a vendor account.

    Uses the cached token when possible, refreshes it when expired, and
    otherwise runs the installed-app flow: a local listener on `port` waits
    for exactly one redirect from the browser consent screen.
    """
    token_file = token_path(vendor, token_dir)

    creds = None
    if token_file.exists():
        try:
            creds = Credentials.from_authorized_user_file(str(token_file), SCOPES)
        except (ValueError, OSError) as e:
            logger.debug("Ignoring unreadable token cache %s: %s", token_file, e)

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        try:
            creds.refresh(Request())
        except RefreshError as e:
            logger.info("Token for %s could not be refreshed, re-authorizing: %s", vendor, e)
            creds = None
        except TransportError as e:
            raise AuthError(f"Unable to refresh token for {vendor}: {e}") from e
    else:
        creds = None

    if creds is None:
        creds = _authorize_in_browser(vendor, credentials_file, port)

    _save_token(token_file, creds)
    return creds


def _authorize_in_browser(vendor: str, credentials_file: str, port: int) -> Credentials:
    if not credentials_file or not os.path.exists(credentials_file):
        raise ConfigError(f"Unable to read client secret file: {credentials_file!r}")

    try:
        flow = InstalledAppFlow.from_client_secrets_file(credentials_file, SCOPES)
    except ValueError as e:
        raise ConfigError(f"Unable to parse client secret file {credentials_file!r}: {e}") from e

    logger.info("A browser window will open to authorize this application to access your %s account.", vendor)
    try:
        return flow.run_local_server(
            port=port,
            access_type='offline',
            success_message="You can close this window now.",
        )
    except Exception as e:
        raise AuthError(f"Authorization for {vendor} failed: {e}") from e


def _save_token(token_file: Path, creds: Credentials):
    logger.info("Saving credential file to: %s", token_file)
    try:
        fd = os.open(token_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(creds.to_json())
    except OSError as e:
        raise AuthError(f"Unable to cache oauth token: {e}") from e
