"""Persisted event id -> fingerprint map carried between runs."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..errors import StateError


class StateStore:
    """JSON file holding the fingerprint of every event seen so far."""

    def __init__(self, path: str | Path, logger: Optional[logging.Logger] = None):
        self.path = Path(path)
        self._log = logger or logging.getLogger(__name__)

    def load(self) -> dict[str, str]:
        """Return the stored map. A missing or unreadable file yields an empty map."""
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except FileNotFoundError:
            self._log.debug("No checksum file at %s, starting fresh", self.path)
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            self._log.debug("Unable to read checksum file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            self._log.debug("Checksum file %s does not hold a map, ignoring it", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items() if isinstance(v, str)}

    def save(self, checksums: dict[str, str]):
        """Write the map atomically (temp file + rename in the same directory)."""
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix='.tmp', dir=directory,
            )
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(checksums, f, indent=2, sort_keys=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StateError(f"Unable to write checksum file {self.path}: {e}") from e
        self._log.info("Stored %d event checksums in %s", len(checksums), self.path)
