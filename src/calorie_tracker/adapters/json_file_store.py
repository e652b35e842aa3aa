"""Filesystem-backed key-value store."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from calorie_tracker.services.store import Store

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileStore(Store):
    """Store each key as a JSON document inside a data directory."""

    directory: Path
    prefix: str = "calorietracker"

    def load(self, key: str) -> object | None:
        """Read a key, returning None when it is missing or unparsable."""
        path = self._path(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError:
            _logger.warning("Unable to read stored key %s", key, exc_info=True)
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            _logger.warning("Ignoring unparsable stored key %s", key)
            return None

    def save(self, key: str, value: object) -> None:
        """Write a key atomically."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(value, handle)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _path(self, key: str) -> Path:
        return self.directory / f"{self.prefix}-{key}.json"
