"""Local persisted state backed by a single JSON document."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

STATE_KEY = "migration-store"
PROJECTS_KEY = "completed-projects"


class JsonFileStorage:
    """
    Key/value storage persisted to one JSON file.

    Every ``set`` rewrites the whole file. There is no locking or conflict
    detection: two processes sharing a file overwrite each other.
    """

    def __init__(self, path: str):
        """
        Initialize the storage.

        Args:
            path: Location of the JSON document; created on first write
        """
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Get a stored value by key."""
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store a value, overwriting whatever was under the key."""
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)
        logger.debug(f"Persisted {key} to {self.path}")

    def delete(self, key: str) -> None:
        """Remove a key if present."""
        data = self._read()
        if key in data:
            del data[key]
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)


class MemoryStorage:
    """In-process storage with the same interface, for tests and dry runs."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        # Values round-trip through JSON so callers never share references
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else default

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
