"""
Key-value persistence for the SkateTrack dashboard.

Only branding preferences survive a restart. They are stored as string
key-value pairs, either in memory or in a JSON document on disk.
"""
import json
import logging
import os
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Port for reading and writing string preferences."""

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value or None."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value."""
        ...


class InMemoryKeyValueStore:
    """Store that lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore:
    """
    Store backed by a JSON object in a file.

    The whole document is rewritten on every change.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path

    def _load(self) -> Dict[str, str]:
        """
        Read the JSON document.

        Returns:
            Stored pairs, or an empty dict when the file does not exist

        Raises:
            json.JSONDecodeError: If the file contains invalid JSON
            ValueError: If the document is not a JSON object
        """
        if not os.path.exists(self.file_path):
            return {}

        with open(self.file_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Preferences file must hold a JSON object: {self.file_path}")
        return {str(k): str(v) for k, v in data.items()}

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value

        # Ensure directory exists
        directory = os.path.dirname(self.file_path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(self.file_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.debug("Saved preference %s to %s", key, self.file_path)
