"""
Persisted "reader active" flag for inky-reader.

The flag survives page loads so reader mode can be re-entered after
navigation. Storage failures are logged and never interrupt reading.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

import yaml

logger = logging.getLogger(__name__)

READER_ACTIVE_KEY = 'readerActive'


class StateStore(ABC):
    """Boolean persisted state read/write."""

    @abstractmethod
    def get_reader_active(self) -> bool:
        """Return whether reader mode was last left active."""

    @abstractmethod
    def set_reader_active(self, active: bool) -> None:
        """Record whether reader mode is active."""


class MemoryStateStore(StateStore):
    """Keeps the flag in memory for the lifetime of the process."""

    def __init__(self, reader_active: bool = False):
        self.reader_active = reader_active

    def get_reader_active(self) -> bool:
        return self.reader_active

    def set_reader_active(self, active: bool) -> None:
        self.reader_active = bool(active)


class FileStateStore(StateStore):
    """
    Keeps the flag in a small YAML file.

    Other keys already in the file are preserved on write.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store.

        Args:
            path: YAML file holding the state (created on first write)
        """
        self.path = Path(path).expanduser()

    def _load(self) -> dict:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            return {}
        except (OSError, yaml.YAMLError) as e:
            logger.error("Error reading reader state from %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get_reader_active(self) -> bool:
        return self._load().get(READER_ACTIVE_KEY) is True

    def set_reader_active(self, active: bool) -> None:
        data = self._load()
        data[READER_ACTIVE_KEY] = bool(active)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False)
        except OSError as e:
            logger.error("Error saving reader state to %s: %s", self.path, e)
