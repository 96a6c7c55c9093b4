"""
Preference store - persists the raw calendar inputs between sessions.

Holds two string entries (birth date and expected lifespan). Storage
failures are logged and swallowed: they must never block computing stats
or rendering the grid.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..domain.errors import PreferenceStoreUnavailable

logger = logging.getLogger(__name__)

BIRTH_DATE_KEY = "life-calendar-dob"
LIFESPAN_KEY = "life-calendar-lifespan"


class InMemoryPreferenceStore:
    """Dict-backed store for tests and embedding."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonPreferenceStore:
    """Stores preferences as a single JSON object in a file"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, str]:
        try:
            if not self.path.exists():
                return {}
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers both JSONDecodeError and UnicodeDecodeError
            raise PreferenceStoreUnavailable(str(self.path), str(e)) from e

        if not isinstance(data, dict):
            raise PreferenceStoreUnavailable(
                str(self.path), f"expected a JSON object, got {type(data).__name__}"
            )
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            tmp_path.replace(self.path)
        except OSError as e:
            raise PreferenceStoreUnavailable(str(self.path), str(e)) from e

    def get(self, key: str) -> Optional[str]:
        try:
            return self._read().get(key)
        except PreferenceStoreUnavailable as e:
            logger.warning(f"Failed to read preferences: {e}")
            return None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
            data[key] = value
            self._write(data)
        except PreferenceStoreUnavailable as e:
            logger.warning(f"Failed to save preference {key}: {e}")

    def remove(self, key: str) -> None:
        try:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)
        except PreferenceStoreUnavailable as e:
            logger.warning(f"Failed to remove preference {key}: {e}")
