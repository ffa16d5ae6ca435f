from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class UserProperties:
    """Per-user string key-value store persisted as a JSON file.

    Every write replaces the whole file atomically. A write over an
    unreadable file starts from an empty store.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def get_properties(self) -> Dict[str, str]:
        """Raises ValueError (json.JSONDecodeError included) for a corrupt file."""
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Properties file {self.path} does not contain a JSON object")
        return {str(k): str(v) for k, v in data.items()}

    def get_property(self, key: str) -> Optional[str]:
        return self.get_properties().get(key)

    def set_property(self, key: str, value: str) -> None:
        props = self._properties_for_update()
        props[key] = value
        self._write(props)

    def delete_property(self, key: str) -> None:
        try:
            props = self.get_properties()
        except ValueError as exc:
            logger.warning("Discarding unreadable properties file %s: %s", self.path, exc)
            self._write({})
            return
        if props.pop(key, None) is not None:
            self._write(props)

    def _properties_for_update(self) -> Dict[str, str]:
        try:
            return self.get_properties()
        except ValueError as exc:
            logger.warning("Overwriting unreadable properties file %s: %s", self.path, exc)
            return {}

    def _write(self, props: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".properties-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(props, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
