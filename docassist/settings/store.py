"""User settings for completion requests.

Settings are stored as one JSON blob under a fixed property key. The blob is
parsed into a typed record on load; value ranges are only checked on save.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict

from .properties import UserProperties

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"
MIN_MAX_TOKENS = 150

# record field -> JSON key
_WIRE_KEYS = {
    "base_url": "baseUrl",
    "model": "model",
    "temperature": "temperature",
    "max_tokens": "maxTokens",
}


class SettingsError(Exception):
    pass


class MalformedSettingsError(SettingsError):
    """Stored blob does not have the settings shape."""


class SettingsValidationError(SettingsError):
    """Settings rejected on save."""


class MissingUrlError(SettingsValidationError):
    def __init__(self) -> None:
        super().__init__("API URL is required")


class MissingModelError(SettingsValidationError):
    def __init__(self) -> None:
        super().__init__("Model is required")


class InvalidTemperatureError(SettingsValidationError):
    def __init__(self) -> None:
        super().__init__("Temperature must be between 0 and 1")


class InvalidMaxTokensError(SettingsValidationError):
    def __init__(self) -> None:
        super().__init__(f"Max tokens must be at least {MIN_MAX_TOKENS}")


@dataclass(frozen=True)
class Settings:
    base_url: str = "https://api.openai.com/v1/chat/completions"
    model: str = "gpt-3.5-turbo"
    temperature: float = 0.7
    max_tokens: int = 150

    def validate(self) -> None:
        """Raise the first validation error found, in field order."""
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise MissingUrlError()
        if not isinstance(self.model, str) or not self.model.strip():
            raise MissingModelError()
        if not _is_number(self.temperature) or not (0 <= self.temperature <= 1):
            raise InvalidTemperatureError()
        if not _is_number(self.max_tokens) or not float(self.max_tokens).is_integer() or self.max_tokens < MIN_MAX_TOKENS:
            raise InvalidMaxTokensError()

    def to_json(self) -> str:
        return json.dumps({_WIRE_KEYS[k]: v for k, v in asdict(self).items()})

    @classmethod
    def from_json(cls, blob: str) -> "Settings":
        """Parse a stored blob. Missing keys take defaults; unknown keys and
        wrongly typed values raise MalformedSettingsError."""
        try:
            data = json.loads(blob)
        except json.JSONDecodeError as exc:
            raise MalformedSettingsError(f"Stored settings are not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise MalformedSettingsError("Stored settings must be a JSON object")

        known = {wire: field for field, wire in _WIRE_KEYS.items()}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise MalformedSettingsError(f"Unknown settings keys: {', '.join(unknown)}")

        values: Dict[str, Any] = {}
        for wire, value in data.items():
            values[known[wire]] = _coerce(known[wire], value)
        return cls(**values)


def _is_number(value: Any) -> bool:
    # bool is an int subclass; reject it explicitly
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _coerce(field: str, value: Any) -> Any:
    if field in ("base_url", "model"):
        if not isinstance(value, str):
            raise MalformedSettingsError(f"'{_WIRE_KEYS[field]}' must be a string")
        return value
    if not _is_number(value):
        raise MalformedSettingsError(f"'{_WIRE_KEYS[field]}' must be a number")
    if field == "max_tokens":
        if isinstance(value, float):
            if not value.is_integer():
                raise MalformedSettingsError("'maxTokens' must be an integer")
            value = int(value)
        return value
    return float(value)


class SettingsStore:
    def __init__(self, properties: UserProperties) -> None:
        self.properties = properties

    def load(self) -> Settings:
        try:
            blob = self.properties.get_property(SETTINGS_KEY)
        except ValueError as exc:
            raise MalformedSettingsError(f"Settings storage is unreadable: {exc}") from exc
        if not blob:
            return Settings()
        return Settings.from_json(blob)

    def save(self, settings: Settings) -> None:
        settings.validate()
        self.properties.set_property(SETTINGS_KEY, settings.to_json())
        logger.info("Saved settings: model=%s base_url=%s", settings.model, settings.base_url)

    def reset(self) -> None:
        self.properties.delete_property(SETTINGS_KEY)
