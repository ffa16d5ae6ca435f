from .properties import UserProperties
from .store import (
    SETTINGS_KEY,
    InvalidMaxTokensError,
    InvalidTemperatureError,
    MalformedSettingsError,
    MissingModelError,
    MissingUrlError,
    Settings,
    SettingsError,
    SettingsStore,
    SettingsValidationError,
)

__all__ = [
    "SETTINGS_KEY",
    "InvalidMaxTokensError",
    "InvalidTemperatureError",
    "MalformedSettingsError",
    "MissingModelError",
    "MissingUrlError",
    "Settings",
    "SettingsError",
    "SettingsStore",
    "SettingsValidationError",
    "UserProperties",
]
