from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
CREDENTIALS_PATH = os.path.join(PROJECT_ROOT, "config", "credentials.json")

API_KEY_ENV = "DOCASSIST_API_KEY"
CONFIG_DIR_ENV = "DOCASSIST_CONFIG_DIR"


@dataclass(frozen=True)
class Credentials:
    """Process-wide secret used to authenticate completion requests."""

    api_key: Optional[str] = None


def get_user_config_dir() -> str:
    """Return the per-user configuration directory (cross-platform).

    Doxygen:
    - @return: `$DOCASSIST_CONFIG_DIR` if set, else the platform config dir
      (APPDATA, Application Support, XDG_CONFIG_HOME or ~/.config) + "docassist".
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return override

    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA", os.path.expanduser("~"))
        return os.path.join(base, "docassist")
    if sys.platform == "darwin":
        return os.path.join(os.path.expanduser("~"), "Library", "Application Support", "docassist")

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return os.path.join(xdg, "docassist")
    return os.path.join(os.path.expanduser("~"), ".config", "docassist")


def get_user_properties_path() -> str:
    """Path of the per-user properties file holding the settings blob."""
    return os.path.join(get_user_config_dir(), "properties.json")


def load_credentials(path: str = CREDENTIALS_PATH) -> Credentials:
    """Load the API key from the environment or config/credentials.json.

    A missing key is not fatal: requests go out without a usable key and the
    remote API reports the authentication failure.

    Doxygen:
    - @param path: Absolute path to the JSON credentials file (`{"api_key": "..."}`).
    - @return: `Credentials`; `api_key` is None when no key was found.
    """
    env_key = os.environ.get(API_KEY_ENV, "").strip()
    if env_key:
        return Credentials(api_key=env_key)

    if not os.path.exists(path):
        logger.warning("No API key: set %s or create %s", API_KEY_ENV, path)
        return Credentials()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f) or {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not load credentials from %s: %s", path, exc)
        return Credentials()

    api_key = data.get("api_key") if isinstance(data, dict) else None
    if not api_key:
        logger.warning("Credentials file %s has no 'api_key'", path)
        return Credentials()
    return Credentials(api_key=str(api_key))
