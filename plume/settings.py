"""User settings and logging configuration.

Settings are read from a JSON file in the OS-appropriate config directory.
Missing or malformed settings never stop the editor; defaults are used and a
warning is logged.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

APP_NAME = "plume"
SETTINGS_FILENAME = "settings.json"
ENV_PREFIX = "PLUME_"


@dataclass
class EditorSettings:
    """User-tunable editor settings."""

    quit_key: str = EditorConstants.QUIT_KEY
    save_key: str = EditorConstants.SAVE_KEY
    cancel_key: str = EditorConstants.CANCEL_KEY
    poll_interval: float = EditorConstants.POLL_INTERVAL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorSettings":
        """Build settings from a mapping, ignoring unknown or invalid entries."""
        settings = cls()
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name.endswith('_key'):
                if isinstance(value, str) and len(value) == 1 and value.isalpha():
                    setattr(settings, f.name, value.lower())
                else:
                    logger.warning(f"Invalid key binding for {f.name}: {value!r}, using default")
            elif f.name == 'poll_interval':
                if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
                    setattr(settings, f.name, float(value))
                else:
                    logger.warning(f"Invalid poll_interval {value!r}, using default")
        bindings = [settings.quit_key, settings.save_key, settings.cancel_key]
        if len(set(bindings)) != len(bindings):
            logger.warning(f"Conflicting key bindings {bindings}, using defaults")
            settings.quit_key = EditorConstants.QUIT_KEY
            settings.save_key = EditorConstants.SAVE_KEY
            settings.cancel_key = EditorConstants.CANCEL_KEY
        return settings


def get_settings_path() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME)) / SETTINGS_FILENAME


def load_settings(path: Optional[Path] = None) -> EditorSettings:
    """Load settings from disk.

    Args:
        path: Settings file; defaults to ``settings.json`` in the user config dir

    Returns:
        The loaded settings, or defaults if the file is absent or unreadable
    """
    settings_file = path or get_settings_path()
    if not settings_file.exists():
        return EditorSettings()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {settings_file}: {e}")
        return EditorSettings()

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return EditorSettings()

    return EditorSettings.from_dict(data)


def configure_logging(environ: Optional[Dict[str, str]] = None) -> None:
    """Route plume's log records to a file, or nowhere.

    The editor owns the terminal while it runs, so records are only written
    when ``PLUME_LOG_FILE`` names a file. ``PLUME_LOG_LEVEL`` sets the level.
    """
    env = os.environ if environ is None else environ
    root = logging.getLogger(APP_NAME)
    log_file = env.get(f"{ENV_PREFIX}LOG_FILE")
    if not log_file:
        root.addHandler(logging.NullHandler())
        return

    level_name = env.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
