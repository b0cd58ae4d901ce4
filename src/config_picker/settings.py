"""Runtime settings for config-picker.

Environment variables:
- CONFIG_PICKER_ROOT: Storage root (default: ~/.config-picker)
- CONFIG_PICKER_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
- CONFIG_PICKER_LOG_FILE: Log file path (default: no log file)

Extra template variables can be declared in <root>/settings.yaml:

    variables:
      DOTFILES: /home/me/src/dotfiles
"""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .utils.logging_config import parse_log_level

logger = logging.getLogger(__name__)

DEFAULT_ROOT_DIR_NAME = ".config-picker"
SETTINGS_FILENAME = "settings.yaml"


class SettingsError(Exception):
    """Raised when the settings file is unreadable or malformed."""

    def __init__(self, path: Path, message: str):
        self.path = path
        self.message = message
        super().__init__(f'invalid settings file "{path}": {message}')


def default_root_dir() -> Path:
    return Path.home() / DEFAULT_ROOT_DIR_NAME


@dataclass
class PickerSettings:
    """Validated runtime settings."""
    root_dir: Path = field(default_factory=default_root_dir)
    log_level: int = logging.WARNING
    log_file: Optional[Path] = None
    variables: dict[str, str] = field(default_factory=dict)

    @property
    def settings_file(self) -> Path:
        return self.root_dir / SETTINGS_FILENAME

    @classmethod
    def from_env(cls) -> "PickerSettings":
        """Load settings from environment variables."""
        root = os.environ.get("CONFIG_PICKER_ROOT")
        log_file = os.environ.get("CONFIG_PICKER_LOG_FILE")
        return cls(
            root_dir=Path(root).expanduser() if root else default_root_dir(),
            log_level=parse_log_level(os.environ.get("CONFIG_PICKER_LOG_LEVEL")),
            log_file=Path(log_file).expanduser() if log_file else None,
        )


def load_variables(path: Path) -> dict[str, str]:
    """
    Load the `variables` mapping from a YAML settings file.

    A missing file yields no variables.

    Raises:
        SettingsError: If the file is unreadable, not YAML, or
            `variables` is not a mapping of strings to strings
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No settings file at {path}")
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SettingsError(path, f"could not read file: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(path, f"not valid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(path, "top level must be a mapping")

    variables = data.get("variables") or {}
    if not isinstance(variables, dict):
        raise SettingsError(path, "'variables' must be a mapping")

    for name, value in variables.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise SettingsError(
                path, f"variable {name!r} must map a string name to a string value"
            )

    logger.debug(f"Loaded {len(variables)} variable(s) from {path}")
    return dict(variables)
