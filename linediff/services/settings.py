"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from linediff.core.diff.text_diff import TextCompareOptions
from linediff.core.models import DiffViewMode


@dataclass
class DiffSettings:
    """Settings for line comparison and display."""
    similarity_threshold: float = 0.5
    min_unchanged_lines: int = 3
    enable_collapsing: bool = True
    show_line_numbers: bool = True
    view_mode: DiffViewMode = DiffViewMode.DIFF
    encoding: Optional[str] = None  # None = auto-detect

    def to_options(self) -> TextCompareOptions:
        """Build engine options from these settings."""
        return TextCompareOptions(
            similarity_threshold=self.similarity_threshold,
            min_unchanged_lines=self.min_unchanged_lines,
            enable_collapsing=self.enable_collapsing
        )


@dataclass
class LoggingSettings:
    """Logging settings."""
    level: str = "INFO"
    log_file: str = ""


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    diff: DiffSettings = field(default_factory=DiffSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'linediff' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'linediff' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logging.warning(f"SettingsManager - Ignoring unreadable settings {self.settings_path}: {e}")
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(self._to_dict(settings), f, indent=2)

            self._settings = settings
            return True

        except OSError as e:
            logging.error(f"SettingsManager - Failed to save settings to {self.settings_path}: {e}")
            return False

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        def convert(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.name
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert(item) for item in obj]
            else:
                return obj

        return convert(asdict(settings))

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        defaults = DiffSettings()
        diff_data = data.get('diff', {})
        logging_data = data.get('logging', {})

        view_mode = diff_data.get('view_mode', defaults.view_mode.name)

        diff = DiffSettings(
            similarity_threshold=float(diff_data.get('similarity_threshold', defaults.similarity_threshold)),
            min_unchanged_lines=int(diff_data.get('min_unchanged_lines', defaults.min_unchanged_lines)),
            enable_collapsing=bool(diff_data.get('enable_collapsing', defaults.enable_collapsing)),
            show_line_numbers=bool(diff_data.get('show_line_numbers', defaults.show_line_numbers)),
            view_mode=DiffViewMode.from_string(view_mode),
            encoding=diff_data.get('encoding') or None,
        )

        log_settings = LoggingSettings(
            level=str(logging_data.get('level', 'INFO')),
            log_file=str(logging_data.get('log_file', '')),
        )

        return ApplicationSettings(diff=diff, logging=log_settings)
