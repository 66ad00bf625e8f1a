"""
Settings management module for the rose chart workbench.

This module provides settings management with JSON-based persistence and
a singleton for global access.

Features:
    - Singleton pattern for global settings access
    - JSON-based configuration file persistence
    - Platform-specific settings paths
    - Migration support between versions
    - Edge case handling (file locked, disk full, invalid JSON)
    - Category-based settings organization

Settings Categories:
    - Chart: Canvas size, label margin, default color scheme and labels
    - Window: Size, position, splitter layout, last opened directory
    - Logging: Log level and log file location

Interaction state (hover, selection, current view) is never stored here;
the chart settings only seed the initial color scheme and label visibility.
"""

import json
import logging
import os
import sys
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional, Union

from rose_chart.core.colors import ColorScheme
from rose_chart.core.errors import UnknownVariant
from rose_chart.core.geometry import Point
from rose_chart.core.state import InteractionState


# Module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Settings File Paths
# =============================================================================

def get_settings_dir() -> Path:
    """
    Get the platform-specific settings directory.

    Returns:
        Path to settings directory

    Platform paths:
        - Linux: ~/.config/rose-chart/
        - Windows: %APPDATA%/RoseChart/
        - macOS: ~/Library/Application Support/RoseChart/
    """
    if sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', Path.home() / 'AppData' / 'Roaming'))
        return base / 'RoseChart'
    elif sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'RoseChart'
    else:
        # Linux and other Unix-like
        xdg_config = os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config')
        return Path(xdg_config) / 'rose-chart'


def get_settings_file() -> Path:
    """Get the settings file path."""
    return get_settings_dir() / 'settings.json'


def get_default_log_file() -> Path:
    """Get the default log file path."""
    return get_settings_dir() / 'rose-chart.log'


# =============================================================================
# Settings Dataclasses
# =============================================================================

@dataclass
class ChartSettings:
    """Chart canvas and presentation defaults."""
    width: int = 650                          # Canvas width in scene units
    height: int = 650                         # Canvas height in scene units
    label_margin: int = 80                    # Space reserved for hour markers
    default_color_scheme: str = ColorScheme.BLUES.value
    labels_visible: bool = True               # Show grid values and hour markers
    peak_count: int = 4                       # Hourly peaks listed in reports

    def get_color_scheme(self) -> ColorScheme:
        """Get default color scheme as enum."""
        try:
            return ColorScheme.parse(self.default_color_scheme)
        except UnknownVariant:
            return ColorScheme.BLUES

    @property
    def center(self) -> Point:
        return Point(self.width / 2, self.height / 2)

    @property
    def max_radius(self) -> float:
        """Radius of the outermost grid ring."""
        return max(0.0, min(self.width, self.height) / 2 - self.label_margin)


@dataclass
class WindowSettings:
    """Window geometry and layout settings."""
    window_x: int = 100
    window_y: int = 100
    window_width: int = 1100
    window_height: int = 760
    window_maximized: bool = False
    splitter_sizes: List[int] = field(default_factory=lambda: [750, 350])
    last_directory: str = ""


@dataclass
class LoggingSettings:
    """Logging configuration."""
    level: str = "INFO"
    log_file: str = ""                        # Empty means the default location

    def get_level(self) -> int:
        """Get log level as a logging constant."""
        value = logging.getLevelName(self.level.upper())
        return value if isinstance(value, int) else logging.INFO

    def get_log_file(self) -> Path:
        return Path(self.log_file) if self.log_file else get_default_log_file()


# =============================================================================
# Settings Manager (Singleton)
# =============================================================================

class Settings:
    """
    Singleton settings manager for the rose chart workbench.

    Usage:
        settings = Settings.instance()
        settings.chart.default_color_scheme = "greens"
        settings.save()

        # Or with context manager for auto-save:
        with settings.modify():
            settings.chart.labels_visible = False

    Passing a path on first construction targets that file instead of the
    platform settings file.
    """

    _instance: Optional["Settings"] = None
    _initialized: bool = False

    # Settings version for migration
    SETTINGS_VERSION = 1

    def __new__(cls, path: Optional[Union[str, Path]] = None) -> "Settings":
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """Initialize settings (only runs once due to singleton)."""
        if self._initialized:
            return

        self._initialized = True
        self._path = Path(path) if path is not None else get_settings_file()

        # Initialize settings categories
        self.chart = ChartSettings()
        self.window = WindowSettings()
        self.logging = LoggingSettings()

        # Track if settings have been modified
        self._dirty = False

        # Load settings from file
        self.load()

        logger.info("Settings initialized")

    @classmethod
    def instance(cls) -> "Settings":
        """Get the singleton settings instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing)."""
        cls._instance = None
        cls._initialized = False

    # =========================================================================
    # Persistence
    # =========================================================================

    def load(self) -> bool:
        """
        Load settings from file.

        Returns:
            True if settings were loaded successfully
        """
        settings_file = self._path

        if not settings_file.exists():
            logger.info(f"Settings file not found: {settings_file}")
            return False

        try:
            with open(settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                logger.error("Settings file does not contain a JSON object")
                self._backup_corrupted_file(settings_file)
                return False

            # Check version for migration
            version = data.get('version', 0)
            if version < self.SETTINGS_VERSION:
                data = self._migrate_settings(data, version)

            # Load each category
            if 'chart' in data:
                self._load_dataclass(self.chart, data['chart'])
            if 'window' in data:
                self._load_dataclass(self.window, data['window'])
            if 'logging' in data:
                self._load_dataclass(self.logging, data['logging'])

            logger.info(f"Settings loaded from {settings_file}")
            return True

        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in settings file: {e}")
            # Backup corrupted file
            self._backup_corrupted_file(settings_file)
            return False
        except PermissionError as e:
            logger.error(f"Permission denied reading settings: {e}")
            return False
        except OSError as e:
            logger.error(f"Error loading settings: {e}")
            return False

    def save(self) -> bool:
        """
        Save settings to file.

        Returns:
            True if settings were saved successfully
        """
        settings_file = self._path

        try:
            # Ensure directory exists
            settings_file.parent.mkdir(parents=True, exist_ok=True)

            data = {
                'version': self.SETTINGS_VERSION,
                'saved_at': datetime.now().isoformat(),
                'chart': asdict(self.chart),
                'window': asdict(self.window),
                'logging': asdict(self.logging),
            }

            # Write to temp file first, then rename (atomic)
            temp_file = settings_file.with_suffix('.tmp')
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)

            temp_file.replace(settings_file)

            self._dirty = False
            logger.info(f"Settings saved to {settings_file}")
            return True

        except PermissionError as e:
            logger.error(f"Permission denied saving settings: {e}")
            return False
        except OSError as e:
            if e.errno == 28:
                logger.error("Disk full - cannot save settings")
            else:
                logger.error(f"OS error saving settings: {e}")
            return False

    def _load_dataclass(self, target: Any, data: Dict[str, Any]) -> None:
        """Load data into a dataclass, ignoring unknown fields."""
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed settings section for {type(target).__name__}")
            return
        for key, value in data.items():
            if hasattr(target, key):
                setattr(target, key, value)
            else:
                logger.debug(f"Ignoring unknown setting {key!r}")

    def _migrate_settings(self, data: Dict[str, Any], from_version: int) -> Dict[str, Any]:
        """
        Migrate settings from older versions.

        Args:
            data: Settings data dictionary
            from_version: Version of the loaded settings

        Returns:
            Migrated settings data
        """
        logger.info(f"Migrating settings from version {from_version} to {self.SETTINGS_VERSION}")

        # Version 0 stored the color scheme under its letter (A-D)
        if from_version < 1:
            chart = data.get('chart')
            if isinstance(chart, dict) and 'color_scheme' in chart:
                chart.setdefault('default_color_scheme', chart.pop('color_scheme'))

        data['version'] = self.SETTINGS_VERSION
        return data

    def _backup_corrupted_file(self, file_path: Path) -> None:
        """Backup a corrupted settings file."""
        try:
            backup_path = file_path.with_suffix('.backup')
            file_path.replace(backup_path)
            logger.info(f"Corrupted settings backed up to {backup_path}")
        except OSError as e:
            logger.error(f"Could not backup corrupted file: {e}")

    # =========================================================================
    # Updates
    # =========================================================================

    def set_chart_setting(self, name: str, value: Any) -> None:
        """Set a chart setting and mark settings as modified."""
        if hasattr(self.chart, name):
            setattr(self.chart, name, value)
            self._dirty = True

    def set_window_setting(self, name: str, value: Any) -> None:
        """Set a window setting and mark settings as modified."""
        if hasattr(self.window, name):
            setattr(self.window, name, value)
            self._dirty = True

    class _ModifyContext:
        """Context manager for modifying settings with auto-save."""

        def __init__(self, settings: "Settings"):
            self.settings = settings

        def __enter__(self) -> "Settings":
            return self.settings

        def __exit__(self, exc_type, exc_val, exc_tb) -> None:
            if exc_type is None:
                self.settings.save()

    def modify(self) -> "_ModifyContext":
        """Context manager for modifying settings with auto-save."""
        return self._ModifyContext(self)

    def reset_to_defaults(self, category: Optional[str] = None) -> None:
        """
        Reset settings to defaults.

        Args:
            category: Specific category to reset, or None for all
        """
        if category is None or category == 'chart':
            self.chart = ChartSettings()
        if category is None or category == 'window':
            self.window = WindowSettings()
        if category is None or category == 'logging':
            self.logging = LoggingSettings()

        self._dirty = True
        logger.info(f"Settings reset to defaults: {category or 'all'}")

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def is_dirty(self) -> bool:
        """Check if settings have been modified since last save."""
        return self._dirty

    @property
    def settings_file(self) -> Path:
        """Get the settings file path."""
        return self._path


# =============================================================================
# Module-Level Convenience Functions
# =============================================================================

def get_settings() -> Settings:
    """
    Get the global settings instance.

    Returns:
        The singleton Settings instance
    """
    return Settings.instance()


def initial_state(chart: Optional[ChartSettings] = None) -> InteractionState:
    """
    Build the startup interaction state.

    The view starts hourly with nothing selected or hovered; color scheme
    and label visibility come from the chart settings.
    """
    chart = chart or get_settings().chart
    return InteractionState(
        color_scheme=chart.get_color_scheme(),
        labels_visible=bool(chart.labels_visible),
    )
