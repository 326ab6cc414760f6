"""Configuration management for AutoTime."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from .utils import get_app_support_directory, get_data_directory

DEFAULT_BLACKLIST = [
    "Finder",
    "System Settings",
    "Activity Monitor",
    "System Preferences",
    "AutoTime",
    "AutoTime macOS",
]

DEFAULT_CONFIG = {
    "idle_threshold": 300,  # 5 minutes
    "sticky_threshold": 10,
    "poll_interval": 2.0,
    "verbose_logging": True,
    "default_company": "",
    "default_allocation": "",
    "app_blacklist": list(DEFAULT_BLACKLIST),
}


@dataclass(frozen=True)
class TrackerConfig:
    """Thresholds and blacklist handed to the tracking state machine."""

    idle_threshold: float = 300.0
    sticky_threshold: float = 10.0
    blacklist: FrozenSet[str] = field(
        default_factory=lambda: frozenset(DEFAULT_BLACKLIST)
    )
    tick_interval: float = 1.0

    def __post_init__(self):
        # Accept any iterable of app names
        if not isinstance(self.blacklist, frozenset):
            object.__setattr__(self, "blacklist", frozenset(self.blacklist))

    def is_blacklisted(self, application: str) -> bool:
        return application in self.blacklist


class Config:
    """Configuration manager for AutoTime."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Custom configuration directory path
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = get_app_support_directory() / "config"

        self.config_file = self.config_dir / "settings.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or create default."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    config = json.load(f)
                # Merge with defaults to ensure all keys exist
                merged_config = self._defaults()
                merged_config.update(config)
                return merged_config
            except (json.JSONDecodeError, IOError) as e:
                print(f"Warning: Could not load config file: {e}")
                print("Using default configuration.")

        return self._defaults()

    @staticmethod
    def _defaults() -> Dict[str, Any]:
        defaults = DEFAULT_CONFIG.copy()
        defaults["app_blacklist"] = list(DEFAULT_BLACKLIST)
        return defaults

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
        except IOError as e:
            print(f"Warning: Could not save config file: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        self._config[key] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """Update multiple configuration values."""
        self._config.update(config_dict)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self._config = self._defaults()

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration values.

        Returns:
            Complete configuration dictionary
        """
        return self._config.copy()

    @property
    def idle_threshold(self) -> float:
        """Seconds without input before a session is closed."""
        return self.get("idle_threshold", 300)

    @idle_threshold.setter
    def idle_threshold(self, value: float) -> None:
        self.set("idle_threshold", value)

    @property
    def sticky_threshold(self) -> float:
        """Seconds a new activity must hold focus before it is committed."""
        return self.get("sticky_threshold", 10)

    @sticky_threshold.setter
    def sticky_threshold(self, value: float) -> None:
        self.set("sticky_threshold", value)

    @property
    def poll_interval(self) -> float:
        return self.get("poll_interval", 2.0)

    @property
    def verbose_logging(self) -> bool:
        return self.get("verbose_logging", True)

    @verbose_logging.setter
    def verbose_logging(self, value: bool) -> None:
        self.set("verbose_logging", value)

    @property
    def default_company(self) -> str:
        return self.get("default_company", "")

    @property
    def default_allocation(self) -> str:
        return self.get("default_allocation", "")

    @property
    def app_blacklist(self) -> List[str]:
        return list(self.get("app_blacklist", DEFAULT_BLACKLIST))

    @app_blacklist.setter
    def app_blacklist(self, value: Iterable[str]) -> None:
        self.set("app_blacklist", list(value))

    def add_to_blacklist(self, app_name: str) -> None:
        blacklist = self.app_blacklist
        if app_name not in blacklist:
            blacklist.append(app_name)
            self.app_blacklist = blacklist

    def remove_from_blacklist(self, app_name: str) -> None:
        self.app_blacklist = [app for app in self.app_blacklist if app != app_name]

    @property
    def data_dir(self) -> Path:
        """Get data directory path."""
        data_dir = self.get("data_dir")
        if data_dir:
            return Path(data_dir)
        return get_data_directory()

    def tracker_config(self) -> TrackerConfig:
        """Build the immutable settings used by the tracking state machine."""
        return TrackerConfig(
            idle_threshold=float(self.idle_threshold),
            sticky_threshold=float(self.sticky_threshold),
            blacklist=frozenset(self.app_blacklist),
        )


def load_config_from_env() -> Dict[str, Any]:
    """Load configuration from environment variables.

    Returns:
        Configuration dictionary from environment
    """
    env_config: Dict[str, Any] = {}

    env_mappings = {
        "AUTOTIME_DATA_DIR": "data_dir",
        "AUTOTIME_IDLE_THRESHOLD": "idle_threshold",
        "AUTOTIME_STICKY_THRESHOLD": "sticky_threshold",
        "AUTOTIME_POLL_INTERVAL": "poll_interval",
        "AUTOTIME_VERBOSE": "verbose_logging",
        "AUTOTIME_COMPANY": "default_company",
        "AUTOTIME_ALLOCATION": "default_allocation",
        "AUTOTIME_BLACKLIST": "app_blacklist",
    }

    for env_var, config_key in env_mappings.items():
        value = os.getenv(env_var)
        if value is None:
            continue

        if config_key in ["idle_threshold", "sticky_threshold", "poll_interval"]:
            try:
                env_config[config_key] = float(value)
            except ValueError:
                print(f"Warning: Invalid number for {env_var}: {value}")
        elif config_key == "verbose_logging":
            env_config[config_key] = value.lower() in ("true", "1", "yes", "on")
        elif config_key == "app_blacklist":
            env_config[config_key] = [
                app.strip() for app in value.split(",") if app.strip()
            ]
        else:
            env_config[config_key] = value

    return env_config
