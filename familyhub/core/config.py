"""
Configuration management for Family Hub
Handles loading and saving client settings and household preferences
"""

import json
import os
from pathlib import Path
from typing import Dict, Any, Optional


class Config:
    """Configuration manager for the Family Hub client"""

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration manager

        Args:
            config_dir: Path to configuration directory (defaults to
                $FAMILYHUB_CONFIG_DIR, then ./config)
        """
        if config_dir is None:
            env_dir = os.environ.get("FAMILYHUB_CONFIG_DIR")
            if env_dir:
                config_dir = Path(env_dir)
            else:
                config_dir = Path(__file__).parent.parent.parent / "config"

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.settings_file = self.config_dir / "settings.json"
        self.preferences_file = self.config_dir / "preferences.json"

        # Load configurations
        self.settings = self._load_json(self.settings_file, self._default_settings())
        self.preferences = self._load_json(self.preferences_file, self._default_preferences())

    def _load_json(self, file_path: Path, default: Dict[str, Any]) -> Dict[str, Any]:
        """Load JSON file or return default if file doesn't exist"""
        if file_path.exists():
            with open(file_path, 'r') as f:
                loaded = json.load(f)
            # Keys added in newer versions fall back to their defaults
            return {**default, **loaded}
        else:
            # Create file with defaults
            self._save_json(file_path, default)
            return default

    def _save_json(self, file_path: Path, data: Dict[str, Any]) -> None:
        """Save data to JSON file"""
        with open(file_path, 'w') as f:
            json.dump(data, f, indent=2)

    def _default_settings(self) -> Dict[str, Any]:
        """Default client settings"""
        return {
            "api_base_url": "http://localhost:3000/api",
            "request_timeout": 10,
            "token_file": "data/session.json",
            "calendar_timezone": None,
            "tv_refresh_seconds": 300,
        }

    def _default_preferences(self) -> Dict[str, Any]:
        """Default household preferences"""
        return {
            "default_member_color": "#6366f1",
            "week_start": "sunday",
            "kanban_assignee": "pow",
            "leaderboard_period": "week",
        }

    def get(self, key: str, section: str = "settings", default: Any = None) -> Any:
        """
        Get configuration value

        Args:
            key: Configuration key
            section: Configuration section ('settings', 'preferences')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        section_map = {
            "settings": self.settings,
            "preferences": self.preferences
        }

        return section_map.get(section, {}).get(key, default)

    def set(self, key: str, value: Any, section: str = "settings") -> None:
        """
        Set configuration value and save to disk

        Args:
            key: Configuration key
            value: Value to set
            section: Configuration section ('settings', 'preferences')
        """
        section_map = {
            "settings": (self.settings, self.settings_file),
            "preferences": (self.preferences, self.preferences_file)
        }

        if section in section_map:
            config_dict, file_path = section_map[section]
            config_dict[key] = value
            self._save_json(file_path, config_dict)

    def get_api_base_url(self) -> str:
        """Get the household API base URL, honouring $FAMILYHUB_API_URL"""
        url = os.environ.get("FAMILYHUB_API_URL") or self.settings["api_base_url"]
        return url.rstrip("/")

    def get_token_path(self) -> Path:
        """Get full path to the stored session token"""
        token_file = Path(self.settings["token_file"])
        if token_file.is_absolute():
            return token_file
        return self.config_dir.parent / token_file
