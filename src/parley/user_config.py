"""
Parley User Configuration

Hierarchical config system with global defaults + local overrides:
- Global: ~/.parley/config.json (cross-project settings)
- Local: .parley/config.json (project-specific overrides)

Config structure:
{
  "notes": {
    "directory": "notes"       // Where the Markdown documents live
  },
  "editor": {
    "command": "vi"            // Used to open a target note after a move
  }
}
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from parley.logging_config import logger
from parley.paths import get_paths


DEFAULT_CONFIG = {
    "notes": {
        "directory": "notes",
    },
    "editor": {
        "command": None,
    },
}


class UserConfig:
    """
    Manages hierarchical user configuration.

    Load order (with override):
    1. Default config (hardcoded)
    2. Global config (~/.parley/config.json)
    3. Local config (.parley/config.json)
    """

    def __init__(self, project_root: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            project_root: Project root directory (defaults to CWD)
            global_config_path: Override for the user-wide config file
        """
        paths = get_paths(project_root)
        self.project_root = paths.project_root
        self.global_config_path = global_config_path or paths.global_config
        self.local_config_path = paths.local_config

        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration with hierarchical override.

        Returns:
            Merged configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        for label, path in (("global", self.global_config_path), ("local", self.local_config_path)):
            if not path.exists():
                continue
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to load {label} config from {path}: {e}")
                continue
            if not isinstance(loaded, dict):
                logger.warning(f"Ignoring {label} config at {path}: expected a JSON object")
                continue
            config = self._deep_merge(config, loaded)
            logger.debug(f"Loaded {label} config from {path}")

        return config

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """
        Deep merge two dictionaries, with override taking precedence.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., "notes.directory")
            default: Default value if key not found

        Returns:
            Config value
        """
        value = self._config

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    @property
    def notes_dir(self) -> Path:
        """Resolved notes directory."""
        return get_paths(self.project_root).resolve_notes_dir(self.get("notes.directory"))

    @property
    def editor_command(self) -> str:
        """Editor used to open notes: config, then $EDITOR, then vi."""
        return self.get("editor.command") or os.environ.get("EDITOR") or "vi"

    def get_all(self) -> Dict[str, Any]:
        """Get the entire merged configuration."""
        return copy.deepcopy(self._config)

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._config = self._load_config()


# Global singleton
_config: Optional[UserConfig] = None


def get_user_config(project_root: Optional[Path] = None) -> UserConfig:
    """
    Get the user configuration singleton.

    Args:
        project_root: Optional project root override

    Returns:
        UserConfig instance
    """
    global _config
    if project_root is not None:
        return UserConfig(project_root)
    if _config is None:
        _config = UserConfig()
    return _config


def reset_user_config() -> None:
    """Reset the global config singleton (for testing)."""
    global _config
    _config = None
