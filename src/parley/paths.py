"""
Parley Path Configuration

Centralized path management for Parley data files.
All paths are relative to the project root (current working directory).

Directory Structure:
notes/                   # Markdown documents (configurable)
.parley/
├── config.json          # Local config overrides
└── logs/                # Log files (opt-in)
"""

from pathlib import Path
from typing import Optional


class ParleyPaths:
    """
    Centralized path configuration for Parley.

    All paths are lazily resolved relative to project_root.
    Default project_root is current working directory.
    """

    PARLEY_DIR = ".parley"
    GLOBAL_DIR = Path.home() / ".parley"

    CONFIG_NAME = "config.json"
    NOTES_DIR = "notes"
    LOGS_DIR = "logs"

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize paths configuration.

        Args:
            project_root: Root directory for the project. Defaults to CWD.
        """
        self._project_root = project_root

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        if self._project_root is None:
            return Path.cwd()
        return self._project_root

    @property
    def parley_dir(self) -> Path:
        """Get the .parley directory path."""
        return self.project_root / self.PARLEY_DIR

    @property
    def local_config(self) -> Path:
        """Get the project-local config file path."""
        return self.parley_dir / self.CONFIG_NAME

    @property
    def global_config(self) -> Path:
        """Get the user-wide config file path."""
        return self.GLOBAL_DIR / self.CONFIG_NAME

    @property
    def logs_dir(self) -> Path:
        """Get the logs directory path."""
        return self.parley_dir / self.LOGS_DIR

    @property
    def default_notes_dir(self) -> Path:
        """Get the default notes directory path."""
        return self.project_root / self.NOTES_DIR

    def resolve_notes_dir(self, configured: Optional[str] = None) -> Path:
        """
        Resolve the notes directory, honoring a configured override.

        Relative overrides are resolved against the project root.
        """
        if not configured:
            return self.default_notes_dir
        path = Path(configured).expanduser()
        if not path.is_absolute():
            path = self.project_root / path
        return path

    def ensure_dirs(self) -> None:
        """Create all necessary directories if they don't exist."""
        self.parley_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(exist_ok=True)


# Global instance for convenience
_default_paths: Optional[ParleyPaths] = None


def get_paths(project_root: Optional[Path] = None) -> ParleyPaths:
    """
    Get the paths configuration.

    Args:
        project_root: Optional project root override

    Returns:
        ParleyPaths instance
    """
    global _default_paths
    if project_root is not None:
        return ParleyPaths(project_root)
    if _default_paths is None:
        _default_paths = ParleyPaths()
    return _default_paths


def reset_paths() -> None:
    """Reset the global paths instance (useful for testing)."""
    global _default_paths
    _default_paths = None
