"""
Logging setup for Parley.

Two loguru sinks:
- console (stderr): warnings and errors unless PARLEY_LOG_LEVEL says
  otherwise, so log lines stay out of the talk-to screen. Off in machine mode.
- move log (.parley/logs/moves.log): opt-in via PARLEY_FILE_LOGGING=1.
  Every note rewrite, move, rollback and undo is logged there at INFO.
"""

import os
import sys

from loguru import logger

MOVE_LOG_NAME = "moves.log"

CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"

# Flag to track if logging has been configured
_logging_configured = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def setup_logging(level=None, suppress_console=None, enable_file_logging=None, force=False):
    """
    Configures the global logger.

    Args:
        level: Console level. If None, PARLEY_LOG_LEVEL or WARNING.
        suppress_console: If True, no console sink. If None, check PARLEY_MACHINE_MODE env var.
        enable_file_logging: If True, write the move log. If None, check PARLEY_FILE_LOGGING env var.
        force: Replace an earlier configuration (the CLI callback switches modes this way).
    """
    global _logging_configured

    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    if level is None:
        level = os.getenv("PARLEY_LOG_LEVEL", "WARNING").upper()
    if suppress_console is None:
        suppress_console = _env_flag("PARLEY_MACHINE_MODE")

    if not suppress_console:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)

    if enable_file_logging is None:
        enable_file_logging = _env_flag("PARLEY_FILE_LOGGING")
    if not enable_file_logging:
        return

    from parley.paths import get_paths
    paths = get_paths()
    paths.ensure_dirs()

    logger.add(
        paths.logs_dir / MOVE_LOG_NAME,
        level="INFO",
        format=FILE_FORMAT,
        rotation="1 MB",
        retention=5,  # Rotated files kept
        encoding="utf-8",
        catch=True,
    )


# Configure the logger on import (checks env vars for machine mode)
setup_logging()
