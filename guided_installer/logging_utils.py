from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from .config import InstallerConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
FILE_HANDLER_NAME = "guided-installer"
CONSOLE_HANDLER_NAME = "guided-installer-console"
FALLBACK_LOG_NAME = "guided-installer.log"

logger = logging.getLogger(__name__)


def _installed_file_handler(root: logging.Logger) -> Optional[logging.FileHandler]:
    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and h.get_name() == FILE_HANDLER_NAME:
            return h
    return None


def _open_log_file(requested: str) -> Tuple[logging.FileHandler, str]:
    """Open the requested log, or ./guided-installer.log if it is not writable."""

    try:
        Path(requested).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(requested, encoding="utf-8"), requested
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback, encoding="utf-8"), fallback


def configure_logging(config: InstallerConfig) -> str:
    """Send the installer's log records to config.log_path.

    Safe to call once per Installer: when the handler is already installed
    its file path is returned unchanged. Returns the path in use.
    """

    root = logging.getLogger()
    root.setLevel(config.log_level)

    existing = _installed_file_handler(root)
    if existing is not None:
        return existing.baseFilename

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")

    file_handler, path = _open_log_file(config.log_path)
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    if config.log_console:
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER_NAME)
        console.setFormatter(fmt)
        root.addHandler(console)

    if path != config.log_path:
        logger.warning("Cannot write log to %s, using %s", config.log_path, path)
    logger.info("Installer log: %s (level %s)", path, config.log_level)
    return path
