"""Guided installer core.

Drives an installation run:
- Probe languages, software and storage, selecting defaults
- Validate disk/product/language selections against their subsystems
- Partition, install packages and set up the bootloader, in order
- Publish status changes and phase progress to listeners (best-effort)
"""

from .config import InstallerConfig, load_config
from .errors import (
    DiskPreparationError,
    InstallerBusy,
    InstallerError,
    InvalidSelection,
    NotificationTransportError,
)
from .installer import Installer
from .options import Options
from .progress import InstallationProgress, PhaseProgress, ProgressEvent
from .status import InstallerStatus, StatusController

__all__ = [
    "Installer",
    "InstallerConfig",
    "load_config",
    "InstallerStatus",
    "StatusController",
    "Options",
    "InstallationProgress",
    "PhaseProgress",
    "ProgressEvent",
    "InstallerError",
    "InvalidSelection",
    "InstallerBusy",
    "DiskPreparationError",
    "NotificationTransportError",
]
