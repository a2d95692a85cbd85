"""Interfaces of the subsystems the installer drives.

Storage interfaces live in :mod:`guided_installer.storage` next to the
topology types they exchange.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from .progress import PhaseProgress
from .status import InstallerStatus


class ResourceCatalog(Protocol):
    def get_languages(self) -> Dict[str, Dict[str, Any]]:
        ...


class SoftwareSubsystem(Protocol):
    def probe(self) -> None:
        ...

    def propose(self) -> None:
        ...

    def select_product(self, name: str) -> None:
        """Raises on an unknown product."""

    def install(self, progress: PhaseProgress) -> None:
        ...

    def products(self) -> List[str]:
        ...

    def current_product(self) -> Optional[str]:
        ...


class BootloaderSubsystem(Protocol):
    def make_proposal(self, options: Dict[str, Any]) -> Any:
        ...

    def write_finish(self) -> None:
        ...


class DiskPreparer(Protocol):
    def prepare(self, target_root: str) -> None:
        ...


class NotificationTransport(Protocol):
    def publish(self, status: InstallerStatus) -> None:
        """May raise NotificationTransportError while the peer is not attached."""
