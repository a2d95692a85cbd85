from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..storage import DiskSummary

if TYPE_CHECKING:
    from ..installer import Installer

logger = logging.getLogger(__name__)


class ProbeStorageStep:
    step_id = "30_probe_storage"

    def run(self, installer: "Installer") -> None:
        logger.info("Probing storage")
        installer.storage.probe()
        disks = [DiskSummary.from_device(d) for d in installer.storage.probed_topology().disks]
        installer.record_disks(disks)
        logger.info("Found disks: %s", [d.name for d in disks])

        installer.disk = disks[0].name if disks else None
