from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..progress import PhaseProgress

if TYPE_CHECKING:
    from ..installer import Installer

logger = logging.getLogger(__name__)


class BootloaderInstallationPhase:
    phase = "bootloader_installation"

    def run(self, installer: "Installer", progress: PhaseProgress) -> None:
        proposal = installer.bootloader.make_proposal(installer.options())
        logger.info("Bootloader proposal %r", proposal)
        installer.bootloader.write_finish()
