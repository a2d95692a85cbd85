from __future__ import annotations

from typing import TYPE_CHECKING

from ..progress import PhaseProgress

if TYPE_CHECKING:
    from ..installer import Installer


class PartitioningPhase:
    phase = "partitioning"

    def run(self, installer: "Installer", progress: PhaseProgress) -> None:
        installer.disk_preparer.prepare(installer.target_root)
