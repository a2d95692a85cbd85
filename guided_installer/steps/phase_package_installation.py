from __future__ import annotations

from typing import TYPE_CHECKING

from ..progress import PhaseProgress

if TYPE_CHECKING:
    from ..installer import Installer


class PackageInstallationPhase:
    phase = "package_installation"

    def run(self, installer: "Installer", progress: PhaseProgress) -> None:
        # The software subsystem reports per-package progress through the sink.
        installer.software.install(progress)
