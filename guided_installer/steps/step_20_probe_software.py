from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..installer import Installer

logger = logging.getLogger(__name__)


class ProbeSoftwareStep:
    step_id = "20_probe_software"

    def run(self, installer: "Installer") -> None:
        logger.info("Probing software")
        installer.software.probe()
        installer.software.propose()

        product = installer.software.current_product()
        installer.record_proposed_product(product)
        logger.info("Proposed product: %s", product)
