from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..installer import Installer

logger = logging.getLogger(__name__)


class ProbeLanguagesStep:
    step_id = "10_probe_languages"

    def run(self, installer: "Installer") -> None:
        logger.info("Probing languages")
        installer.record_languages(installer.catalog.get_languages())
        # The default language must exist in every deployment.
        installer.language = installer.config.default_language
