from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    # Installation target is always mounted here.
    target_root: str = "/mnt"
    log_default: str = "/var/log/guided-installer.log"


PATHS = Paths()
