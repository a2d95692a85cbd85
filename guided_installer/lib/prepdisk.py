from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import List, Mapping, Optional, Sequence

from ..errors import DiskPreparationError

logger = logging.getLogger(__name__)


class CommandDiskPreparer:
    """Disk preparation delegated to an external command.

    "{target_root}" in any argument is replaced with the mount point, e.g.
    ["storage-commit", "--mount", "{target_root}"]. With dry_run the command
    is only logged.
    """

    def __init__(
        self,
        argv: Sequence[str],
        *,
        dry_run: bool = False,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        if not argv:
            raise ValueError("disk preparation command is empty")
        self.argv = [str(a) for a in argv]
        self.dry_run = dry_run
        self.env = dict(env or {})

    def render(self, target_root: str) -> List[str]:
        return [a.replace("{target_root}", target_root) for a in self.argv]

    def prepare(self, target_root: str) -> None:
        argv = self.render(target_root)
        logger.info("Preparing disks for %s: %s", target_root, " ".join(shlex.quote(a) for a in argv))
        if self.dry_run:
            return

        try:
            p = subprocess.run(
                argv,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=dict(os.environ, **self.env),
            )
        except OSError as e:
            raise DiskPreparationError(target_root, str(e)) from e

        for line in (p.stdout or "").splitlines():
            logger.debug("prepdisk: %s", line)

        if p.returncode != 0:
            detail = (p.stderr or "").strip() or f"{argv[0]} failed"
            raise DiskPreparationError(target_root, detail, returncode=p.returncode)
        logger.info("Disks prepared for %s", target_root)
