from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class InstallerStatus(str, Enum):
    """Installer lifecycle.

    Any status is reachable from any other: a failed probe still has to go
    back from PROBING to IDLE.
    """

    IDLE = "idle"
    PROBING = "probing"
    INSTALLING = "installing"


StatusListener = Callable[[InstallerStatus], None]


class StatusController:
    def __init__(self, initial: InstallerStatus = InstallerStatus.IDLE) -> None:
        self._status = initial
        self._listeners: List[StatusListener] = []

    @property
    def current(self) -> InstallerStatus:
        return self._status

    def subscribe(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def transition(self, new_status: InstallerStatus) -> None:
        """Set the status and notify listeners (best-effort).

        A listener that raises never aborts the caller; the error is logged
        and dropped.
        """

        self._status = InstallerStatus(new_status)
        logger.info("Status changed: %s", self._status.value)
        for listener in list(self._listeners):
            try:
                listener(self._status)
            except Exception as e:
                logger.debug("Status listener %r failed: %s", listener, e)
