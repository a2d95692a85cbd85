from __future__ import annotations

from typing import Any


class InstallerError(Exception):
    """Base class for errors raised by the installer core."""


class InvalidSelection(InstallerError, ValueError):
    """A disk/product/language assignment was rejected by its owning subsystem."""

    def __init__(self, field: str, value: Any, reason: str | None = None) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        msg = f"Invalid {field}: {value!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class NotificationTransportError(InstallerError):
    """The status notification transport is not reachable (yet)."""


class InstallerBusy(InstallerError, RuntimeError):
    """probe()/install() was entered while another run is in flight."""


class DiskPreparationError(InstallerError):
    """The disk preparation command could not prepare the installation target."""

    def __init__(self, target_root: str, detail: str, returncode: int | None = None) -> None:
        self.target_root = target_root
        self.detail = detail
        self.returncode = returncode
        status = f" (exit {returncode})" if returncode is not None else ""
        super().__init__(f"Disk preparation for {target_root} failed{status}: {detail}")
