from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

from .collaborators import (
    BootloaderSubsystem,
    DiskPreparer,
    NotificationTransport,
    ResourceCatalog,
    SoftwareSubsystem,
)
from .catalog import YamlLanguageCatalog
from .config import InstallerConfig
from .errors import InstallerBusy, InvalidSelection
from .lib.prepdisk import CommandDiskPreparer
from .logging_utils import configure_logging
from .options import Options
from .pipeline import InstallPhase, PipelineResult, ProbeStep, run_phases, run_pipeline
from .progress import InstallationProgress, ProgressListener, log_progress
from .status import InstallerStatus, StatusController, StatusListener
from .steps import (
    BootloaderInstallationPhase,
    PackageInstallationPhase,
    PartitioningPhase,
    ProbeLanguagesStep,
    ProbeSoftwareStep,
    ProbeStorageStep,
)
from .storage import Devicegraph, DiskSummary, ProposalEngine, StorageManager, StorageNegotiator

logger = logging.getLogger(__name__)


def build_probe_steps() -> List[ProbeStep]:
    return [
        ProbeLanguagesStep(),
        ProbeSoftwareStep(),
        ProbeStorageStep(),
    ]


def build_install_phases() -> List[InstallPhase]:
    return [
        PartitioningPhase(),
        PackageInstallationPhase(),
        BootloaderInstallationPhase(),
    ]


class Installer:
    """Orchestrates probing and installation.

    Probe, optionally adjust the selections, then install::

        installer = Installer(catalog=..., software=..., storage=..., ...)
        installer.on_status_change(lambda s: log.info("status %s", s))
        if installer.probe():
            installer.disk = "sdb"
            installer.install()

    Collaborators are injected; the installer owns only its selections,
    the probed snapshots and its status. One instance is one installation
    run and must not be entered concurrently.
    """

    def __init__(
        self,
        *,
        catalog: ResourceCatalog,
        software: SoftwareSubsystem,
        storage: StorageManager,
        proposal_engine: ProposalEngine,
        bootloader: BootloaderSubsystem,
        disk_preparer: DiskPreparer,
        config: Optional[InstallerConfig] = None,
    ) -> None:
        self.config = config or InstallerConfig()
        self.catalog = catalog
        self.software = software
        self.storage = storage
        self.bootloader = bootloader
        self.disk_preparer = disk_preparer
        self.negotiator = StorageNegotiator(storage, proposal_engine, self.config.proposal_settings)

        self.target_root: Optional[str] = None
        self.last_probe: Optional[PipelineResult] = None
        self.log_path: Optional[str] = None

        self._options = Options()
        self._disks: List[DiskSummary] = []
        self._languages: Dict[str, Dict[str, Any]] = {}
        self._status = StatusController()
        self._progress_listeners: List[ProgressListener] = [log_progress]
        self._in_flight = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: InstallerConfig,
        *,
        software: SoftwareSubsystem,
        storage: StorageManager,
        proposal_engine: ProposalEngine,
        bootloader: BootloaderSubsystem,
        catalog: Optional[ResourceCatalog] = None,
        disk_preparer: Optional[DiskPreparer] = None,
    ) -> "Installer":
        """Build an installer for a real run.

        Logging is set up from config, and catalog and disk preparation are
        filled in from config unless given.
        """

        if disk_preparer is None:
            if not config.prepdisk_command:
                raise ValueError("prepdisk_command is required when no disk preparer is given")
            disk_preparer = CommandDiskPreparer(config.prepdisk_command, dry_run=config.dry_run)

        log_path = configure_logging(config)
        installer = cls(
            catalog=catalog or YamlLanguageCatalog(config.languages_path),
            software=software,
            storage=storage,
            proposal_engine=proposal_engine,
            bootloader=bootloader,
            disk_preparer=disk_preparer,
            config=config,
        )
        installer.log_path = log_path
        return installer

    # -- status -----------------------------------------------------------

    @property
    def status(self) -> InstallerStatus:
        return self._status.current

    def on_status_change(self, listener: StatusListener) -> None:
        self._status.subscribe(listener)

    def attach_transport(self, transport: NotificationTransport) -> None:
        self._status.subscribe(transport.publish)

    def on_progress(self, listener: ProgressListener) -> None:
        self._progress_listeners.append(listener)

    # -- snapshots --------------------------------------------------------

    @property
    def disks(self) -> List[DiskSummary]:
        return list(self._disks)

    @property
    def languages(self) -> Dict[str, Dict[str, Any]]:
        return dict(self._languages)

    @property
    def products(self) -> List[str]:
        return list(self.software.products())

    @property
    def storage_proposal(self) -> Optional[Devicegraph]:
        proposal = self.storage.current_proposal()
        return proposal.devices if proposal is not None else None

    # -- selections -------------------------------------------------------

    def options(self) -> Dict[str, Optional[str]]:
        return self._options.as_dict()

    @property
    def language(self) -> Optional[str]:
        return self._options.language

    @language.setter
    def language(self, code: str) -> None:
        if code not in self._languages:
            raise InvalidSelection("language", code, "not in language catalog")
        self._options.language = code

    @property
    def product(self) -> Optional[str]:
        return self._options.product

    @product.setter
    def product(self, name: str) -> None:
        try:
            self.software.select_product(name)
        except Exception as e:
            raise InvalidSelection("product", name, str(e) or type(e).__name__) from e
        self._options.product = name

    @property
    def disk(self) -> Optional[str]:
        return self._options.disk

    @disk.setter
    def disk(self, name: Optional[str]) -> None:
        if name not in {d.name for d in self._disks}:
            raise InvalidSelection("disk", name, "not among discovered disks")
        try:
            feasible = self.negotiator.propose_for(name)
        except Exception as e:
            raise InvalidSelection("disk", name, str(e) or type(e).__name__) from e
        if not feasible:
            raise InvalidSelection("disk", name, "no feasible storage proposal")
        self._options.disk = name

    # -- probe results (written by the probe steps) -----------------------

    def record_languages(self, languages: Dict[str, Dict[str, Any]]) -> None:
        self._languages = dict(languages)

    def record_disks(self, disks: Sequence[DiskSummary]) -> None:
        self._disks = list(disks)

    def record_proposed_product(self, name: Optional[str]) -> None:
        """Product chosen by the software subsystem itself; no validation."""
        self._options.product = name

    def _forget_probe(self) -> None:
        self._options = Options()
        self._disks = []
        self._languages = {}
        self.storage.set_proposal(None)

    # -- runs -------------------------------------------------------------

    @contextmanager
    def _single_flight(self, operation: str) -> Iterator[None]:
        if not self._in_flight.acquire(blocking=False):
            raise InstallerBusy(f"cannot {operation}: another installer run is in progress")
        try:
            yield
        finally:
            self._in_flight.release()

    def probe(self, steps: Optional[Sequence[ProbeStep]] = None) -> bool:
        """Discover languages, software and storage; select defaults.

        Returns False instead of raising on any probing error. The status is
        back to IDLE when this returns, whatever happened.
        """

        with self._single_flight("probe"):
            self._status.transition(InstallerStatus.PROBING)
            try:
                # Selections and snapshots from an earlier probe are stale now.
                self._forget_probe()
                if steps is None:
                    steps = build_probe_steps()
                result = run_pipeline(installer=self, steps=steps)
                self.last_probe = result
                if not result.ok:
                    logger.error("Probing failed at %s: %r", result.failed_step, result.error)
                return result.ok
            finally:
                self._status.transition(InstallerStatus.IDLE)

    def install(self, phases: Optional[Sequence[InstallPhase]] = None) -> None:
        """Run partitioning, package installation and bootloader setup.

        Assumes a successful probe() and valid selections. Errors propagate
        unchanged and leave the status at INSTALLING so the failed run stays
        visible.
        """

        with self._single_flight("install"):
            self._status.transition(InstallerStatus.INSTALLING)
            phases = list(build_install_phases() if phases is None else phases)
            progress = InstallationProgress([p.phase for p in phases], self._progress_listeners)

            self.target_root = self.config.target_root
            logger.info("Installing %s to %s", self.options(), self.target_root)

            run_phases(installer=self, phases=phases, progress=progress)
            self._status.transition(InstallerStatus.IDLE)
