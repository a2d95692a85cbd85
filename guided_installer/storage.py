from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass
class Device:
    """Node of a storage topology (disk, partition, LV...)."""

    name: str
    size_mib: int = 0
    kind: str = "disk"
    model: Optional[str] = None
    filesystem: Optional[str] = None
    mountpoint: Optional[str] = None
    children: List["Device"] = field(default_factory=list)

    def descendants(self) -> Iterator["Device"]:
        for child in self.children:
            yield child
            yield from child.descendants()

    def remove_descendants(self) -> None:
        self.children = []


@dataclass
class Devicegraph:
    """Topology snapshot. Only disks live at the top level."""

    disks: List[Device] = field(default_factory=list)

    def clone(self) -> "Devicegraph":
        return copy.deepcopy(self)

    def find_disk(self, name: Optional[str]) -> Optional[Device]:
        return next((d for d in self.disks if d.name == name), None)

    def disk_names(self) -> List[str]:
        return [d.name for d in self.disks]


@dataclass(frozen=True)
class DiskSummary:
    name: str
    size_mib: int
    model: Optional[str] = None

    @classmethod
    def from_device(cls, dev: Device) -> "DiskSummary":
        return cls(name=dev.name, size_mib=dev.size_mib, model=dev.model)


@dataclass
class ProposalSettings:
    candidate_devices: List[str] = field(default_factory=list)
    root_filesystem: str = "btrfs"
    use_lvm: bool = False
    use_snapshots: bool = True

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any]) -> "ProposalSettings":
        s = cls()
        if "root_filesystem" in raw:
            s.root_filesystem = str(raw["root_filesystem"])
        if "use_lvm" in raw:
            s.use_lvm = bool(raw["use_lvm"])
        if "use_snapshots" in raw:
            s.use_snapshots = bool(raw["use_snapshots"])
        return s


@dataclass
class GuidedProposal:
    devices: Optional[Devicegraph] = None
    failed: bool = False
    settings: Optional[ProposalSettings] = None


class StorageManager(Protocol):
    def probe(self) -> None:
        ...

    def probed_topology(self) -> Devicegraph:
        ...

    def current_proposal(self) -> Optional[GuidedProposal]:
        ...

    def set_proposal(self, proposal: Optional[GuidedProposal]) -> None:
        """None drops the committed proposal."""
        ...


class ProposalEngine(Protocol):
    def compute_guided_proposal(self, devicegraph: Devicegraph, settings: ProposalSettings) -> GuidedProposal:
        ...


class StorageNegotiator:
    """Turns a candidate disk into a committed storage proposal."""

    def __init__(
        self,
        manager: StorageManager,
        engine: ProposalEngine,
        settings_factory: Callable[[], ProposalSettings] = ProposalSettings,
    ) -> None:
        self.manager = manager
        self.engine = engine
        self.settings_factory = settings_factory

    def clean_topology(self) -> Devicegraph:
        """Probed topology with every disk emptied.

        Always built from the probed snapshot, never from a previous
        proposal, so repeated calls do not accumulate partitions.
        """

        clean = self.manager.probed_topology().clone()
        for disk in clean.disks:
            disk.remove_descendants()
        return clean

    def propose_for(self, disk_name: Optional[str]) -> bool:
        clean = self.clean_topology()

        if clean.find_disk(disk_name) is None:
            logger.warning("Disk %r not found in probed topology (%s)", disk_name, clean.disk_names())
            return False

        settings = self.settings_factory()
        settings.candidate_devices = [str(disk_name)]

        proposal = self.engine.compute_guided_proposal(clean, settings)
        if proposal.failed:
            logger.warning("No storage proposal possible for disk %s", disk_name)
            return False

        self.manager.set_proposal(proposal)
        logger.info("Storage proposal committed for disk %s", disk_name)
        return True
