"""Pytest fixtures and test doubles for the installer collaborators."""

import logging
from typing import Any, Dict, List, Optional

import pytest

from guided_installer import Installer, InstallerConfig
from guided_installer.logging_utils import CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME
from guided_installer.progress import PhaseProgress
from guided_installer.storage import Device, Devicegraph, GuidedProposal, ProposalSettings


def make_topology() -> Devicegraph:
    return Devicegraph(
        disks=[
            Device(
                name="sda",
                size_mib=512_000,
                model="WDC WD5000",
                children=[Device(name="sda1", size_mib=512_000, kind="partition", filesystem="ntfs")],
            ),
            Device(name="sdb", size_mib=256_000, model="Samsung SSD"),
            Device(name="sdc", size_mib=1_000, model="USB stick"),
        ]
    )


class FakeCatalog:
    def __init__(self, languages: Optional[Dict[str, Dict[str, Any]]] = None, error: Exception = None):
        self.languages = languages if languages is not None else {
            "en_US": {"name": "English (US)"},
            "de_DE": {"name": "German"},
        }
        self.error = error

    def get_languages(self):
        if self.error:
            raise self.error
        return self.languages


class FakeSoftware:
    def __init__(self, calls: List[str]):
        self.calls = calls
        self.available = ["Tumbleweed", "Leap"]
        self.selected = None
        self.probe_error = None
        self.install_error = None

    def probe(self):
        self.calls.append("software.probe")
        if self.probe_error:
            raise self.probe_error

    def propose(self):
        self.calls.append("software.propose")
        self.selected = self.selected or self.available[0]

    def select_product(self, name):
        if name not in self.available:
            raise ValueError(f"unknown product {name}")
        self.selected = name

    def install(self, progress: PhaseProgress):
        self.calls.append("software.install")
        packages = ["glibc", "bash", "kernel-default"]
        for i, pkg in enumerate(packages, start=1):
            progress.step(f"Installing {pkg}", current=i, total=len(packages))
        if self.install_error:
            raise self.install_error

    def products(self):
        return list(self.available)

    def current_product(self):
        return self.selected


class FakeStorage:
    def __init__(self, calls: List[str], topology: Devicegraph):
        self.calls = calls
        self.topology = topology
        self.probed: Optional[Devicegraph] = None
        self.proposal: Optional[GuidedProposal] = None
        self.probe_error = None

    def probe(self):
        self.calls.append("storage.probe")
        if self.probe_error:
            raise self.probe_error
        self.probed = self.topology

    def probed_topology(self):
        if self.probed is None:
            raise RuntimeError("storage not probed")
        return self.probed

    def current_proposal(self):
        return self.proposal

    def set_proposal(self, proposal):
        self.proposal = proposal


class FakeProposalEngine:
    """Adds root and swap partitions to the candidate disk if it is big enough."""

    min_size_mib = 20_000

    def __init__(self):
        self.requests: List[ProposalSettings] = []
        self.seen_graphs: List[Devicegraph] = []

    def compute_guided_proposal(self, devicegraph, settings):
        self.requests.append(settings)
        self.seen_graphs.append(devicegraph)
        disk = devicegraph.find_disk(settings.candidate_devices[0])
        if disk is None or disk.size_mib < self.min_size_mib:
            return GuidedProposal(failed=True, settings=settings)
        disk.children.append(
            Device(name=f"{disk.name}1", size_mib=disk.size_mib - 2048, kind="partition",
                   filesystem=settings.root_filesystem, mountpoint="/")
        )
        disk.children.append(
            Device(name=f"{disk.name}2", size_mib=2048, kind="partition", filesystem="swap")
        )
        return GuidedProposal(devices=devicegraph, settings=settings)


class FakeBootloader:
    def __init__(self, calls: List[str]):
        self.calls = calls
        self.proposal_options = None

    def make_proposal(self, options):
        self.calls.append("bootloader.make_proposal")
        self.proposal_options = options
        return {"loader": "grub2-efi", "disk": options.get("disk")}

    def write_finish(self):
        self.calls.append("bootloader.write_finish")


class FakeDiskPreparer:
    def __init__(self, calls: List[str]):
        self.calls = calls
        self.target_roots: List[str] = []
        self.error = None

    def prepare(self, target_root):
        self.calls.append("disk.prepare")
        self.target_roots.append(target_root)
        if self.error:
            raise self.error


@pytest.fixture
def calls() -> List[str]:
    return []


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def software(calls) -> FakeSoftware:
    return FakeSoftware(calls)


@pytest.fixture
def storage(calls) -> FakeStorage:
    return FakeStorage(calls, make_topology())


@pytest.fixture
def engine() -> FakeProposalEngine:
    return FakeProposalEngine()


@pytest.fixture
def bootloader(calls) -> FakeBootloader:
    return FakeBootloader(calls)


@pytest.fixture
def disk_preparer(calls) -> FakeDiskPreparer:
    return FakeDiskPreparer(calls)


@pytest.fixture
def installer(catalog, software, storage, engine, bootloader, disk_preparer) -> Installer:
    return Installer(
        catalog=catalog,
        software=software,
        storage=storage,
        proposal_engine=engine,
        bootloader=bootloader,
        disk_preparer=disk_preparer,
        config=InstallerConfig(),
    )


@pytest.fixture
def probed(installer) -> Installer:
    assert installer.probe() is True
    return installer


@pytest.fixture
def clean_root_logger():
    """Remove the installer's handlers from the root logger afterwards."""
    root = logging.getLogger()
    level = root.level
    yield root
    for h in list(root.handlers):
        if h.get_name() in (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
