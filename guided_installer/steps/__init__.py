from .phase_bootloader_installation import BootloaderInstallationPhase
from .phase_package_installation import PackageInstallationPhase
from .phase_partitioning import PartitioningPhase
from .step_10_probe_languages import ProbeLanguagesStep
from .step_20_probe_software import ProbeSoftwareStep
from .step_30_probe_storage import ProbeStorageStep

__all__ = [
    "ProbeLanguagesStep",
    "ProbeSoftwareStep",
    "ProbeStorageStep",
    "PartitioningPhase",
    "PackageInstallationPhase",
    "BootloaderInstallationPhase",
]
