from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence

from .progress import InstallationProgress, PhaseProgress

if TYPE_CHECKING:
    from .installer import Installer

logger = logging.getLogger(__name__)


class ProbeStep(Protocol):
    step_id: str

    def run(self, installer: "Installer") -> None:
        ...


class InstallPhase(Protocol):
    phase: str

    def run(self, installer: "Installer", progress: PhaseProgress) -> None:
        ...


@dataclass
class PipelineResult:
    ran_steps: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.failed_step is None


def run_pipeline(*, installer: "Installer", steps: Sequence[ProbeStep]) -> PipelineResult:
    """Run probe steps in order, stopping at the first failure.

    Errors never escape: they are logged and recorded in the result.
    """

    result = PipelineResult()
    for step in steps:
        logger.info("Running step %s", step.step_id)
        try:
            step.run(installer)
        except Exception as e:
            logger.exception("Probing error in step %s", step.step_id)
            result.failed_step = step.step_id
            result.error = e
            break
        result.ran_steps.append(step.step_id)
    return result


def run_phases(
    *,
    installer: "Installer",
    phases: Sequence[InstallPhase],
    progress: InstallationProgress,
) -> None:
    """Run install phases in order. Errors propagate unchanged."""

    for phase in phases:
        logger.info("Running phase %s", phase.phase)
        with progress.phase(phase.phase) as phase_progress:
            phase.run(installer, phase_progress)
