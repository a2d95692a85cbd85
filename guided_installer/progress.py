from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ProgressEvent:
    """One progress notification.

    kind is "start"/"finish" for the phase bracket (main progress) and
    "update" for the fine-grained steps reported inside a phase.
    """

    kind: str
    phase: str
    title: str
    current_step: int
    total_steps: int
    failed: bool = False

    @property
    def fraction(self) -> float:
        if self.total_steps <= 0:
            return 0.0
        return min(1.0, self.current_step / self.total_steps)


ProgressListener = Callable[[ProgressEvent], None]


def log_progress(event: ProgressEvent) -> None:
    if event.kind == "update":
        logger.info("[%s] %s/%s %s", event.phase, event.current_step, event.total_steps, event.title)
    elif event.kind == "start":
        logger.info("Phase %s started (%s/%s)", event.phase, event.current_step, event.total_steps)
    else:
        logger.info("Phase %s finished%s", event.phase, " (failed)" if event.failed else "")


class PhaseProgress:
    """Sink handed to the code running inside a phase."""

    def __init__(self, reporter: "InstallationProgress", phase: str) -> None:
        self._reporter = reporter
        self.phase = phase
        self.current_step = 0
        self.total_steps = 0

    def step(self, title: str, current: Optional[int] = None, total: Optional[int] = None) -> None:
        if total is not None:
            self.total_steps = total
        self.current_step = current if current is not None else self.current_step + 1
        self._reporter.emit(
            ProgressEvent(
                kind="update",
                phase=self.phase,
                title=title,
                current_step=self.current_step,
                total_steps=self.total_steps,
            )
        )


class InstallationProgress:
    """Main progress of an installation: one step per phase."""

    def __init__(self, phases: Sequence[str], listeners: Sequence[ProgressListener] = ()) -> None:
        self.phases = list(phases)
        self._listeners: List[ProgressListener] = list(listeners)
        self.current_step = 0
        self.finished = False

    @property
    def total_steps(self) -> int:
        return len(self.phases)

    def subscribe(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def emit(self, event: ProgressEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.debug("Progress listener %r failed: %s", listener, e)

    @contextmanager
    def phase(self, name: str) -> Iterator[PhaseProgress]:
        """Bracket a phase; the finish event is sent even if the body raises."""

        if name in self.phases:
            self.current_step = self.phases.index(name) + 1
        else:
            self.current_step += 1
        self.emit(ProgressEvent("start", name, name, self.current_step, self.total_steps))
        failed = False
        try:
            yield PhaseProgress(self, name)
        except BaseException:
            failed = True
            raise
        finally:
            self.finished = not failed and self.current_step >= self.total_steps
            self.emit(ProgressEvent("finish", name, name, self.current_step, self.total_steps, failed=failed))

    def with_phase(self, name: str, body: Callable[[PhaseProgress], T]) -> T:
        with self.phase(name) as progress:
            return body(progress)
