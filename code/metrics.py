"""Helpers for collecting instrumentation data during a fitting pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


@dataclass
class PhaseMetrics:
    """Aggregated timing for one phase of the fitter across invocations."""

    name: str
    invocations: int = 0
    total_time: float = 0.0

    def record(self, duration: float) -> None:
        self.invocations += 1
        self.total_time += duration

    def to_dict(self) -> Dict[str, float | int]:
        average_time = self.total_time / self.invocations if self.invocations else 0.0
        return {
            "invocations": self.invocations,
            "total_time": self.total_time,
            "average_time": average_time,
        }


@dataclass
class FitMetrics:
    """Container for phase metrics recorded during a fitting pass."""

    phases: Dict[str, PhaseMetrics] = field(default_factory=dict)

    def record_phase(self, name: str, duration: float) -> None:
        metrics = self.phases.get(name)
        if metrics is None:
            metrics = PhaseMetrics(name=name)
            self.phases[name] = metrics
        metrics.record(duration)

    def snapshot(self) -> Dict[str, Dict[str, float | int]]:
        return {name: metrics.to_dict() for name, metrics in self.phases.items()}


class RouteStatus(Enum):
    ROUTED = "routed"
    SKIPPED_MISSING_ENDPOINT = "skipped_missing_endpoint"
    SKIPPED_NO_BOUNDARY = "skipped_no_boundary"
    NO_PATH = "no_path"


@dataclass(frozen=True)
class CorridorOutcome:
    """What happened to one corridor during routing."""

    index: int
    status: RouteStatus
    from_room_id: Optional[int] = None
    to_room_id: Optional[int] = None
    path_length: int = 0
    cells_carved: int = 0

    @property
    def routed(self) -> bool:
        return self.status is RouteStatus.ROUTED


@dataclass
class RoutingReport:
    """Per-corridor outcomes, in routing order."""

    outcomes: List[CorridorOutcome] = field(default_factory=list)

    def add(self, outcome: CorridorOutcome) -> None:
        self.outcomes.append(outcome)

    def count(self, status: RouteStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def routed(self) -> int:
        return self.count(RouteStatus.ROUTED)

    @property
    def skipped(self) -> int:
        return self.count(RouteStatus.SKIPPED_MISSING_ENDPOINT) + self.count(RouteStatus.SKIPPED_NO_BOUNDARY)

    @property
    def failed(self) -> int:
        return self.count(RouteStatus.NO_PATH)

    def summary(self) -> Dict[str, int]:
        return {
            "corridors": len(self.outcomes),
            "routed": self.routed,
            "skipped": self.skipped,
            "failed": self.failed,
        }
