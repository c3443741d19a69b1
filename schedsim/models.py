from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from .errors import ValidationError

if TYPE_CHECKING:
    from .timeline import Timeline


def _require_int(name: str, value: object, minimum: int) -> None:
    # bool is an int subclass; True is not a burst time.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        bound = "a positive" if minimum == 1 else "a non-negative"
        raise ValidationError(f"{name} must be {bound} integer, got {value}")


def validate_job_fields(arrival_time: int, burst_time: int, priority: int) -> None:
    _require_int("arrival_time", arrival_time, 0)
    _require_int("burst_time", burst_time, 1)
    _require_int("priority", priority, 0)


@dataclass
class Job:
    """
    A CPU-bound job: static attributes plus per-run simulation state.

    Lower ``priority`` values are more urgent. ``remaining_time``,
    ``completed`` and ``completion_time`` belong to a single policy run and
    are reset from the static attributes by :meth:`reset`.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0

    remaining_time: int = field(init=False, repr=False)
    completed: bool = field(init=False, repr=False)
    completion_time: Optional[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        _require_int("pid", self.pid, 1)
        validate_job_fields(self.arrival_time, self.burst_time, self.priority)
        self.reset()

    def reset(self) -> None:
        self.remaining_time = self.burst_time
        self.completed = False
        self.completion_time = None

    def execute(self, ticks: int, clock: int) -> None:
        """
        Consume ``ticks`` units of work ending at ``clock``.

        Marks the job completed, with ``completion_time = clock``, when the
        remaining time reaches zero.
        """
        if self.completed:
            raise RuntimeError(f"job {self.pid} already completed")
        if ticks <= 0 or ticks > self.remaining_time:
            raise RuntimeError(f"job {self.pid} cannot run {ticks} ticks with {self.remaining_time} remaining")
        self.remaining_time -= ticks
        if self.remaining_time == 0:
            self.completed = True
            self.completion_time = clock


@dataclass(frozen=True)
class ExecutionSlice:
    """
    One contiguous slice of execution for a job in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class JobMetrics:
    """Per-job results of a finished run; derived, never stored on the job."""

    pid: int
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    turnaround_time: int
    waiting_time: int
    response_time: int


@dataclass
class MetricsSummary:
    avg_waiting: float
    avg_turnaround: float
    avg_response: float


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    context_switches: int = 0


@dataclass
class ScheduleResult:
    """
    Outcome of one policy run: the timeline plus per-job and aggregate metrics.

    ``jobs`` is ordered by pid; ``quantum`` is only set for Round Robin.
    """

    algorithm: str
    policy: str
    timeline: Timeline
    jobs: List[JobMetrics]
    summary: MetricsSummary
    system: SystemMetrics
    quantum: Optional[int] = None
