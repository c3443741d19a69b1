"""
Uniprocessor scheduling policies.

Every policy follows the same shape: take a private, reset copy of the
jobs, drive a simulation clock from 0, record execution slices in a
:class:`~schedsim.timeline.Timeline` and derive per-job metrics once every
job has completed. Ties between otherwise equal jobs always go to the job
registered first (lowest pid for registry jobs).
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Type

from .errors import EmptyInputError, ValidationError
from .metrics import compute_job_metrics, compute_system_metrics, summarize_job_metrics
from .models import Job, ScheduleResult
from .timeline import Timeline

logger = logging.getLogger(__name__)


def prepare_jobs(jobs: Iterable[Job]) -> List[Job]:
    """
    Return reset deep copies of ``jobs`` in registration order.

    Raises :class:`EmptyInputError` before any simulation work when there is
    nothing to schedule.
    """
    working: List[Job] = []
    for job in jobs:
        clone = copy.deepcopy(job)
        clone.reset()
        working.append(clone)

    if not working:
        raise EmptyInputError("no jobs to schedule; register jobs first")
    return working


def arrival_order(jobs: List[Job]) -> List[Job]:
    # sorted() is stable, so simultaneous arrivals keep registration order.
    return sorted(jobs, key=lambda j: j.arrival_time)


def ready_jobs(jobs: List[Job], clock: int) -> List[Job]:
    return [j for j in jobs if j.arrival_time <= clock and not j.completed]


def next_arrival_after(jobs: List[Job], clock: int) -> Optional[int]:
    future = [j.arrival_time for j in jobs if j.arrival_time > clock and not j.completed]
    return min(future) if future else None


class SchedulingPolicy(ABC):
    """
    Base class for all scheduling policies.

    Subclasses implement :meth:`simulate`, which advances the clock over the
    working copies and fills the timeline. :meth:`run` wraps it with copying,
    validation and metrics.
    """

    name: str = ""
    label: str = ""

    @property
    def quantum(self) -> Optional[int]:
        return None

    def run(self, jobs: Iterable[Job]) -> ScheduleResult:
        working = prepare_jobs(jobs)
        logger.debug("Running %s on %d jobs", self.label, len(working))

        timeline = Timeline()
        self.simulate(working, timeline)

        job_metrics = compute_job_metrics(working, timeline)
        result = ScheduleResult(
            algorithm=self.label,
            policy=self.name,
            timeline=timeline,
            jobs=job_metrics,
            summary=summarize_job_metrics(job_metrics),
            system=compute_system_metrics(timeline, job_metrics),
            quantum=self.quantum,
        )
        logger.info(
            "%s finished: %d slices, makespan %d, avg waiting %.2f",
            self.label,
            len(timeline),
            result.system.makespan,
            result.summary.avg_waiting,
        )
        return result

    @abstractmethod
    def simulate(self, jobs: List[Job], timeline: Timeline) -> None:
        """Run ``jobs`` to completion, recording slices in ``timeline``."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FCFSPolicy(SchedulingPolicy):
    """
    First-Come First-Served (non-preemptive): one slice per job in arrival order.
    """

    name = "fcfs"
    label = "First-Come, First-Served (FCFS)"

    def simulate(self, jobs: List[Job], timeline: Timeline) -> None:
        clock = 0
        for job in arrival_order(jobs):
            if clock < job.arrival_time:
                clock = job.arrival_time

            timeline.append(job.pid, clock, clock + job.burst_time)
            clock += job.burst_time
            job.execute(job.burst_time, clock)


class PreemptivePolicy(SchedulingPolicy):
    """
    Shared engine for policies that re-decide at every time unit.

    At each tick the arrived, unfinished job with the smallest
    :meth:`selection_key` gets the CPU. Consecutive ticks of the same job
    form one slice.

    By default the clock jumps straight to the next arrival or completion,
    since the choice cannot change in between. ``unit_step=True`` advances
    one tick at a time instead; both modes produce identical timelines.
    """

    def __init__(self, unit_step: bool = False) -> None:
        self.unit_step = unit_step

    @abstractmethod
    def selection_key(self, job: Job) -> int:
        ...

    def simulate(self, jobs: List[Job], timeline: Timeline) -> None:
        clock = 0
        pending = len(jobs)

        while pending:
            ready = ready_jobs(jobs, clock)
            if not ready:
                # Idle until something arrives.
                clock = clock + 1 if self.unit_step else next_arrival_after(jobs, clock)
                continue

            # min() keeps the first of equal keys, i.e. registration order.
            job = min(ready, key=self.selection_key)

            run_time = 1
            if not self.unit_step:
                run_time = job.remaining_time
                nxt = next_arrival_after(jobs, clock)
                if nxt is not None:
                    run_time = min(run_time, nxt - clock)

            timeline.extend(job.pid, clock, clock + run_time)
            clock += run_time
            job.execute(run_time, clock)
            if job.completed:
                pending -= 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}(unit_step={self.unit_step})"


class SJFPolicy(PreemptivePolicy):
    """
    Shortest Job First, preemptive (shortest remaining time wins).
    """

    name = "sjf"
    label = "Preemptive Shortest Job First (SJF)"

    def selection_key(self, job: Job) -> int:
        return job.remaining_time


class PriorityPolicy(PreemptivePolicy):
    """
    Fixed-priority preemptive scheduling; lower number means more urgent.
    """

    name = "priority"
    label = "Preemptive Priority Scheduling"

    def selection_key(self, job: Job) -> int:
        return job.priority


class RoundRobinPolicy(SchedulingPolicy):
    """
    Round Robin scheduling with a fixed time quantum.

    Each dispatch is its own slice, even when the same job is dispatched
    again right away. Jobs that arrive while a slice runs join the ready
    queue before the preempted job is put back at its tail.
    """

    name = "rr"
    label = "Round Robin (RR)"

    def __init__(self, quantum: int, unit_step: bool = False) -> None:
        if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
            raise ValidationError(f"Round Robin requires a positive integer quantum, got {quantum!r}")
        self._quantum = quantum
        self.unit_step = unit_step

    @property
    def quantum(self) -> int:
        return self._quantum

    def simulate(self, jobs: List[Job], timeline: Timeline) -> None:
        order = arrival_order(jobs)
        admitted = [False] * len(order)
        ready: Deque[Job] = deque()

        def admit_arrivals(now: int) -> None:
            for idx, job in enumerate(order):
                if not admitted[idx] and job.arrival_time <= now:
                    ready.append(job)
                    admitted[idx] = True

        clock = 0
        pending = len(order)

        while pending:
            admit_arrivals(clock)
            if not ready:
                if self.unit_step:
                    clock += 1
                else:
                    clock = min(j.arrival_time for idx, j in enumerate(order) if not admitted[idx])
                continue

            job = ready.popleft()
            run_time = min(job.remaining_time, self._quantum)

            timeline.append(job.pid, clock, clock + run_time)
            clock += run_time
            job.execute(run_time, clock)

            admit_arrivals(clock)

            if job.completed:
                pending -= 1
            else:
                ready.append(job)

    def __repr__(self) -> str:
        return f"RoundRobinPolicy(quantum={self._quantum}, unit_step={self.unit_step})"


ALGORITHMS: Dict[str, Type[SchedulingPolicy]] = {
    "fcfs": FCFSPolicy,
    "sjf": SJFPolicy,
    "priority": PriorityPolicy,
    "rr": RoundRobinPolicy,
}


def create_policy(name: str, quantum: Optional[int] = None) -> SchedulingPolicy:
    """
    Build the policy registered under ``name``; ``quantum`` is only used by
    Round Robin and is ignored by the others.
    """
    cls = ALGORITHMS.get(name.lower())
    if cls is None:
        raise ValidationError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")
    if cls is RoundRobinPolicy:
        return RoundRobinPolicy(quantum)
    return cls()


def run_fcfs(jobs: Iterable[Job]) -> ScheduleResult:
    return FCFSPolicy().run(jobs)


def run_sjf(jobs: Iterable[Job]) -> ScheduleResult:
    return SJFPolicy().run(jobs)


def run_priority(jobs: Iterable[Job]) -> ScheduleResult:
    return PriorityPolicy().run(jobs)


def run_round_robin(jobs: Iterable[Job], quantum: int) -> ScheduleResult:
    return RoundRobinPolicy(quantum).run(jobs)


def run_algorithm(name: str, jobs: Iterable[Job], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm by name.
    """
    return create_policy(name, quantum).run(jobs)
