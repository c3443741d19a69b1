from __future__ import annotations

from typing import Iterable, List, Sequence

from .errors import EmptyInputError, SchedulerError
from .models import Job, JobMetrics, MetricsSummary, SystemMetrics
from .timeline import Timeline


def compute_job_metrics(jobs: Iterable[Job], timeline: Timeline) -> List[JobMetrics]:
    """
    Derive per-job completion, turnaround and waiting time from a finished run.

    Every job must have completed; the result is ordered by pid.
    """
    metrics: List[JobMetrics] = []
    for job in sorted(jobs, key=lambda j: j.pid):
        if not job.completed or job.completion_time is None:
            raise SchedulerError(f"job {job.pid} has not completed; metrics are only defined after a full run")

        start_time = timeline.first_start(job.pid)
        if start_time is None:
            raise SchedulerError(f"job {job.pid} completed but never appears in the timeline")

        turnaround_time = job.completion_time - job.arrival_time
        metrics.append(
            JobMetrics(
                pid=job.pid,
                arrival_time=job.arrival_time,
                burst_time=job.burst_time,
                priority=job.priority,
                start_time=start_time,
                completion_time=job.completion_time,
                turnaround_time=turnaround_time,
                waiting_time=turnaround_time - job.burst_time,
                response_time=start_time - job.arrival_time,
            )
        )
    return metrics


def summarize_job_metrics(jobs: Sequence[JobMetrics]) -> MetricsSummary:
    """
    Return averages of the key per-job metrics for quick comparison.
    """
    if not jobs:
        raise EmptyInputError("cannot average metrics over an empty job set")

    n = len(jobs)
    return MetricsSummary(
        avg_waiting=sum(j.waiting_time for j in jobs) / n,
        avg_turnaround=sum(j.turnaround_time for j in jobs) / n,
        avg_response=sum(j.response_time for j in jobs) / n,
    )


def compute_system_metrics(timeline: Timeline, jobs: Sequence[JobMetrics]) -> SystemMetrics:
    """
    Compute throughput and CPU utilization from the timeline of a finished run.
    """
    makespan = max((j.completion_time for j in jobs), default=0)
    cpu_busy_time = timeline.busy_time

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=timeline.idle_time,
        makespan=makespan,
        throughput=len(jobs) / makespan if makespan > 0 else 0.0,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
        context_switches=timeline.context_switches,
    )
