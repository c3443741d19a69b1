"""
Scheduling simulator package.

Computes execution timelines and per-job metrics for a fixed set of
CPU-bound jobs under FCFS, preemptive SJF, preemptive priority and
Round Robin scheduling, and compares the four side by side.
"""

from .algorithms import (
    FCFSPolicy,
    PriorityPolicy,
    RoundRobinPolicy,
    SchedulingPolicy,
    SJFPolicy,
    run_algorithm,
    run_fcfs,
    run_priority,
    run_round_robin,
    run_sjf,
)
from .compare import compare_all
from .errors import CapacityError, EmptyInputError, SchedulerError, ValidationError, WorkloadFormatError
from .models import ExecutionSlice, Job, JobMetrics, MetricsSummary, ScheduleResult, SystemMetrics
from .registry import JobRegistry
from .timeline import Timeline

__all__ = [
    "CapacityError",
    "EmptyInputError",
    "ExecutionSlice",
    "FCFSPolicy",
    "Job",
    "JobMetrics",
    "JobRegistry",
    "MetricsSummary",
    "PriorityPolicy",
    "RoundRobinPolicy",
    "SJFPolicy",
    "ScheduleResult",
    "SchedulerError",
    "SchedulingPolicy",
    "SystemMetrics",
    "Timeline",
    "ValidationError",
    "WorkloadFormatError",
    "compare_all",
    "run_algorithm",
    "run_fcfs",
    "run_priority",
    "run_round_robin",
    "run_sjf",
]
