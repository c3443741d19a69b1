"""
Side-by-side comparison of all four policies on one job set.

The comparison only collects numbers; it does not rank the policies.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .algorithms import SchedulingPolicy, create_policy
from .errors import EmptyInputError
from .models import Job, ScheduleResult

logger = logging.getLogger(__name__)

COMPARISON_ORDER = ("fcfs", "sjf", "priority", "rr")


def comparison_policies(quantum: int) -> List[SchedulingPolicy]:
    return [create_policy(name, quantum) for name in COMPARISON_ORDER]


def compare_all(jobs: Iterable[Job], quantum: int) -> Dict[str, ScheduleResult]:
    """
    Run FCFS, SJF, Priority and Round Robin, in that order, on the same jobs.

    Each run works on its own copy of the jobs. The quantum is validated
    and the empty case rejected before any policy runs.
    """
    policies = comparison_policies(quantum)
    snapshot = list(jobs)
    if not snapshot:
        raise EmptyInputError("no jobs to compare; register jobs first")

    results: Dict[str, ScheduleResult] = {}
    for policy in policies:
        results[policy.name] = policy.run(snapshot)

    logger.info(
        "Compared %d policies on %d jobs (quantum=%d)",
        len(results),
        len(snapshot),
        quantum,
    )
    return results
