"""
Session-wide job registry.

The registry owns the static attributes of every job. Policy runs never
mutate it: each run takes its own reset copy of the jobs.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple

from . import config
from .errors import CapacityError, ValidationError
from .models import Job

logger = logging.getLogger(__name__)


class JobRegistry:
    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is None:
            capacity = config.settings.MAX_JOBS
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ValidationError(f"capacity must be a positive integer, got {capacity!r}")

        self._capacity = capacity
        self._jobs: List[Job] = []
        self._next_pid = 1

    def register(self, arrival_time: int, burst_time: int, priority: int = 0) -> Job:
        """
        Validate and store a new job, assigning it the next sequential pid.

        Registration order is the tie-break order used by every policy.
        Nothing is stored when validation fails.
        """
        if self.is_full:
            logger.warning("Rejected job: registry is at capacity (%d)", self._capacity)
            raise CapacityError(f"maximum job limit reached ({self._capacity})")

        try:
            job = Job(pid=self._next_pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)
        except ValidationError as exc:
            logger.warning("Rejected job: %s", exc)
            raise

        self._jobs.append(job)
        self._next_pid += 1
        logger.info(
            "Registered job %d (arrival=%d, burst=%d, priority=%d)",
            job.pid,
            job.arrival_time,
            job.burst_time,
            job.priority,
        )
        return job

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._jobs) >= self._capacity

    @property
    def jobs(self) -> Tuple[Job, ...]:
        return tuple(self._jobs)

    def get(self, pid: int) -> Optional[Job]:
        for job in self._jobs:
            if job.pid == pid:
                return job
        return None

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(self._jobs)
