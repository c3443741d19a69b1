"""
Exception hierarchy for the scheduling engine.

Every failure the engine reports is a ``SchedulerError``. Bad numeric input
is additionally a ``ValueError`` so callers that only care about "was the
input wrong" can catch that.
"""


class SchedulerError(Exception):
    """Base class for all errors raised by schedsim."""


class ValidationError(SchedulerError, ValueError):
    """A numeric input, quantum or algorithm name was rejected."""


class CapacityError(ValidationError):
    """The job registry already holds its configured maximum of jobs."""


class EmptyInputError(SchedulerError):
    """A run or comparison was requested with no jobs to schedule."""


class WorkloadFormatError(ValidationError):
    """A workload file entry could not be turned into a job."""
