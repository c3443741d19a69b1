from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Mapping, Optional

from .errors import CapacityError, ValidationError, WorkloadFormatError
from .models import validate_job_fields
from .registry import JobRegistry

logger = logging.getLogger(__name__)


def load_workload(path: str | Path, registry: Optional[JobRegistry] = None) -> JobRegistry:
    """
    Load jobs from a JSON or CSV file and register them in file order.

    Pids are assigned by the registry, so any ``pid`` field in the file is
    ignored. A new registry is created when none is given.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        entries = _load_json(path)
    elif suffix == ".csv":
        entries = _load_csv(path)
    else:
        raise WorkloadFormatError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    if registry is None:
        registry = JobRegistry()

    # Validate the whole file first so a bad entry registers nothing.
    rows = [_fields_from_mapping(entry) for entry in entries]
    for entry, row in zip(entries, rows):
        try:
            validate_job_fields(*row)
        except ValidationError as exc:
            raise WorkloadFormatError(f"Invalid job entry {entry!r}: {exc}") from exc
    if len(registry) + len(rows) > registry.capacity:
        raise CapacityError(
            f"{path} holds {len(rows)} jobs but the registry has room for {registry.capacity - len(registry)}"
        )

    for arrival_time, burst_time, priority in rows:
        registry.register(arrival_time, burst_time, priority)

    logger.info("Loaded %d jobs from %s", len(entries), path)
    return registry


def _load_json(path: Path) -> List[Mapping]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadFormatError(f"Invalid JSON in {path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise WorkloadFormatError(f"{path} is not valid UTF-8: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON workload must be a list of job objects")
    return raw


def _load_csv(path: Path) -> List[Mapping]:
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            return list(csv.DictReader(f))
        except UnicodeDecodeError as exc:
            raise WorkloadFormatError(f"{path} is not valid UTF-8: {exc}") from exc


def _int_field(mapping, key: str, default: Optional[int] = None):
    # CSV cells arrive as text; JSON values are passed through untouched so
    # floats and booleans are rejected by validation instead of truncated.
    value = mapping.get(key) if default is not None else mapping[key]
    if value is None or value == "":
        if default is None:
            raise ValueError(f"missing {key}")
        return default
    if isinstance(value, str):
        return int(value.strip())
    return value


def _fields_from_mapping(mapping) -> tuple:
    try:
        return (
            _int_field(mapping, "arrival_time"),
            _int_field(mapping, "burst_time"),
            _int_field(mapping, "priority", default=0),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadFormatError(f"Invalid job entry: {mapping!r}") from exc
