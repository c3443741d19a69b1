from pathlib import Path

import pytest

from schedsim.errors import CapacityError, ValidationError, WorkloadFormatError
from schedsim.models import Job
from schedsim.registry import JobRegistry
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    registry = load_workload(p)
    jobs = registry.jobs
    assert isinstance(jobs[0], Job)
    assert [j.pid for j in jobs] == [1, 2]
    assert jobs[1].priority == 0
    assert jobs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time,priority\n0,3,1\n1,2,\n")
    registry = load_workload(p)
    assert registry.get(1).burst_time == 3
    assert registry.get(2).priority == 0


def test_appends_to_existing_registry(tmp_path: Path):
    registry = JobRegistry(capacity=5)
    registry.register(0, 1, 0)
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n4,2\n")

    assert load_workload(p, registry) is registry
    assert registry.get(2).arrival_time == 4


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("0 3 1\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


@pytest.mark.parametrize(
    "content",
    [
        '{"arrival_time": 0, "burst_time": 3}',
        '[{"arrival_time": 0}]',
        '[{"arrival_time": "soon", "burst_time": 3}]',
        '[{"arrival_time": 1.9, "burst_time": 3}]',
        '[{"arrival_time": 0, "burst_time": 2.5}]',
        '[{"arrival_time": 0, "burst_time": 3, "priority": true}]',
        '[{"arrival_time": 0, "burst_time": 3, "priority": "high"}]',
        '["0,3,1"]',
        "[not json",
    ],
)
def test_malformed_json(tmp_path: Path, content):
    p = tmp_path / "w.json"
    p.write_text(content)
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_bad_entry_registers_nothing(tmp_path: Path):
    registry = JobRegistry(capacity=5)
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time,priority\n0,3,1\n2,0,1\n")

    with pytest.raises(WorkloadFormatError) as excinfo:
        load_workload(p, registry)
    assert isinstance(excinfo.value, ValidationError)
    assert len(registry) == 0


def test_capacity_checked_before_registering(tmp_path: Path):
    registry = JobRegistry(capacity=2)
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time\n0,1\n0,1\n0,1\n")

    with pytest.raises(CapacityError):
        load_workload(p, registry)
    assert len(registry) == 0


def test_json_numbers_are_not_truncated(tmp_path: Path):
    registry = JobRegistry(capacity=5)
    p = tmp_path / "w.json"
    p.write_text('[{"arrival_time": 1.9, "burst_time": 2.5, "priority": true}]')

    with pytest.raises(WorkloadFormatError):
        load_workload(p, registry)
    assert len(registry) == 0


def test_csv_cells_with_whitespace(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("arrival_time,burst_time,priority\n 2 , 4 , 1 \n")
    job = load_workload(p).get(1)
    assert (job.arrival_time, job.burst_time, job.priority) == (2, 4, 1)


@pytest.mark.parametrize("suffix", [".json", ".csv"])
def test_non_utf8_file(tmp_path: Path, suffix):
    p = tmp_path / f"w{suffix}"
    p.write_bytes(b"arrival_time,burst_time\n\xff\xfe0,3\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)
