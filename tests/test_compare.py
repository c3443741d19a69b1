import pytest

from schedsim.algorithms import RoundRobinPolicy, run_fcfs, run_priority, run_round_robin, run_sjf
from schedsim.compare import COMPARISON_ORDER, compare_all, comparison_policies
from schedsim.errors import EmptyInputError, ValidationError
from schedsim.registry import JobRegistry


def _jobs():
    registry = JobRegistry(capacity=10)
    registry.register(0, 5, 2)
    registry.register(1, 3, 1)
    registry.register(2, 8, 3)
    return registry


def test_runs_all_policies_in_fixed_order():
    results = compare_all(_jobs(), quantum=2)
    assert tuple(results) == COMPARISON_ORDER == ("fcfs", "sjf", "priority", "rr")
    assert results["rr"].quantum == 2


def test_results_match_individual_runs():
    registry = _jobs()
    results = compare_all(registry, quantum=2)

    assert results["fcfs"].jobs == run_fcfs(registry).jobs
    assert results["sjf"].jobs == run_sjf(registry).jobs
    assert results["priority"].jobs == run_priority(registry).jobs
    assert results["rr"].timeline == run_round_robin(registry, 2).timeline


def test_average_waiting_times():
    summaries = {name: result.summary for name, result in compare_all(_jobs(), quantum=2).items()}
    assert summaries["fcfs"].avg_waiting == pytest.approx(10 / 3)
    assert summaries["sjf"].avg_waiting == pytest.approx(3.0)
    assert summaries["priority"].avg_waiting == pytest.approx(3.0)
    assert summaries["rr"].avg_waiting == pytest.approx(6.0)
    assert summaries["rr"].avg_turnaround == pytest.approx(34 / 3)


def test_registry_untouched():
    registry = _jobs()
    compare_all(registry, quantum=1)
    assert all(j.remaining_time == j.burst_time and not j.completed for j in registry)


def test_empty_set_is_rejected():
    with pytest.raises(EmptyInputError):
        compare_all(JobRegistry(capacity=3), quantum=2)


def test_invalid_quantum_rejected():
    with pytest.raises(ValidationError):
        compare_all(_jobs(), quantum=0)


def test_comparison_policies_follow_order():
    policies = comparison_policies(5)
    assert tuple(p.name for p in policies) == COMPARISON_ORDER
    assert isinstance(policies[-1], RoundRobinPolicy)
    assert policies[-1].quantum == 5
