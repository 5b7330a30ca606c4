"""Tests for worker_scaling module."""

import logging

import matplotlib
import pytest

from worker_scaling import analyze_worker_scaling, find_optimal_worker_count, generate_scaling_chart


@pytest.fixture
def scaling_results(sample_pairs):
    return analyze_worker_scaling(sample_pairs, overhead=0, max_workers=4)


class TestAnalyzeWorkerScaling:
    def test_one_result_per_pool_size(self, scaling_results):
        assert [r["workers"] for r in scaling_results] == [1, 2, 3, 4]

    def test_elapsed(self, scaling_results):
        assert [r["elapsed"] for r in scaling_results] == [21, 15, 14, 14]

    def test_solo_order(self, scaling_results):
        assert scaling_results[0]["order"] == "CABDFE"

    def test_effort_and_efficiency(self, scaling_results):
        solo = scaling_results[0]
        assert solo["total_effort"] == 21
        assert solo["efficiency"] == pytest.approx(1.0)
        assert solo["avg_utilization"] == pytest.approx(100.0)

        pair = scaling_results[1]
        assert pair["efficiency"] == pytest.approx(21 / 30)
        assert pair["avg_utilization"] == pytest.approx(70.0)
        assert pair["max_utilization"] == pytest.approx(100.0)

    def test_overhead_counts_as_effort(self, sample_pairs):
        results = analyze_worker_scaling(sample_pairs, overhead=10, max_workers=1)
        assert results[0]["total_effort"] == 21 + 60
        assert results[0]["elapsed"] == 81

    def test_empty_input(self):
        results = analyze_worker_scaling([], overhead=0, max_workers=2)
        assert [r["elapsed"] for r in results] == [0, 0]
        assert all(r["efficiency"] == 0 for r in results)

    def test_invalid_max_workers(self, sample_pairs):
        with pytest.raises(ValueError, match="Maximum worker count must be positive"):
            analyze_worker_scaling(sample_pairs, overhead=0, max_workers=0)

    def test_lower_bounds(self, scaling_results):
        assert [r["effort_bound"] for r in scaling_results] == [21, 11, 7, 6]
        # The critical path (C -> F -> E, 14 ticks) dominates from two workers on
        assert [r["lower_bound"] for r in scaling_results] == [21, 14, 14, 14]
        assert all(r["elapsed"] >= r["lower_bound"] for r in scaling_results)

    def test_custom_alphabet(self):
        results = analyze_worker_scaling([("a", "b")], overhead=0, max_workers=1, alphabet="ab")
        assert results[0]["total_effort"] == 3
        assert results[0]["elapsed"] == 3
        assert results[0]["order"] == "ab"


class TestFindOptimalWorkerCount:
    def test_smallest_pool_reaching_best(self, scaling_results):
        analysis = find_optimal_worker_count(scaling_results, critical_path_length=14)

        assert analysis["optimal_workers"] == 3
        assert analysis["best_elapsed"] == 14
        assert analysis["reaches_critical_path"]
        assert analysis["anomalies"] == []

    def test_slower_larger_pool(self, caplog):
        """A pool that got slower is reported and not preferred."""
        results = [
            {"workers": 1, "elapsed": 10},
            {"workers": 2, "elapsed": 8},
            {"workers": 3, "elapsed": 9},
            {"workers": 4, "elapsed": 8},
        ]
        with caplog.at_level(logging.WARNING):
            analysis = find_optimal_worker_count(results, critical_path_length=5)

        assert analysis["optimal_workers"] == 2
        assert analysis["anomalies"] == [{"from_workers": 2, "to_workers": 3, "slowdown": 1}]
        assert not analysis["reaches_critical_path"]
        assert "slowed the run by 1 ticks" in caplog.text

    def test_no_results(self):
        analysis = find_optimal_worker_count([], critical_path_length=0)
        assert analysis["optimal_workers"] is None
        assert analysis["anomalies"] == []


def test_generate_scaling_chart(tmp_path, scaling_results):
    analysis = find_optimal_worker_count(scaling_results, critical_path_length=14)
    output_file = tmp_path / "scaling.png"

    generate_scaling_chart(scaling_results, analysis, str(output_file))

    assert output_file.exists()
    assert output_file.stat().st_size > 0


def test_generate_scaling_chart_marks_anomalies(tmp_path):
    results = [
        {"workers": 1, "elapsed": 10, "effort_bound": 10},
        {"workers": 2, "elapsed": 8, "effort_bound": 5},
        {"workers": 3, "elapsed": 9, "effort_bound": 4},
    ]
    analysis = find_optimal_worker_count(results, critical_path_length=6)
    output_file = tmp_path / "anomalies.png"

    generate_scaling_chart(results, analysis, str(output_file))

    assert output_file.exists()


def test_agg_backend():
    assert matplotlib.get_backend().lower() == "agg"
