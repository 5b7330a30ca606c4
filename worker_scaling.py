#!/usr/bin/env python3
"""
Worker Scaling Analysis - Compares elapsed ticks against lower bounds for each pool size
"""

import logging
import math
from typing import Dict, Iterable, List, Tuple

import matplotlib
import matplotlib.pyplot as plt
import numpy as np

from dependency_graph import DependencyGraph
from scheduler import TaskScheduler
from worker import ALPHABET, base_duration

matplotlib.use("Agg")


def analyze_worker_scaling(
    pairs: Iterable[Tuple[str, str]],
    overhead: int,
    max_workers: int,
    tasks: Iterable[str] = (),
    alphabet: str = ALPHABET,
) -> List[Dict]:
    """
    Run the scheduler for every pool size from 1 to max_workers

    Each result carries the simulated elapsed time and the lower bound no
    schedule can beat: the longer of the critical path and the total effort
    spread evenly across the pool.
    """
    if max_workers < 1:
        raise ValueError(f"Maximum worker count must be positive, got {max_workers}")

    pairs = list(pairs)
    tasks = list(tasks)
    graph = DependencyGraph.build(pairs, tasks)
    total_effort = sum(base_duration(task, alphabet) + overhead for task in graph.tasks)
    critical_path_length, _ = graph.critical_path(overhead, alphabet)

    results = []
    for num_workers in range(1, max_workers + 1):
        logging.info(f"Simulating with {num_workers} workers...")

        scheduler = TaskScheduler(num_workers, overhead, alphabet)
        run = scheduler.run(pairs, tasks)
        utilization = scheduler.get_worker_utilization()

        effort_bound = math.ceil(total_effort / num_workers)
        result = {
            "workers": num_workers,
            "elapsed": run.elapsed,
            "order": run.order,
            "total_effort": total_effort,
            "effort_bound": effort_bound,
            "lower_bound": max(effort_bound, critical_path_length),
            "avg_utilization": float(np.mean(utilization)),
            "max_utilization": max(utilization),
            "efficiency": total_effort / (num_workers * run.elapsed) if run.elapsed > 0 else 0,
        }
        results.append(result)

        logging.debug(
            f"  Elapsed: {result['elapsed']} ticks (bound {result['lower_bound']}), "
            f"Avg Util: {result['avg_utilization']:.1f}%"
        )

    return results


def find_optimal_worker_count(results: List[Dict], critical_path_length: int) -> Dict:
    """
    Pick the smallest pool that reaches the best elapsed time seen

    Greedy assignment is not monotone in general, so a larger pool can be
    slower than a smaller one; such steps are reported as anomalies and never
    chosen over the smaller pool.
    """
    if not results:
        return {
            "optimal_workers": None,
            "best_elapsed": 0,
            "critical_path_length": critical_path_length,
            "reaches_critical_path": True,
            "anomalies": [],
        }

    best_elapsed = min(r["elapsed"] for r in results)
    optimal = next(r for r in results if r["elapsed"] == best_elapsed)

    anomalies = [
        {"from_workers": prev["workers"], "to_workers": curr["workers"],
         "slowdown": curr["elapsed"] - prev["elapsed"]}
        for prev, curr in zip(results, results[1:])
        if curr["elapsed"] > prev["elapsed"]
    ]
    for anomaly in anomalies:
        logging.warning(
            f"Adding a worker ({anomaly['from_workers']} -> {anomaly['to_workers']}) "
            f"slowed the run by {anomaly['slowdown']} ticks"
        )

    return {
        "optimal_workers": optimal["workers"],
        "best_elapsed": best_elapsed,
        "critical_path_length": critical_path_length,
        # Extra workers cannot help once the critical path is the bottleneck
        "reaches_critical_path": best_elapsed <= critical_path_length,
        "anomalies": anomalies,
    }


def generate_scaling_chart(results: List[Dict], analysis: Dict, output_file: str) -> None:
    """Plot simulated elapsed ticks and their lower bounds against pool size"""
    workers = [r["workers"] for r in results]
    by_workers = {r["workers"]: r for r in results}

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(workers, [r["elapsed"] for r in results], "b-o", label="Simulated")
    ax.step(
        workers, [r["effort_bound"] for r in results], "g--", where="mid",
        label="ceil(effort / workers)",
    )
    ax.axhline(
        y=analysis["critical_path_length"], color="r", linestyle=":",
        label=f"Critical path ({analysis['critical_path_length']} ticks)",
    )

    for anomaly in analysis["anomalies"]:
        slower = by_workers[anomaly["to_workers"]]
        ax.plot(slower["workers"], slower["elapsed"], "kx", markersize=12)

    optimal = analysis["optimal_workers"]
    if optimal in by_workers:
        ax.plot(optimal, by_workers[optimal]["elapsed"], "ro", markersize=10,
                label=f"Smallest best pool ({optimal})")

    ax.set_xlabel("Workers")
    ax.set_ylabel("Elapsed ticks")
    ax.set_xticks(workers)
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.savefig(output_file, dpi=100, bbox_inches="tight")
    plt.close(fig)

    logging.info(f"Scaling chart saved to: {output_file}")
