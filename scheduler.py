#!/usr/bin/env python3
"""
Task Scheduler - Common module for simulating tasks across a pool of workers
"""

import logging
from typing import Dict, Iterable, List, Set, Tuple

from dependency_graph import DependencyGraph
from worker import ALPHABET, Worker


class ScheduleResult:
    """Outcome of a scheduling run"""

    def __init__(
        self,
        order: str,
        elapsed: int,
        start_times: Dict[str, int],
        end_times: Dict[str, int],
        worker_schedules: List[List[Dict]],
    ):
        self.order = order
        self.elapsed = elapsed
        self.start_times = start_times
        self.end_times = end_times
        self.worker_schedules = worker_schedules

    def __iter__(self):
        # Allows `order, elapsed = scheduler.run(pairs)`
        return iter((self.order, self.elapsed))

    def __eq__(self, other):
        if not isinstance(other, ScheduleResult):
            return NotImplemented
        return (self.order, self.elapsed) == (other.order, other.elapsed)

    def __repr__(self):
        return f"ScheduleResult(order={self.order!r}, elapsed={self.elapsed})"


class TaskScheduler:
    """Schedules tasks across a fixed pool of workers, one tick at a time, with dependency constraints"""

    def __init__(self, num_workers: int, overhead: int = 0, alphabet: str = ALPHABET):
        if num_workers < 1:
            raise ValueError(f"Worker count must be positive, got {num_workers}")
        if overhead < 0:
            raise ValueError(f"Overhead must be non-negative, got {overhead}")

        self.num_workers = num_workers
        self.overhead = overhead
        self.alphabet = alphabet
        self._reset()

    def _reset(self) -> None:
        self.workers: List[Worker] = [Worker(self.alphabet) for _ in range(self.num_workers)]
        self.available: Set[str] = set()
        self.done: List[str] = []
        self.elapsed = 0
        self.task_start_times: Dict[str, int] = {}
        self.task_end_times: Dict[str, int] = {}
        self.worker_schedules: List[List[Dict]] = [[] for _ in range(self.num_workers)]

    def run(self, pairs: Iterable[Tuple[str, str]], tasks: Iterable[str] = ()) -> ScheduleResult:
        """
        Simulate the workers until every task is done

        Args:
            pairs: (prerequisite, dependent) pairs; must be acyclic or the run never ends
            tasks: Extra standalone tasks that appear in no pair

        Returns:
            ScheduleResult with the completion order and total elapsed ticks
        """
        graph = DependencyGraph.build(pairs, tasks)
        self._reset()
        self.available = set(graph.tasks)

        logging.debug(
            f"Scheduling {len(self.available)} tasks across {self.num_workers} workers "
            f"(overhead {self.overhead})"
        )

        while self.available or any(worker.is_busy() for worker in self.workers):
            self._tick(graph)

        logging.info(
            f"Completed {len(self.done)} tasks in {self.elapsed} ticks "
            f"with {self.num_workers} workers: {''.join(self.done)}"
        )

        return ScheduleResult(
            order="".join(self.done),
            elapsed=self.elapsed,
            start_times=dict(self.task_start_times),
            end_times=dict(self.task_end_times),
            worker_schedules=[list(schedule) for schedule in self.worker_schedules],
        )

    def _tick(self, graph: DependencyGraph) -> None:
        """Advance the simulation by one time unit"""
        done_set = set(self.done)

        # Determine work available, smallest label first
        ready = sorted(task for task in self.available if graph.is_ready(task, done_set))

        # Assign work in worker order
        for index, worker in enumerate(self.workers):
            if not ready:
                break
            if worker.is_busy():
                continue
            task = ready.pop(0)
            worker.assign(task, self.overhead)
            self.available.remove(task)
            self.task_start_times[task] = self.elapsed
            logging.debug(f"[{self.elapsed}] Worker {index}: started {task}")

        # Do work; completions within a tick are ordered by worker index
        for index, worker in enumerate(self.workers):
            completed = worker.advance(1)
            if completed is None:
                continue
            self.done.append(completed)
            end = self.elapsed + 1
            start = self.task_start_times[completed]
            self.task_end_times[completed] = end
            self.worker_schedules[index].append(
                {"task": completed, "start": start, "end": end, "duration": end - start}
            )
            logging.debug(f"[{self.elapsed}] Worker {index}: completed {completed}")

        self.elapsed += 1

    def get_project_duration(self) -> int:
        """Get total elapsed ticks of the last run"""
        return self.elapsed

    def get_worker_utilization(self) -> List[float]:
        """Get utilization percentage for each worker over the last run"""
        total_duration = self.get_project_duration()
        if total_duration == 0:
            return [0.0] * self.num_workers

        return [
            sum(entry["duration"] for entry in schedule) / total_duration * 100
            for schedule in self.worker_schedules
        ]


def build_order(pairs: Iterable[Tuple[str, str]], tasks: Iterable[str] = ()) -> str:
    """Order in which a single worker without overhead completes the tasks"""
    return TaskScheduler(num_workers=1, overhead=0).run(pairs, tasks).order


def completion_time(
    pairs: Iterable[Tuple[str, str]], num_workers: int, overhead: int, tasks: Iterable[str] = ()
) -> int:
    """Total ticks for a pool of workers to complete every task"""
    return TaskScheduler(num_workers, overhead).run(pairs, tasks).elapsed
