#!/usr/bin/env python3
"""
Dependency Graph - Common module for resolving prerequisites between tasks
"""

from typing import Collection, Dict, Iterable, List, Sequence, Tuple

import networkx as nx

from worker import ALPHABET, base_duration


class DependencyGraph:
    """Prerequisite relationships among labelled tasks, built once from (prerequisite, dependent) pairs"""

    def __init__(self, pairs: Iterable[Tuple[str, str]], tasks: Iterable[str] = ()):
        self.graph = nx.DiGraph()
        self._prerequisites: Dict[str, List[str]] = {}

        # Standalone tasks may never show up in a pair
        for task in tasks:
            self.graph.add_node(task)

        for prerequisite, dependent in pairs:
            self.graph.add_edge(prerequisite, dependent)
            self._prerequisites.setdefault(dependent, []).append(prerequisite)

    @classmethod
    def build(cls, pairs: Iterable[Tuple[str, str]], tasks: Iterable[str] = ()) -> "DependencyGraph":
        return cls(pairs, tasks)

    @property
    def tasks(self) -> List[str]:
        """Every known label, sorted"""
        return sorted(self.graph.nodes)

    def prerequisites(self, task: str) -> List[str]:
        return list(self._prerequisites.get(task, []))

    def is_ready(self, task: str, done: Collection[str]) -> bool:
        """True if the task has no prerequisites or all of them are done"""
        return all(prereq in done for prereq in self._prerequisites.get(task, []))

    def is_valid_order(self, order: Sequence[str]) -> bool:
        """Check that every prerequisite appears strictly before its dependent"""
        position = {task: i for i, task in enumerate(order)}
        for prerequisite, dependent in self.graph.edges:
            if prerequisite not in position or dependent not in position:
                return False
            if position[prerequisite] >= position[dependent]:
                return False
        return True

    def critical_path(self, overhead: int = 0, alphabet: str = ALPHABET) -> Tuple[int, List[str]]:
        """
        Longest duration-weighted chain of tasks

        Args:
            overhead: Per-task overhead added to each base duration
            alphabet: Label alphabet used to derive durations

        Returns:
            Tuple of (critical_path_length, critical_path_tasks)
        """
        if self.graph.number_of_nodes() == 0:
            return 0, []

        # Earliest finish time of each task with unlimited workers
        finish: Dict[str, int] = {}
        for task in nx.lexicographical_topological_sort(self.graph):
            start = max((finish[p] for p in self.graph.predecessors(task)), default=0)
            finish[task] = start + base_duration(task, alphabet) + overhead

        # Walk back from the latest finisher; ties go to the smallest label
        current = max(sorted(finish), key=lambda t: finish[t])
        length = finish[current]
        path = [current]
        while True:
            predecessors = sorted(self.graph.predecessors(current))
            if not predecessors:
                break
            current = max(predecessors, key=lambda t: finish[t])
            path.append(current)

        path.reverse()
        return length, path

    def __len__(self):
        return self.graph.number_of_nodes()

    def __repr__(self):
        return f"DependencyGraph({len(self)} tasks, {self.graph.number_of_edges()} dependencies)"
