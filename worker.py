#!/usr/bin/env python3
"""
Worker - Common module modelling one unit of processing capacity
"""

import string
from typing import Optional

ALPHABET = string.ascii_uppercase


def base_duration(label: str, alphabet: str = ALPHABET) -> int:
    """Intrinsic duration of a task: its position in the alphabet plus one (A=1, B=2, ...)"""
    if len(label) != 1 or label not in alphabet:
        raise ValueError(f"Task label must be one of {alphabet!r}, got {label!r}")
    return alphabet.index(label) + 1


class Worker:
    """A single worker slot, either idle or busy with one task"""

    def __init__(self, alphabet: str = ALPHABET):
        self.alphabet = alphabet
        self.task: Optional[str] = None
        self.remaining_time = 0

    def assign(self, task: str, overhead: int) -> None:
        """Start working on a task. The worker must be idle."""
        assert not self.is_busy(), f"Worker already busy with {self.task}, cannot assign {task}"
        self.remaining_time = base_duration(task, self.alphabet) + overhead
        self.task = task

    def is_busy(self) -> bool:
        return self.task is not None

    def advance(self, elapsed_units: int) -> Optional[str]:
        """
        Work for the given number of time units.

        Returns the task if it was completed during this step, otherwise None.
        """
        if elapsed_units < 0:
            raise ValueError(f"Elapsed units must be non-negative, got {elapsed_units}")

        if self.remaining_time <= elapsed_units:
            completed = self.task
            self.task = None
            self.remaining_time = 0
            return completed

        self.remaining_time -= elapsed_units
        return None

    def __repr__(self):
        if self.task is None:
            return "Worker(idle)"
        return f"Worker({self.task}, remaining={self.remaining_time})"
