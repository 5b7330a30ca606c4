#!/usr/bin/env python3
"""
Scheduler Config - Common module for worker pool settings read from environment variables
"""

import os
from typing import Optional

from scheduler import TaskScheduler

DEFAULT_WORKERS = 5
DEFAULT_OVERHEAD = 60


def _read_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from None


class SchedulerConfig:
    """Worker count and per-task overhead for a scheduling run"""

    def __init__(self, workers: int = DEFAULT_WORKERS, overhead: int = DEFAULT_OVERHEAD):
        if isinstance(workers, bool) or not isinstance(workers, int):
            raise ValueError(f"Worker count must be an integer, got {workers!r}")
        if isinstance(overhead, bool) or not isinstance(overhead, int):
            raise ValueError(f"Overhead must be an integer, got {overhead!r}")
        if workers < 1:
            raise ValueError(f"Worker count must be positive, got {workers}")
        if overhead < 0:
            raise ValueError(f"Overhead must be non-negative, got {overhead}")

        self.workers = workers
        self.overhead = overhead

    @classmethod
    def from_env(cls, prefix: Optional[str] = None) -> "SchedulerConfig":
        """Load settings from SCHEDULER_WORKERS / SCHEDULER_OVERHEAD, falling back to defaults"""
        prefix = prefix or "SCHEDULER"
        return cls(
            workers=_read_int(f"{prefix}_WORKERS", DEFAULT_WORKERS),
            overhead=_read_int(f"{prefix}_OVERHEAD", DEFAULT_OVERHEAD),
        )

    def create_scheduler(self) -> TaskScheduler:
        return TaskScheduler(num_workers=self.workers, overhead=self.overhead)

    def __repr__(self):
        return f"SchedulerConfig(workers={self.workers}, overhead={self.overhead})"
