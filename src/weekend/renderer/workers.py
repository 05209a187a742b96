# renderer/workers.py
import os


def physical_core_count() -> int:
    """Number of render workers to launch by default (at least one)."""
    return os.cpu_count() or 1


def rows_for_worker(worker_id: int, worker_count: int, height: int) -> range:
    """
    Canvas rows owned by one worker: every worker_count-th row starting at
    worker_id. Over all ids in [0, worker_count) the ranges cover every row
    exactly once.
    """
    return range(worker_id, height, worker_count)
