# sizzling_slots/infrastructure/concurrency/task_executor.py
import logging
from enum import Enum, auto
from typing import Any, Callable, List, Optional, TypeVar

from sizzling_slots.infrastructure.concurrency.thread_pool import ThreadPool

T = TypeVar("T")


class ExecutionMode(Enum):
    SEQUENTIAL = auto()
    MULTITHREAD = auto()


class TaskExecutor:
    """
    Runs a list of tasks either inline or on a thread pool.
    Both modes return results in the order the tasks were given.
    """
    def __init__(self, mode: ExecutionMode, max_workers: int = None):
        self.mode = mode
        self.max_workers = max_workers
        self.logger = logging.getLogger("infrastructure.task_executor")
        self.pool = ThreadPool(max_workers) if mode == ExecutionMode.MULTITHREAD else None

    def execute(self, tasks: List[Callable[[], T]]) -> List[T]:
        return self.execute_with_progress(tasks)

    def execute_with_progress(self, tasks: List[Callable[[], T]],
                              progress_callback: Optional[Callable[[int, int], Any]] = None) -> List[T]:
        self.logger.info(f"Executing {len(tasks)} tasks in {self.mode.name} mode")

        if self.pool is not None:
            return self.pool.execute_tasks(tasks, progress_callback)

        results = []
        for task in tasks:
            results.append(task())
            if progress_callback:
                progress_callback(len(results), len(tasks))
        return results
