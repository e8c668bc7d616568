# sizzling_slots/infrastructure/concurrency/thread_pool.py
import concurrent.futures
import logging
from typing import Any, Callable, List, Optional, TypeVar

T = TypeVar("T")


class ThreadPool:
    """Runs independent simulation batches on worker threads."""

    def __init__(self, max_workers: int = None):
        self.max_workers = max_workers
        self.logger = logging.getLogger("infrastructure.thread_pool")

    def execute_tasks(self, tasks: List[Callable[[], T]],
                      on_done: Optional[Callable[[int, int], Any]] = None) -> List[T]:
        """
        Run tasks concurrently and wait for all of them.

        Args:
            tasks: Zero-argument callables
            on_done: Called with (finished, total) as each task completes

        Returns:
            Results in submission order, whatever order the tasks finish in
        """
        total = len(tasks)
        self.logger.info(f"Running {total} batches on up to {self.max_workers or 'default'} threads")

        results: List[Optional[T]] = [None] * total
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers,
                                                   thread_name_prefix="slots-batch") as executor:
            index_of = {executor.submit(task): index for index, task in enumerate(tasks)}
            for finished, future in enumerate(concurrent.futures.as_completed(index_of), start=1):
                results[index_of[future]] = future.result()
                if on_done:
                    on_done(finished, total)
        return results
