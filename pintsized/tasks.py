"""Tasks with dependencies run by a pool of worker threads."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Optional


class Task:
    """A callable unit of work that may depend on other tasks."""

    def __init__(self, function: Callable[[], object]) -> None:
        self._function = function
        self._executed = False
        self.dependencies: list[Task] = []
        self.dependents: list[Task] = []
        self.dependencies_count = 0

    def execute(self) -> None:
        self._function()
        self._executed = True

    def reset(self) -> None:
        self._executed = False

    def is_complete(self) -> bool:
        return self._executed

    def add_dependant(self, dependant: Task) -> None:
        self.dependents.append(dependant)

    def add_dependency(self, dependency: Task) -> None:
        """Make this task wait for ``dependency``."""
        self.dependencies.append(dependency)
        dependency.add_dependant(self)
        self.dependencies_count += 1


class TaskManager:
    """Dispatches registered tasks to worker threads once dependencies are met."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._tasks: list[Task] = []
        self._queue: deque[Task] = deque()
        self._graph: dict[Task, int] = {}
        self._threads: list[threading.Thread] = []
        self._should_stop = False

    @property
    def num_threads(self) -> int:
        return len(self._threads)

    def add_task(self, task: Task) -> None:
        with self._condition:
            self._tasks.append(task)

    def initialize(self, num_threads: int = 1) -> None:
        """Start ``num_threads`` worker threads."""
        if num_threads < 0:
            raise ValueError(f"thread count must not be negative, got {num_threads}")
        with self._condition:
            self._should_stop = False
        for index in range(num_threads):
            thread = threading.Thread(
                target=self._work, name=f"task-worker-{index}", daemon=True
            )
            thread.start()
            self._threads.append(thread)

    def _work(self) -> None:
        while True:
            task = self.next_task()
            if task is None:
                return
            if task.is_complete():
                continue
            task.execute()
            self._finish(task)

    def _finish(self, task: Task) -> None:
        with self._condition:
            for dependent in task.dependents:
                dependent.dependencies_count -= 1
                if (
                    dependent.dependencies_count == 0
                    and not dependent.is_complete()
                    and dependent in self._graph
                ):
                    self._queue.append(dependent)
            self._condition.notify_all()

    def next_task(self) -> Optional[Task]:
        """Block until a task is queued; return None once stopped and drained."""
        with self._condition:
            self._condition.wait_for(lambda: self._should_stop or bool(self._queue))
            if not self._queue:
                return None
            return self._queue.popleft()

    def reset_tasks(self) -> None:
        """Restore dependency counts and mark every task as not executed."""
        with self._condition:
            for task in self._tasks:
                task.dependencies_count = len(task.dependencies)
                task.reset()

    def build_task_graph(self) -> None:
        with self._condition:
            self._graph = {task: task.dependencies_count for task in self._tasks}

    def dispatch_tasks(self) -> None:
        """Queue every task in the graph that has no outstanding dependency."""
        with self._condition:
            self._queue.extend(task for task, count in self._graph.items() if count == 0)
            self._condition.notify_all()

    def update(self, delta_time: float) -> None:
        self.reset_tasks()
        self.build_task_graph()
        self.dispatch_tasks()

    def shutdown(self) -> None:
        """Stop the workers once the queue is drained and wait for them."""
        with self._condition:
            self._should_stop = True
            self._condition.notify_all()
        for thread in self._threads:
            thread.join()
        self._threads.clear()

    def __enter__(self) -> TaskManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()