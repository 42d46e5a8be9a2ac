"""A single background thread running a loop until asked to stop."""

from __future__ import annotations

import threading
from typing import Callable, Optional

_MAX_THREAD_NAME = 15


class ThreadWorker:
    """Runs ``work(should_run)`` on a thread; ``should_run`` is cleared on stop."""

    def __init__(self, work: Callable[[threading.Event], object]) -> None:
        self._work = work
        self._should_run = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def should_run(self) -> bool:
        return self._should_run.is_set()

    def thread_running(self) -> bool:
        return self._thread is not None

    def start_thread(self, name: object) -> None:
        if self.thread_running():
            raise RuntimeError("Attempted to start thread when it's already running!")
        name = str(name)
        thread_name: Optional[str] = name
        if len(name) > _MAX_THREAD_NAME:
            print(f'The name "{name}" is too long!')
            thread_name = None
        self._should_run.set()
        self._thread = threading.Thread(
            target=self._work, args=(self._should_run,), name=thread_name, daemon=True
        )
        self._thread.start()

    def stop_thread(self) -> None:
        if self._thread is None:
            raise RuntimeError("Attempted to stop thread that is not running!")
        self._should_run.clear()
        thread, self._thread = self._thread, None
        thread.join()