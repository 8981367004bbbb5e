"""Concurrency models used to run request and connection handlers."""

from __future__ import annotations

import queue
import threading
from typing import Callable, Protocol


class Runner(Protocol):
    """Anything that can start a function under some concurrency model."""

    def run(self, fn: Callable[[], object]) -> None: ...


class OnDemandRunner:
    """Start every function in a thread of its own."""

    def run(self, fn: Callable[[], object]) -> None:
        threading.Thread(target=fn, daemon=True).start()


class SequentialRunner:
    """Run every function in the caller's thread, one after another."""

    def run(self, fn: Callable[[], object]) -> None:
        fn()


_STOP = object()


class MultiRoutineRunner:
    """Run functions on a fixed pool of worker threads.

    Workers are started on the first call to run.
    """

    def __init__(self, num: int) -> None:
        if num <= 0:
            raise ValueError("number of routines must be positive")
        self._num = num
        self._queue: queue.Queue = queue.Queue(maxsize=num)
        self._workers: list[threading.Thread] = []
        self._lock = threading.Lock()
        self._closed = False

    def _start(self) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("runner is closed")
            if not self._workers:
                self._workers = [
                    threading.Thread(target=self._work, daemon=True)
                    for _ in range(self._num)
                ]
                for worker in self._workers:
                    worker.start()

    def _work(self) -> None:
        while True:
            fn = self._queue.get()
            if fn is _STOP:
                return
            fn()

    def run(self, fn: Callable[[], object]) -> None:
        """Queue a function for one of the workers; blocks while the queue is full."""
        self._start()
        self._queue.put(fn)

    def close(self) -> None:
        """Let queued functions finish and stop all workers."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            workers = self._workers
        for _ in workers:
            self._queue.put(_STOP)
        for worker in workers:
            worker.join()

    def __enter__(self) -> MultiRoutineRunner:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()