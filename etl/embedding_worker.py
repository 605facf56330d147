#!/usr/bin/env python3
"""
Embedding sync worker - applies catalog events off the request path.

Catalog writes hand events to ``submit()`` and return immediately. A daemon
thread applies them through the lifecycle manager; failures land in a
bounded history and an optional callback instead of disappearing.
"""

import logging
import queue
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Deque, List, Optional

from core.exceptions import StoreUnavailableError
from etl.embedding_lifecycle import EmbeddingLifecycleManager
from etl.events import CatalogEvent

logger = logging.getLogger(__name__)

_STOP = object()


@dataclass
class EmbeddingTaskFailure:
    """A catalog event the worker could not apply."""
    event: CatalogEvent
    error: str
    failed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def scholarship_id(self) -> str:
        return self.event.scholarship_id


class EmbeddingSyncWorker:
    """Single background thread draining a queue of catalog events."""

    def __init__(
        self,
        lifecycle: EmbeddingLifecycleManager,
        max_queue_size: int = 1000,
        failure_history_size: int = 100,
        on_failure: Optional[Callable[[EmbeddingTaskFailure], None]] = None
    ):
        self.lifecycle = lifecycle
        self.on_failure = on_failure
        self._queue: "queue.Queue" = queue.Queue(maxsize=max_queue_size)
        self._failures: Deque[EmbeddingTaskFailure] = deque(maxlen=failure_history_size)
        self._failures_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._thread_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._thread_lock:
            if self.is_running:
                return
            self._thread = threading.Thread(
                target=self._run,
                name="embedding-sync-worker",
                daemon=True
            )
            self._thread.start()
            logger.info("Embedding sync worker started")

    def submit(self, event: CatalogEvent) -> bool:
        """
        Queue an event for background processing.

        Returns:
            False if the queue is full; the event is then recorded as a failure
        """
        self.start()
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            self._record_failure(event, "embedding queue is full")
            return False
        logger.debug(f"Queued {event.kind.value} event for scholarship {event.scholarship_id}")
        return True

    def drain(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every queued event has been processed.

        Returns:
            True if the queue emptied, False on timeout
        """
        if timeout is None:
            self._queue.join()
            return True

        deadline = time.monotonic() + timeout
        with self._queue.all_tasks_done:
            while self._queue.unfinished_tasks:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                self._queue.all_tasks_done.wait(remaining)
        return True

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Finish queued work and stop the thread."""
        with self._thread_lock:
            thread = self._thread
        if thread is None or not thread.is_alive():
            return
        # Outside the thread lock: a full queue must not stall submit()
        try:
            self._queue.put(_STOP, timeout=timeout)
        except queue.Full:
            logger.warning("Embedding sync worker queue stayed full, could not stop")
            return
        thread.join(timeout)
        if thread.is_alive():
            logger.warning("Embedding sync worker did not stop within timeout")
        else:
            logger.info("Embedding sync worker stopped")

    @property
    def failures(self) -> List[EmbeddingTaskFailure]:
        with self._failures_lock:
            return list(self._failures)

    def _record_failure(self, event: CatalogEvent, error: str) -> None:
        failure = EmbeddingTaskFailure(event=event, error=error)
        logger.error(
            f"Embedding task failed ({event.kind.value} {event.scholarship_id}): {error}"
        )
        with self._failures_lock:
            self._failures.append(failure)
        if self.on_failure is not None:
            try:
                self.on_failure(failure)
            except Exception as e:
                logger.exception(f"on_failure callback raised: {e}")

    def _process(self, event: CatalogEvent) -> None:
        try:
            if not self.lifecycle.handle_event(event):
                self._record_failure(event, "embedding provider returned no vector")
        except StoreUnavailableError as e:
            self._record_failure(event, f"store unavailable: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error applying {event.kind.value} event")
            self._record_failure(event, f"{type(e).__name__}: {e}")

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._process(item)
            finally:
                self._queue.task_done()
