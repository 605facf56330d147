"""
Tests for the background embedding sync worker.
"""
import threading
import time
from unittest.mock import Mock

import pytest

from core.exceptions import StoreUnavailableError
from core.matcher.embedding_store import InMemoryEmbeddingStore
from etl.embedding_lifecycle import EmbeddingLifecycleManager
from etl.embedding_worker import EmbeddingSyncWorker
from etl.events import CatalogEvent
from tests.mocks.embedding_mocks import FakeEmbeddingProvider, make_scholarship


@pytest.fixture
def store():
    return InMemoryEmbeddingStore()


@pytest.fixture
def provider():
    return FakeEmbeddingProvider()


@pytest.fixture
def worker(provider, store):
    worker = EmbeddingSyncWorker(EmbeddingLifecycleManager(provider, store))
    yield worker
    worker.stop()


class TestEmbeddingSyncWorker:

    def test_submit_starts_thread_and_applies_event(self, worker, store):
        assert worker.is_running is False

        assert worker.submit(CatalogEvent.created(make_scholarship("a"))) is True
        assert worker.drain(timeout=5) is True

        assert worker.is_running is True
        assert store.get("a") is not None
        assert worker.failures == []

    def test_events_applied_in_order(self, worker, store):
        worker.submit(CatalogEvent.created(make_scholarship("a")))
        worker.submit(CatalogEvent.deleted("a"))
        worker.submit(CatalogEvent.created(make_scholarship("b")))
        worker.drain(timeout=5)

        assert [r.id for r in store.list_all()] == ["b"]

    def test_provider_failure_recorded(self, store):
        on_failure = Mock()
        lifecycle = EmbeddingLifecycleManager(FakeEmbeddingProvider(fail=True), store)
        worker = EmbeddingSyncWorker(lifecycle, on_failure=on_failure)
        try:
            worker.submit(CatalogEvent.created(make_scholarship("a")))
            worker.drain(timeout=5)
        finally:
            worker.stop()

        failures = worker.failures
        assert len(failures) == 1
        assert failures[0].scholarship_id == "a"
        assert "no vector" in failures[0].error
        on_failure.assert_called_once_with(failures[0])
        assert store.list_all() == []

    def test_store_error_recorded(self, provider):
        store = Mock()
        store.put.side_effect = StoreUnavailableError("disk full")
        worker = EmbeddingSyncWorker(EmbeddingLifecycleManager(provider, store))
        try:
            worker.submit(CatalogEvent.created(make_scholarship("a")))
            worker.drain(timeout=5)
        finally:
            worker.stop()

        assert len(worker.failures) == 1
        assert "store unavailable" in worker.failures[0].error
        assert "disk full" in worker.failures[0].error

    def test_unexpected_error_keeps_worker_alive(self, worker, store):
        bad_lifecycle = Mock()
        bad_lifecycle.handle_event.side_effect = [RuntimeError("boom"), True]
        worker.lifecycle = bad_lifecycle

        worker.submit(CatalogEvent.deleted("a"))
        worker.submit(CatalogEvent.deleted("b"))
        worker.drain(timeout=5)

        assert worker.is_running is True
        assert len(worker.failures) == 1
        assert worker.failures[0].error == "RuntimeError: boom"
        assert bad_lifecycle.handle_event.call_count == 2

    def test_failing_callback_does_not_kill_worker(self, store):
        lifecycle = EmbeddingLifecycleManager(FakeEmbeddingProvider(fail=True), store)
        worker = EmbeddingSyncWorker(lifecycle, on_failure=Mock(side_effect=RuntimeError("callback")))
        try:
            worker.submit(CatalogEvent.created(make_scholarship("a")))
            worker.submit(CatalogEvent.created(make_scholarship("b")))
            assert worker.drain(timeout=5) is True
            assert worker.is_running is True
        finally:
            worker.stop()

        assert len(worker.failures) == 2

    def test_queue_full_recorded_as_failure(self, store):
        release = threading.Event()
        started = threading.Event()
        lifecycle = Mock()

        def _blocking(event):
            started.set()
            release.wait(5)
            return True

        lifecycle.handle_event.side_effect = _blocking
        worker = EmbeddingSyncWorker(lifecycle, max_queue_size=1)
        try:
            assert worker.submit(CatalogEvent.deleted("first")) is True
            assert started.wait(5)
            assert worker.submit(CatalogEvent.deleted("second")) is True
            assert worker.submit(CatalogEvent.deleted("third")) is False
        finally:
            release.set()
            worker.stop()

        assert [f.scholarship_id for f in worker.failures] == ["third"]
        assert worker.failures[0].error == "embedding queue is full"

    def test_failure_history_bounded(self, store):
        lifecycle = EmbeddingLifecycleManager(FakeEmbeddingProvider(fail=True), store)
        worker = EmbeddingSyncWorker(lifecycle, failure_history_size=2)
        try:
            for scholarship_id in ("a", "b", "c"):
                worker.submit(CatalogEvent.created(make_scholarship(scholarship_id)))
            worker.drain(timeout=5)
        finally:
            worker.stop()

        assert [f.scholarship_id for f in worker.failures] == ["b", "c"]

    def test_drain_times_out_while_busy(self):
        release = threading.Event()
        lifecycle = Mock()
        lifecycle.handle_event.side_effect = lambda event: release.wait(5)
        worker = EmbeddingSyncWorker(lifecycle)
        try:
            worker.submit(CatalogEvent.deleted("slow"))
            threads_before = threading.active_count()

            assert worker.drain(timeout=0.05) is False
            assert threading.active_count() == threads_before
        finally:
            release.set()
            worker.stop()

    def test_stop_finishes_queued_work(self, provider, store):
        worker = EmbeddingSyncWorker(EmbeddingLifecycleManager(provider, store))
        worker.submit(CatalogEvent.created(make_scholarship("a")))

        worker.stop()

        assert worker.is_running is False
        assert store.get("a") is not None

    def test_stop_without_start_is_noop(self, worker):
        worker.stop()
        assert worker.is_running is False

    def test_stop_on_full_queue_does_not_block_submit(self):
        release = threading.Event()
        started = threading.Event()
        lifecycle = Mock()

        def _blocking(event):
            started.set()
            release.wait(5)
            return True

        lifecycle.handle_event.side_effect = _blocking
        worker = EmbeddingSyncWorker(lifecycle, max_queue_size=1)
        worker.submit(CatalogEvent.deleted("busy"))
        assert started.wait(5)
        worker.submit(CatalogEvent.deleted("queued"))

        stopper = threading.Thread(target=worker.stop, kwargs={"timeout": 5})
        stopper.start()
        try:
            time.sleep(0.05)
            begin = time.monotonic()
            assert worker.submit(CatalogEvent.deleted("late")) is False
            assert time.monotonic() - begin < 1
        finally:
            release.set()
            stopper.join(5)

        assert worker.is_running is False
