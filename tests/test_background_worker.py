from __future__ import annotations

import threading
import time

from utils.background_worker import BackgroundWorker


def test_synchronous_worker_delivers_result_inline():
    worker = BackgroundWorker(synchronous=True)
    results = []

    worker.submit(lambda a, b: a + b, 2, 3, on_success=results.append)

    assert results == [5]


def test_synchronous_worker_delivers_error():
    worker = BackgroundWorker(synchronous=True)
    errors = []

    def fail():
        raise ValueError("bad csv")

    worker.submit(fail, on_success=lambda _r: errors.append("unexpected"), on_error=errors.append)

    assert len(errors) == 1
    assert isinstance(errors[0], ValueError)


def test_threaded_worker_marshals_callbacks_through_dispatch():
    delivered = threading.Event()
    dispatched = []

    def dispatch(callback, *args):
        dispatched.append(args)
        callback(*args)
        delivered.set()

    worker = BackgroundWorker(dispatch=dispatch)
    results = []
    worker.submit(lambda: "cards", on_success=results.append)

    assert delivered.wait(timeout=1.0)
    worker.shutdown()
    assert dispatched == [("cards",)]
    assert results == ["cards"]


def test_background_worker_is_stopped():
    worker = BackgroundWorker()

    assert not worker.is_stopped()

    worker.shutdown()

    assert worker.is_stopped()


def test_background_worker_context_manager():
    result = []

    with BackgroundWorker() as worker:
        worker.submit(result.append, 1)
        time.sleep(0.1)

    assert result == [1]
    assert worker.is_stopped()


def test_background_worker_shutdown_waits_for_threads():
    worker = BackgroundWorker()
    completed = []

    def slow_task():
        while not worker.is_stopped():
            time.sleep(0.05)
        completed.append(1)

    worker.submit(slow_task)
    time.sleep(0.1)

    worker.shutdown(timeout=2.0)

    assert completed == [1]


def test_background_worker_multiple_threads():
    worker = BackgroundWorker()
    results = []

    for value in (1, 2, 3):
        worker.submit(results.append, value)

    time.sleep(0.2)
    worker.shutdown()

    assert sorted(results) == [1, 2, 3]


def test_background_worker_shutdown_timeout():
    worker = BackgroundWorker()
    started = threading.Event()

    def blocking_task():
        started.set()
        while True:
            time.sleep(0.1)

    worker.submit(blocking_task)
    started.wait(timeout=1.0)

    worker.shutdown(timeout=0.2)

    assert worker.is_stopped()
