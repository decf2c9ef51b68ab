from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from loguru import logger

__all__ = ["BackgroundWorker", "call_on_ui_thread"]


def call_on_ui_thread(callback: Callable[..., Any], *args: Any) -> None:
    """Marshal callback to the wx main loop when wx is importable, otherwise call directly."""
    try:
        import wx
    except ImportError:
        callback(*args)
        return
    wx.CallAfter(callback, *args)


class BackgroundWorker:
    """Runs slow collection work (CSV import, relation scans, image copies) off the UI thread.

    Results and errors are handed back through ``dispatch`` which defaults to
    ``wx.CallAfter``. Passing ``synchronous=True`` runs tasks inline, which the
    controller tests rely on.
    """

    def __init__(
        self,
        dispatch: Callable[..., None] | None = None,
        synchronous: bool = False,
    ) -> None:
        self._dispatch = dispatch or call_on_ui_thread
        self._synchronous = synchronous
        self._stop_event = threading.Event()
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()

    def submit(
        self,
        func: Callable[..., Any],
        *args: Any,
        on_success: Callable[[Any], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
        **kwargs: Any,
    ) -> None:
        """Submit a task.

        Args:
            func: The function to execute
            *args: Positional arguments for func
            on_success: Optional callback receiving the result (marshaled to UI thread)
            on_error: Optional callback receiving the exception (marshaled to UI thread)
            **kwargs: Keyword arguments for func
        """

        def wrapper():
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.exception(f"Background task {getattr(func, '__name__', func)} failed: {exc}")
                if on_error:
                    self._deliver(on_error, exc)
                return

            if on_success:
                self._deliver(on_success, result)

        if self._synchronous:
            wrapper()
            return

        thread = threading.Thread(target=wrapper, daemon=True)
        with self._lock:
            self._threads = [t for t in self._threads if t.is_alive()]
            self._threads.append(thread)
        thread.start()
        logger.debug(f"Started background thread: {getattr(func, '__name__', func)}")

    def _deliver(self, callback: Callable, *args: Any) -> None:
        if self._synchronous:
            callback(*args)
        else:
            self._dispatch(callback, *args)

    def __enter__(self) -> BackgroundWorker:
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.shutdown()

    def is_stopped(self) -> bool:
        """Check if the worker has been stopped."""
        return self._stop_event.is_set()

    def shutdown(self, timeout: float = 5.0) -> None:
        """Signal all threads to stop and wait for them to finish."""
        self._stop_event.set()

        with self._lock:
            threads = list(self._threads)

        for thread in threads:
            if thread.is_alive():
                thread.join(timeout=timeout)
                if thread.is_alive():
                    logger.warning(f"Thread {thread.name} did not finish within {timeout}s")

        logger.debug("Background worker shutdown complete")
