"""
Deferred callbacks.

The controller never sleeps; it schedules a single-shot callback and may
cancel it on teardown or when a newer request supersedes it.
"""
import logging
import typing as t

from PySide6.QtCore import QTimer

logger = logging.getLogger(__name__)


class DeferredCall:
    """Interface for a cancellable single-shot callback."""

    def start(self, delay_ms: int, callback: t.Callable[[], None]) -> None:
        """Run ``callback`` once after ``delay_ms``, replacing any pending call."""
        raise NotImplementedError

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        raise NotImplementedError

    @property
    def is_pending(self) -> bool:
        raise NotImplementedError


class QtDeferredCall(DeferredCall):
    """DeferredCall backed by a single-shot QTimer on the Qt event loop."""

    def __init__(self):
        self._timer = None
        self._callback = None

    def start(self, delay_ms: int, callback: t.Callable[[], None]) -> None:
        # Cancel any existing timer
        self.cancel()

        self._callback = callback
        self._timer = QTimer()
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)
        self._timer.start(delay_ms)

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer.timeout.disconnect(self._fire)
            self._timer = None
        self._callback = None

    @property
    def is_pending(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def _fire(self):
        # the timer stays referenced; it is still emitting when this runs
        callback = self._callback
        self._callback = None
        if callback is not None:
            callback()
