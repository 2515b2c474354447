from __future__ import annotations

import asyncio
import logging
import typing as t

_logger = logging.getLogger(__name__)


class CleanupScheduler:
    """Repeating event-loop timer that runs a sweep every ``interval_seconds``.

    Each tick is a plain ``call_later`` callback, so it runs to completion
    between cache operations on the owning loop and never overlaps them.
    """

    def __init__(
        self,
        sweep: t.Callable[[], int],
        interval_seconds: float,
        *,
        name: str = "cache",
        loop: t.Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._sweep = sweep
        self._interval = float(interval_seconds)
        self._name = name
        self._configured_loop = loop
        self._loop: t.Optional[asyncio.AbstractEventLoop] = None
        self._handle: t.Optional[asyncio.TimerHandle] = None
        self.ticks = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Start (or restart) the timer on the configured or running loop.

        Raises RuntimeError when no loop was given and none is running.
        """
        self.stop()
        # resolved on every start so a restart on a new loop never reuses a closed one
        loop = self._configured_loop or asyncio.get_running_loop()
        self._loop = loop
        self._handle = loop.call_later(self._interval, self._tick)
        _logger.info("Cleanup scheduler started for %s (interval=%.3fs)", self._name, self._interval)

    def stop(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        self._loop = None
        _logger.info("Cleanup scheduler stopped for %s", self._name)

    def _tick(self) -> None:
        try:
            self.ticks += 1
            removed = self._sweep()
            if removed:
                _logger.debug("Scheduled sweep of %s removed %d entries", self._name, removed)
        finally:
            # the sweep may have stopped us; only re-arm if still running
            if self._handle is not None and self._loop is not None:
                self._handle = self._loop.call_later(self._interval, self._tick)
