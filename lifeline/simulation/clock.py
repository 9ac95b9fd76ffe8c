"""Periodic driver for simulation ticks.

The clock owns the engine's single execution context. While it runs, a
worker thread alternates between pending mutation commands and ticks, so a
command never interleaves with a tick. Callers on other threads hand their
mutations over with ``submit`` and get a Future back.
"""

import logging
import math
import queue
import threading
import time
from concurrent.futures import Future
from typing import Any, Callable

from .engine import SimulationEngine

logger = logging.getLogger(__name__)

_STOP = object()


class SimulationClock:
    """Drives ``engine.tick()`` at a fixed period.

    Ticks that overrun the period cause the missed periods to be skipped,
    never queued.
    """

    def __init__(self, engine: SimulationEngine, period: float | None = None):
        """Initialize a stopped clock.

        Args:
            engine: The engine to drive.
            period: Seconds between ticks. Defaults to the engine's
                ``settings.tick_period``.
        """
        if period is None:
            period = engine.settings.tick_period
        if period <= 0:
            raise ValueError(f"Tick period must be positive, got {period}")

        self.engine = engine
        self.period = period
        self.ticks_skipped = 0
        self._commands: queue.Queue = queue.Queue()
        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._stop_requested = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._running.is_set()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Start ticking on a background thread. No-op if already running."""
        if self._thread is not None:
            return

        self._stop_requested.clear()
        self._running.set()
        self._thread = threading.Thread(
            target=self._run, name="lifeline-clock", daemon=True
        )
        self._thread.start()
        logger.info("Simulation clock started (period=%.3fs)", self.period)

    def stop(self) -> None:
        """Stop ticking.

        Waits for an in-flight tick to finish and runs any commands still
        queued, so the graph is left exactly as the last completed tick or
        command produced it. No-op if not running.

        Called from a change subscriber, i.e. on the clock thread itself, it
        returns without waiting; the worker exits once the current tick
        has finished notifying.
        """
        thread = self._thread
        if thread is None:
            return

        self._stop_requested.set()
        self._commands.put(_STOP)
        if thread is not threading.current_thread():
            thread.join()
        self._thread = None
        self._running.clear()
        logger.info(
            "Simulation clock stopped after %d tick(s), %d skipped",
            self.engine.tick_count,
            self.ticks_skipped,
        )

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue a call to run on the engine's execution context.

        Args:
            fn: Usually a bound engine method, e.g. ``engine.add_node``.
            *args: Positional arguments for ``fn``.
            **kwargs: Keyword arguments for ``fn``.

        Returns:
            A Future resolved with the call's result or exception. While the
            clock is stopped, the call waits until ``drain()`` runs it.
        """
        future: Future = Future()
        self._commands.put((future, fn, args, kwargs))
        return future

    def drain(self) -> int:
        """Run queued commands in the calling thread.

        Only valid while the clock is stopped.

        Returns:
            The number of commands executed.
        """
        if self.is_running:
            raise RuntimeError("drain() is only allowed while the clock is stopped")
        return self._drain()

    def step(self):
        """Run queued commands and then exactly one tick, synchronously.

        Only valid while the clock is stopped.

        Returns:
            The FlowReport of the tick.
        """
        if self.is_running:
            raise RuntimeError("step() is only allowed while the clock is stopped")
        self._drain()
        return self.engine.tick()

    # -------------------------------------------------------------------------
    # Worker
    # -------------------------------------------------------------------------

    def _run(self) -> None:
        next_tick = time.monotonic() + self.period

        while not self._stop_requested.is_set():
            # A due tick goes ahead of queued commands
            timeout = next_tick - time.monotonic()
            if timeout > 0:
                try:
                    item = self._commands.get(timeout=timeout)
                except queue.Empty:
                    item = None

                if item is _STOP:
                    break
                if item is not None:
                    self._execute(item)
                    continue

            try:
                self.engine.tick()
            except Exception:
                logger.exception("Simulation tick failed")

            next_tick += self.period
            now = time.monotonic()
            if next_tick <= now:
                missed = math.floor((now - next_tick) / self.period) + 1
                self.ticks_skipped += missed
                next_tick += missed * self.period
                logger.debug("Tick overran its period; skipped %d tick(s)", missed)

        self._drain()

    def _drain(self) -> int:
        executed = 0
        while True:
            try:
                item = self._commands.get_nowait()
            except queue.Empty:
                return executed
            if item is _STOP:
                continue
            self._execute(item)
            executed += 1

    @staticmethod
    def _execute(item: tuple) -> None:
        future, fn, args, kwargs = item
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)
