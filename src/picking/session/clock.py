"""Session clock — elapsed pick time shown to the picker.

A counter that ticks once per interval on a background thread while a
session is active. It is display-only: nothing about allocation depends on
it, and it is not persisted or recovered.
"""

import os
import threading

import structlog

logger = structlog.get_logger(__name__)


class SessionClock:
    """Monotonic seconds counter with a cancellable ticker thread."""

    def __init__(self, interval: float = 1.0):
        if interval <= 0:
            raise ValueError(f"Clock interval must be positive, got {interval!r}")
        self.interval = interval
        self._elapsed = 0
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def elapsed_seconds(self) -> int:
        with self._lock:
            return self._elapsed

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def display(self) -> str:
        """Elapsed time as MM:SS."""
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    def tick(self) -> int:
        with self._lock:
            self._elapsed += 1
            return self._elapsed

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="pick-session-clock", daemon=True)
        self._thread.start()

    def stop(self) -> int:
        """Stop ticking and return the final elapsed seconds."""
        self._stopped.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=max(self.interval * 2, 1.0))
        return self.elapsed_seconds

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            self.tick()


class SessionClockRegistry:
    """One running clock per active pick session."""

    def __init__(self, interval: float = 1.0):
        self.interval = interval
        self._clocks: dict[str, SessionClock] = {}
        self._lock = threading.Lock()

    def start(self, session_id: str) -> SessionClock:
        with self._lock:
            clock = self._clocks.get(session_id)
            if clock is None:
                clock = SessionClock(self.interval)
                self._clocks[session_id] = clock
        clock.start()
        return clock

    def get(self, session_id: str) -> SessionClock | None:
        with self._lock:
            return self._clocks.get(session_id)

    def elapsed(self, session_id: str) -> int:
        clock = self.get(session_id)
        return clock.elapsed_seconds if clock else 0

    def stop(self, session_id: str) -> int:
        """Stop and discard a session's clock, returning its elapsed seconds."""
        with self._lock:
            clock = self._clocks.pop(session_id, None)
        if clock is None:
            return 0
        elapsed = clock.stop()
        logger.debug("Session clock stopped", session_id=session_id, elapsed_seconds=elapsed)
        return elapsed

    def stop_all(self) -> None:
        with self._lock:
            session_ids = list(self._clocks)
        for session_id in session_ids:
            self.stop(session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._clocks)


_registry_instance = None


def get_session_clocks() -> SessionClockRegistry:
    """Return the process-wide clock registry (singleton).

    The tick interval comes from PICK_CLOCK_INTERVAL (seconds, default 1).
    """
    global _registry_instance
    if _registry_instance is None:
        interval = float(os.environ.get("PICK_CLOCK_INTERVAL", "1.0"))
        _registry_instance = SessionClockRegistry(interval=interval)
    return _registry_instance


def reset_session_clocks() -> None:
    """Stop every clock and drop the registry (useful for testing)."""
    global _registry_instance
    if _registry_instance is not None:
        _registry_instance.stop_all()
    _registry_instance = None
