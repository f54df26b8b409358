# src/terminal_shell/core/utils/run_timers.py
import time
from typing import Optional


class RunTimers:
    """
    Measures elapsed wall-clock time. Usable as a context manager:

        with RunTimers() as timer:
            ...
        timer.duration
    """

    def __init__(self):
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None

    def start(self) -> "RunTimers":
        self._start_time = time.perf_counter()
        self._end_time = None
        return self

    def stop(self) -> None:
        if self._start_time is not None:
            self._end_time = time.perf_counter()

    @property
    def duration(self) -> float:
        """Elapsed seconds; keeps growing while the timer is running."""
        if self._start_time is None:
            return 0.0
        end = self._end_time if self._end_time is not None else time.perf_counter()
        return end - self._start_time

    def __enter__(self) -> "RunTimers":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def __repr__(self) -> str:
        return f"<RunTimers duration={self.duration:.4f}s>"
