# src/terminal_shell/core/managers/job_manager.py
from __future__ import annotations

import asyncio
import itertools
import logging
import threading
import time
from concurrent.futures import Future
from typing import Callable, Dict, List, Optional

from terminal_shell.core.managers.config_manager import config_manager
from terminal_shell.model import Job, JobStatus, ParsedCommand

logger = logging.getLogger(__name__)


class JobManager:
    """
    Tracks every in-flight command invocation.

    Jobs are inserted when a command starts and released when it settles.
    A periodic health check marks jobs running longer than
    `health_threshold` seconds as unhealthy; it never cancels anything.
    """

    def __init__(
            self,
            health_threshold: Optional[float] = None,
            check_interval: Optional[float] = None,
            clock: Callable[[], float] = time.monotonic,
    ):
        self.health_threshold = float(
            health_threshold if health_threshold is not None
            else config_manager.get_nested("jobs.health_threshold_seconds", 10)
        )
        self.check_interval = float(
            check_interval if check_interval is not None
            else config_manager.get_nested("jobs.check_interval_seconds", 5)
        )
        self._clock = clock
        self._ids = itertools.count(1)
        self._live: Dict[int, Job] = {}
        self._lock = threading.Lock()
        self._monitor: Optional[Future] = None

    def track(self, parsed: ParsedCommand) -> Job:
        """Registers a new running job and returns it as the release handle."""
        with self._lock:
            job = Job(id=next(self._ids), parsed=parsed, started_at=self._clock())
            self._live[job.id] = job
        logger.debug("Job %d started: %s", job.id, parsed.command_text)
        return job

    def release(self, job: Job, error: Optional[BaseException] = None) -> None:
        """Settles a job (succeeded or failed) and removes it from the live set."""
        if error is None:
            job.status = JobStatus.SUCCEEDED
        else:
            job.status = JobStatus.FAILED
            job.error = str(error) or type(error).__name__
        with self._lock:
            self._live.pop(job.id, None)
        logger.debug("Job %d %s after %.3fs", job.id, job.status.value, self._clock() - job.started_at)

    def list_jobs(self) -> List[Job]:
        """Returns a snapshot of the live jobs, oldest first."""
        with self._lock:
            return [self._live[k] for k in sorted(self._live)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._live)

    def check_health(self, now: Optional[float] = None) -> List[Job]:
        """Flags long running jobs as unhealthy and returns the newly flagged ones."""
        now = self._clock() if now is None else now
        flagged = []
        for job in self.list_jobs():
            if job.healthy and now - job.started_at > self.health_threshold:
                job.healthy = False
                flagged.append(job)
                logger.warning(
                    "Job %d (%s) is taking a long time (> %ss)",
                    job.id, job.parsed.command_text, self.health_threshold
                )
        return flagged

    async def run_health_monitor(self) -> None:
        """Runs `check_health` every `check_interval` seconds until cancelled."""
        logger.debug("Job health monitor started (interval=%ss).", self.check_interval)
        while True:
            await asyncio.sleep(self.check_interval)
            try:
                self.check_health()
            except Exception as e:  # pragma: no cover
                logger.error("Job health check failed: %s", e, exc_info=True)

    def start_health_monitor(self, loop: asyncio.AbstractEventLoop) -> None:
        """Schedules the health monitor on a loop running in another thread."""
        if self._monitor is None:
            self._monitor = asyncio.run_coroutine_threadsafe(self.run_health_monitor(), loop)

    def stop_health_monitor(self) -> None:
        if self._monitor is not None:
            self._monitor.cancel()
            self._monitor = None
