"""Waiting on long-running vendor jobs.

Vendor specifics (for example assistant run polling) live behind a
:class:`JobRunner` adapter. This module only knows how to poll a handle
with exponential backoff, give up after a timeout, and stop early when a
:class:`CancellationToken` is set.
"""

import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Optional, Protocol

from .errors import JobCancelledError, JobFailedError, JobTimeoutError
from .logging import LogEvent, log_debug, log_warning


class JobStatus(str, Enum):
    """Status reported by a job runner."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED, JobStatus.CANCELLED)


@dataclass(frozen=True)
class JobHandle:
    """Opaque reference to a submitted job."""

    job_id: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class JobState:
    """A poll result: status plus optional output or error text."""

    status: JobStatus
    output: Optional[str] = None
    error: Optional[str] = None


class JobRunner(Protocol):
    """Capability interface implemented once per vendor."""

    def submit(self, job: Any) -> JobHandle:
        ...

    def poll(self, handle: JobHandle) -> JobState:
        ...

    def cancel(self, handle: JobHandle) -> None:
        ...


@dataclass(frozen=True)
class BackoffPolicy:
    """Exponential backoff between polls, bounded by an overall timeout.

    Attributes:
        initial_delay: Seconds to wait before the second poll
        factor: Multiplier applied to the delay after every poll
        max_delay: Upper bound for a single delay
        timeout: Total seconds to wait before giving up
    """

    initial_delay: float = 1.0
    factor: float = 2.0
    max_delay: float = 10.0
    timeout: float = 300.0

    def __post_init__(self) -> None:
        if self.initial_delay < 0:
            raise ValueError("initial_delay must be non-negative")
        if self.factor < 1:
            raise ValueError("factor must be at least 1")
        if self.max_delay < self.initial_delay:
            raise ValueError("max_delay must not be smaller than initial_delay")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    def delays(self) -> Iterator[float]:
        """Yield successive delays forever."""
        delay = self.initial_delay
        while True:
            yield delay
            delay = min(delay * self.factor, self.max_delay)


class CancellationToken:
    """Thread-safe flag that asks a waiter to stop."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to ``seconds``; return True if cancelled meanwhile."""
        return self._event.wait(seconds)


def _sleep_with_token(token: Optional[CancellationToken], seconds: float) -> None:
    if token is not None:
        token.wait(seconds)
    else:
        time.sleep(seconds)


def wait_for_job(
    runner: JobRunner,
    handle: JobHandle,
    policy: Optional[BackoffPolicy] = None,
    token: Optional[CancellationToken] = None,
    sleep: Optional[Callable[[float], None]] = None,
    clock: Callable[[], float] = time.monotonic,
) -> JobState:
    """Poll ``handle`` until it completes.

    Args:
        runner: Vendor adapter
        handle: Handle returned by ``runner.submit``
        policy: Backoff and timeout settings
        token: Optional cancellation token
        sleep: Sleep function; defaults to waiting on ``token``
        clock: Monotonic clock used for the timeout

    Returns:
        The completed JobState

    Raises:
        JobFailedError: If the job fails or is cancelled by the vendor
        JobTimeoutError: If the timeout elapses; the job is cancelled first
        JobCancelledError: If ``token`` is cancelled; the job is cancelled first
    """
    policy = policy or BackoffPolicy()
    deadline = clock() + policy.timeout
    delays = policy.delays()

    while True:
        if token is not None and token.cancelled:
            runner.cancel(handle)
            raise JobCancelledError(f"Waiting for job {handle.job_id} was cancelled", job_id=handle.job_id)

        state = runner.poll(handle)
        log_debug(LogEvent.JOB_POLLING, "Polled job", job_id=handle.job_id, status=state.status.value)

        if state.status is JobStatus.COMPLETED:
            return state
        if state.status in (JobStatus.FAILED, JobStatus.CANCELLED):
            raise JobFailedError(
                f"Job {handle.job_id} ended with status '{state.status.value}': {state.error or 'no details'}",
                job_id=handle.job_id,
            )

        remaining = deadline - clock()
        if remaining <= 0:
            log_warning(LogEvent.JOB_POLLING, "Job timed out", job_id=handle.job_id, timeout=policy.timeout)
            runner.cancel(handle)
            raise JobTimeoutError(
                f"Job {handle.job_id} did not finish within {policy.timeout} seconds",
                job_id=handle.job_id,
                timeout=policy.timeout,
            )

        delay = min(next(delays), remaining)
        if sleep is not None:
            sleep(delay)
        else:
            _sleep_with_token(token, delay)


def run_job(
    runner: JobRunner,
    job: Any,
    policy: Optional[BackoffPolicy] = None,
    token: Optional[CancellationToken] = None,
    sleep: Optional[Callable[[float], None]] = None,
    clock: Callable[[], float] = time.monotonic,
) -> JobState:
    """Submit ``job`` and wait for it with :func:`wait_for_job`."""
    handle = runner.submit(job)
    return wait_for_job(runner, handle, policy=policy, token=token, sleep=sleep, clock=clock)
