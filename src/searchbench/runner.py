from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .errors import BenchError, EmptyResultError, OperationError

logger = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    """Result of a timed run.

    On success ``samples`` holds one duration in nanoseconds per iteration, in
    execution order. On failure ``samples`` is empty, ``error`` says why and
    ``failed_at`` is the 1-based iteration that failed.
    """

    samples: list[int] = field(default_factory=list)
    error: BenchError | None = None
    failed_at: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_timed(operation: Callable[[], Any], count: int) -> RunOutcome:
    """Call ``operation`` exactly ``count`` times, one call at a time, timing each call.

    The first failure (an exception or a ``None`` result) stops the run; no
    samples are returned in that case. ``BenchError`` subclasses raised by the
    operation are kept as they are; anything else becomes an ``OperationError``.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError(f"count must be a positive integer, got {count!r}")

    logger.debug("timed run start count=%d", count)
    samples: list[int] = []
    for iteration in range(1, count + 1):
        try:
            t0 = time.perf_counter_ns()
            result = operation()
            elapsed = time.perf_counter_ns() - t0
        except BenchError as exc:
            # already categorized (e.g. SetupError from a per-call client factory)
            logger.warning("timed run aborted at iteration %d: %s", iteration, exc)
            return RunOutcome(error=exc, failed_at=iteration)
        except Exception as exc:  # noqa: BLE001
            err = OperationError(iteration, f"{type(exc).__name__}: {exc}")
            err.__cause__ = exc
            logger.warning("timed run aborted at iteration %d after %d samples", iteration, len(samples))
            return RunOutcome(error=err, failed_at=iteration)
        if result is None:
            logger.warning("timed run aborted at iteration %d: empty result", iteration)
            return RunOutcome(error=EmptyResultError(iteration), failed_at=iteration)
        samples.append(elapsed)

    logger.debug("timed run done samples=%d", len(samples))
    return RunOutcome(samples=samples)
