from __future__ import annotations


class BenchError(Exception):
    """Base class for every failure that aborts a benchmark run."""


class SetupError(BenchError):
    """The search client could not be constructed; nothing was measured."""


class OperationError(BenchError):
    """The timed operation raised on a given iteration."""

    def __init__(self, iteration: int, message: str) -> None:
        super().__init__(f"iteration {iteration}: {message}")
        self.iteration = iteration


class EmptyResultError(OperationError):
    """The timed operation returned no result where one was expected."""

    def __init__(self, iteration: int) -> None:
        super().__init__(iteration, "operation returned no result")


class StatisticsError(BenchError):
    """Samples or percentile requests that cannot be summarized."""
