from __future__ import annotations

import time

import pytest

from searchbench.errors import EmptyResultError, OperationError, SetupError
from searchbench.runner import run_timed
from searchbench.stats import summarize


@pytest.mark.parametrize("count", [1, 2, 7, 100])
def test_run_collects_exactly_count_samples(count: int):
    calls: list[int] = []

    def op():
        calls.append(1)
        return "ok"

    outcome = run_timed(op, count)
    assert outcome.ok
    assert len(outcome.samples) == count
    assert len(calls) == count
    assert all(isinstance(s, int) and s >= 0 for s in outcome.samples)


def test_run_aborts_on_first_exception_and_discards_samples():
    seen: list[int] = []

    def op():
        seen.append(len(seen) + 1)
        if len(seen) == 4:
            raise ConnectionError("backend went away")
        return {}

    outcome = run_timed(op, 10)
    assert not outcome.ok
    assert outcome.failed_at == 4
    assert outcome.samples == []
    assert isinstance(outcome.error, OperationError)
    assert isinstance(outcome.error.__cause__, ConnectionError)
    assert "backend went away" in str(outcome.error)
    # nothing runs after the failing iteration
    assert seen == [1, 2, 3, 4]


def test_run_treats_none_result_as_failure():
    results = iter(["a", None, "c"])
    outcome = run_timed(lambda: next(results), 3)
    assert isinstance(outcome.error, EmptyResultError)
    assert outcome.failed_at == 2
    assert outcome.samples == []


def test_run_failure_on_first_iteration():
    def op():
        raise RuntimeError("boom")

    outcome = run_timed(op, 5)
    assert outcome.failed_at == 1
    assert outcome.error.iteration == 1


@pytest.mark.parametrize("count", [0, -3, True, 2.5])
def test_run_rejects_non_positive_count(count):
    with pytest.raises(ValueError):
        run_timed(lambda: 1, count)


def test_run_samples_feed_summary():
    outcome = run_timed(lambda: 1, 20)
    summary = summarize(outcome.samples)
    assert summary.count == 20
    assert summary.percentiles[1.0] == max(outcome.samples)


def test_run_samples_are_measured_per_call_in_call_order():
    sleeps = iter([0.02, 0.0, 0.04])

    def op():
        time.sleep(next(sleeps))
        return "ok"

    outcome = run_timed(op, 3)
    first, second, third = outcome.samples
    assert first >= 20_000_000
    assert third >= 40_000_000
    # the un-slept call sits between the two slept ones
    assert second < first
    assert second < third


def test_run_keeps_bench_errors_uncategorized():
    def op():
        raise SetupError("cannot connect")

    outcome = run_timed(op, 3)
    assert outcome.failed_at == 1
    assert type(outcome.error) is SetupError
    assert str(outcome.error) == "cannot connect"
