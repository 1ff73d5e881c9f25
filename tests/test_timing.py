"""
Tests for the timing primitive.
"""

import asyncio

import pytest

from sdlp_bench.timing import OperationFailure, TimingStats, measure


class TestMeasure:
    """Sequential timing of sync and async operations."""

    def test_sync_operation(self):
        calls = []
        stats = asyncio.run(measure(lambda: calls.append(1), 5))

        assert len(calls) == 5
        assert stats.iterations == 5
        assert len(stats.times) == 5
        assert stats.total_time >= 0
        assert stats.total_time == pytest.approx(sum(stats.times))
        assert stats.average_time * stats.iterations == pytest.approx(stats.total_time)

    def test_async_operation_is_awaited(self):
        completed = []

        async def operation():
            await asyncio.sleep(0)
            completed.append(True)

        stats = asyncio.run(measure(operation, 3))

        assert completed == [True, True, True]
        assert stats.iterations == 3

    def test_async_sleep_is_measured(self):
        async def operation():
            await asyncio.sleep(0.005)

        stats = asyncio.run(measure(operation, 2))

        assert stats.min_time >= 4.0  # milliseconds

    def test_warmup_excluded_from_results(self):
        calls = []
        stats = asyncio.run(measure(lambda: calls.append(1), 4, warmup=3))

        assert len(calls) == 7
        assert stats.iterations == 4
        assert len(stats.times) == 4

    def test_iterations_run_in_order(self):
        seen = []
        counter = iter(range(10))
        asyncio.run(measure(lambda: seen.append(next(counter)), 10))
        assert seen == list(range(10))

    def test_failure_aborts_measurement(self):
        calls = []

        def operation():
            calls.append(1)
            if len(calls) == 3:
                raise RuntimeError("signer unavailable")

        with pytest.raises(OperationFailure) as exc_info:
            asyncio.run(measure(operation, 10))

        assert len(calls) == 3
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "signer unavailable" in str(exc_info.value)

    def test_failure_during_warmup(self):
        def operation():
            raise ValueError("bad payload")

        with pytest.raises(OperationFailure):
            asyncio.run(measure(operation, 1, warmup=1))

    def test_operation_failure_not_rewrapped(self):
        original = OperationFailure("verification failed")

        def operation():
            raise original

        with pytest.raises(OperationFailure) as exc_info:
            asyncio.run(measure(operation, 1))
        assert exc_info.value is original

    def test_invalid_iterations(self):
        with pytest.raises(ValueError):
            asyncio.run(measure(lambda: None, 0))
        with pytest.raises(ValueError):
            asyncio.run(measure(lambda: None, 1, warmup=-1))


class TestTimingStats:
    """Derived statistics."""

    def test_extremes_and_median(self):
        stats = TimingStats(iterations=4, total_time=10.0, average_time=2.5, times=(4.0, 1.0, 3.0, 2.0))

        assert stats.min_time == 1.0
        assert stats.max_time == 4.0
        assert stats.median_time == 2.5

    def test_p95_single_sample(self):
        stats = TimingStats(iterations=1, total_time=2.0, average_time=2.0, times=(2.0,))
        assert stats.p95_time == 2.0

    def test_p95_within_range(self):
        times = tuple(float(i) for i in range(1, 101))
        stats = TimingStats(iterations=100, total_time=sum(times), average_time=50.5, times=times)
        assert 90.0 <= stats.p95_time <= 100.0

    @pytest.mark.parametrize("times", [
        (1.0, 2.0),
        (3.0, 1.0, 2.0),
        (0.5, 0.5, 0.7, 9.0),
    ])
    def test_p95_never_exceeds_extremes(self, times):
        stats = TimingStats(iterations=len(times), total_time=sum(times),
                            average_time=sum(times) / len(times), times=times)

        assert stats.min_time <= stats.p95_time <= stats.max_time
        assert stats.p95_time in times

    def test_p95_nearest_rank(self):
        stats = TimingStats(iterations=2, total_time=3.0, average_time=1.5, times=(1.0, 2.0))
        assert stats.p95_time == 2.0
