"""
Timing primitive for benchmark scenarios.

Runs an operation a fixed number of times, strictly one after another, and
reports elapsed wall-clock time in milliseconds.
"""

import inspect
import statistics
import time
from dataclasses import dataclass
from typing import Any, Callable, Tuple


class OperationFailure(Exception):
    """Raised when a protocol operation under measurement fails."""
    pass


@dataclass(frozen=True)
class TimingStats:
    """Per-iteration timings of one measured scenario, in milliseconds."""
    iterations: int
    total_time: float
    average_time: float
    times: Tuple[float, ...]

    @property
    def min_time(self) -> float:
        return min(self.times)

    @property
    def max_time(self) -> float:
        return max(self.times)

    @property
    def median_time(self) -> float:
        return statistics.median(self.times)

    @property
    def p95_time(self) -> float:
        """Nearest-rank 95th percentile; always one of the measured times."""
        ordered = sorted(self.times)
        return ordered[min(len(ordered) - 1, int(len(ordered) * 0.95))]


async def invoke(operation: Callable[..., Any], *args: Any) -> Any:
    """Call an operation and await its result when it returns an awaitable."""
    result = operation(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def measure(operation: Callable[[], Any], iterations: int,
                  warmup: int = 0) -> TimingStats:
    """
    Time an operation over a number of sequential iterations.

    The operation may return an awaitable; it is awaited to completion
    before the clock stops and before the next iteration starts.

    Args:
        operation: Zero-argument callable, sync or async
        iterations: Number of measured iterations (>= 1)
        warmup: Iterations run beforehand and left out of the result

    Returns:
        TimingStats for the measured iterations

    Raises:
        ValueError: If iterations < 1 or warmup < 0
        OperationFailure: If the operation raises on any iteration
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")
    if warmup < 0:
        raise ValueError(f"warmup must be >= 0, got {warmup}")

    try:
        for _ in range(warmup):
            await invoke(operation)

        times = []
        for _ in range(iterations):
            start_time = time.perf_counter()
            await invoke(operation)
            end_time = time.perf_counter()
            times.append((end_time - start_time) * 1000.0)
    except OperationFailure:
        raise
    except Exception as e:
        raise OperationFailure(f"Operation failed during measurement: {e}") from e

    total_time = sum(times)
    return TimingStats(
        iterations=iterations,
        total_time=total_time,
        average_time=total_time / iterations,
        times=tuple(times),
    )
