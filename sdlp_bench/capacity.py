"""
Capacity analysis: how much of an encoded link is useful payload.
"""

from typing import Optional

from .models import CapacityTest


class CapacityError(ZeroDivisionError):
    """Raised when a capacity ratio would divide by a zero-length artifact."""
    pass


def analyze_capacity(payload_size: int, url_length: int,
                     baseline_length: Optional[int] = None) -> CapacityTest:
    """
    Compute link efficiency and compression ratio for one payload.

    Args:
        payload_size: Payload bytes before encoding
        url_length: Length of the final encoded link
        baseline_length: Length of the same payload's uncompressed link, when
            url_length belongs to a compressed link

    Returns:
        CapacityTest with efficiency = payload_size / url_length and
        compression_ratio = url_length / baseline_length (1.0 without a baseline);
        entries with a baseline are marked compressed

    Raises:
        CapacityError: If url_length or baseline_length is zero or negative
        ValueError: If payload_size is negative
    """
    if payload_size < 0:
        raise ValueError(f"payload_size must be non-negative, got {payload_size}")
    if url_length <= 0:
        raise CapacityError(f"url_length must be positive, got {url_length}")

    if baseline_length is None:
        compression_ratio = 1.0
    elif baseline_length <= 0:
        raise CapacityError(f"baseline_length must be positive, got {baseline_length}")
    else:
        compression_ratio = url_length / baseline_length

    return CapacityTest(
        payload_size=payload_size,
        url_length=url_length,
        efficiency=payload_size / url_length,
        compression_ratio=compression_ratio,
        compressed=baseline_length is not None,
    )
