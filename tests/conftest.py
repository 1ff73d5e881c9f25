"""
Shared fixtures for the SDLP benchmark tests.
"""

import pytest

from sdlp_bench.config import BenchmarkConfig
from sdlp_bench.models import (
    BenchmarkResult,
    BenchmarkSuite,
    CapacityTest,
    Category,
    Environment,
)
from sdlp_bench.payloads import generate_test_payloads


@pytest.fixture
def tiny_config():
    """Smallest iteration counts that still exercise warm-up and tiers."""
    return BenchmarkConfig(
        warmup_iterations=1,
        verification_iterations=3,
        compression_iterations=2,
        iteration_tiers=((1024, 3),),
        max_size_iterations=2,
    )


@pytest.fixture
def small_payloads():
    """Fixtures up to 1KB: three below the compression threshold, two above."""
    return [p for p in generate_test_payloads() if p.size <= 1024]


@pytest.fixture
def environment():
    return Environment(runtime="CPython 3.11.4", platform="linux", arch="x86_64", sdlp_version="1.0")


@pytest.fixture
def sample_suite(environment):
    results = (
        BenchmarkResult.from_timing("Create small (no compression)", Category.CREATION, 4, 4.0,
                                    {'payloadSize': 32, 'compress': False}),
        BenchmarkResult.from_timing("Create large (with compression)", Category.CREATION, 2, 6.0,
                                    {'payloadSize': 2048, 'compress': True}),
        BenchmarkResult.from_timing('Verify "quoted", with comma', Category.VERIFICATION, 5, 10.0,
                                    {'linkLength': 412, 'compress': False}),
        BenchmarkResult.from_timing("Compression Repetitive data (2KB)", Category.COMPRESSION, 2, 0.5,
                                    {'compressionRatio': 0.25, 'expectedRatio': None}),
    )
    capacity = (
        CapacityTest(payload_size=100, url_length=250, efficiency=0.4, compression_ratio=1.0),
        CapacityTest(payload_size=2048, url_length=900, efficiency=2048 / 900, compression_ratio=0.3,
                     compressed=True),
    )
    return BenchmarkSuite(
        name="SDLP Performance Benchmark Suite",
        version="1.0.0",
        timestamp="2024-01-01T10:00:00.000+00:00",
        environment=environment,
        results=results,
        capacity_analysis=capacity,
    )
