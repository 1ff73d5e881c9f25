"""
Benchmark runner for SDLP link operations.

Runs the creation, verification, compression and capacity scenarios in a
fixed order against a ``LinkProtocol`` and compiles the results into a
``BenchmarkSuite``. Every timed operation runs to completion before the next
one starts, so measurements never overlap.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .capacity import analyze_capacity
from .config import BenchmarkConfig
from .models import (
    BenchmarkResult,
    BenchmarkSuite,
    CapacityTest,
    Category,
    Environment,
    PayloadSizeTest,
    summarize,
)
from .payloads import generate_test_payloads
from .protocol import LinkProtocol, ReferenceLinkProtocol
from .sysinfo import capture_environment, get_timestamp
from .timing import OperationFailure, TimingStats, invoke, measure

logger = logging.getLogger(__name__)


def _timing_metadata(stats: TimingStats) -> Dict[str, float]:
    return {
        'minTime': stats.min_time,
        'maxTime': stats.max_time,
        'medianTime': stats.median_time,
        'p95Time': stats.p95_time,
    }


class BenchmarkRunner:
    """
    Orchestrates one benchmark suite.

    Fixtures are built once on construction and shared by every scenario.
    Results are collected per call to run_all_benchmarks, so a runner can be
    reused and each call returns a fresh suite.
    """

    def __init__(self, protocol: Optional[LinkProtocol] = None,
                 config: Optional[BenchmarkConfig] = None,
                 payloads: Optional[Sequence[PayloadSizeTest]] = None,
                 environment: Optional[Environment] = None):
        """
        Initialize the runner.

        Args:
            protocol: Operations under test (defaults to ReferenceLinkProtocol)
            config: Iteration counts and thresholds (defaults to BenchmarkConfig())
            payloads: Fixture matrix (defaults to generate_test_payloads())
            environment: Host description (captured from the running host by default)
        """
        self.protocol = protocol or ReferenceLinkProtocol()
        self.config = config or BenchmarkConfig()
        self.payloads = tuple(payloads) if payloads is not None else tuple(generate_test_payloads())
        self.environment = environment

    def _compressible(self, payload: PayloadSizeTest) -> bool:
        return payload.size > self.config.compression_threshold

    async def _create_link(self, payload: PayloadSizeTest, compress: bool) -> str:
        try:
            return await invoke(self.protocol.create_link, payload.payload_bytes,
                               self.config.payload_type, compress)
        except Exception as e:
            raise OperationFailure(
                f"Link creation failed for {payload.description}: {e}"
            ) from e

    async def run_all_benchmarks(self) -> BenchmarkSuite:
        """
        Run every scenario and compile the suite.

        Returns:
            Fully populated BenchmarkSuite

        Raises:
            OperationFailure: If any protocol operation fails. No partial
                suite is produced.
        """
        logger.info("🚀 Starting SDLP Benchmark Suite (%d fixtures)", len(self.payloads))

        results: List[BenchmarkResult] = []
        capacity_tests: List[CapacityTest] = []

        await self.benchmark_link_creation(results)
        await self.benchmark_link_verification(results)
        await self.benchmark_compression(results)
        await self.benchmark_capacity_utilization(capacity_tests)

        return self.compile_suite(results, capacity_tests)

    async def benchmark_link_creation(self, results: List[BenchmarkResult]) -> None:
        logger.info("📝 Benchmarking Link Creation...")
        for payload in self.payloads:
            variants = [False, True] if self._compressible(payload) else [False]
            for compress in variants:
                await self._run_creation_benchmark(payload, compress, results)

    async def _run_creation_benchmark(self, payload: PayloadSizeTest, compress: bool,
                                      results: List[BenchmarkResult]) -> None:
        label = "with compression" if compress else "no compression"
        name = f"Create {payload.description} ({label})"
        iterations = self.config.iterations_for_size(payload.size)
        data = payload.payload_bytes

        def operation():
            return self.protocol.create_link(data, self.config.payload_type, compress)

        logger.debug("   %s x%d", name, iterations)
        stats = await measure(operation, iterations, warmup=self.config.warmup_for(iterations))

        metadata = {'payloadSize': payload.size, 'compress': compress}
        metadata.update(_timing_metadata(stats))
        results.append(BenchmarkResult.from_timing(
            name, Category.CREATION, stats.iterations, stats.total_time, metadata
        ))

    async def benchmark_link_verification(self, results: List[BenchmarkResult]) -> None:
        logger.info("🔍 Benchmarking Link Verification...")
        for payload in self.payloads:
            variants = [False, True] if self._compressible(payload) else [False]
            links = [(compress, await self._create_link(payload, compress)) for compress in variants]
            for compress, link in links:
                label = "with compression" if compress else "no compression"
                await self._run_verification_benchmark(
                    f"Verify {payload.description} ({label})", link, compress, results
                )

    async def _run_verification_benchmark(self, name: str, link: str, compress: bool,
                                          results: List[BenchmarkResult]) -> None:
        iterations = self.config.verification_iterations

        async def operation():
            outcome = await invoke(self.protocol.verify_link, link)
            if not outcome.valid:
                raise OperationFailure(
                    f"Verification failed for '{name}': {outcome.error} {outcome.details or ''}".rstrip()
                )

        logger.debug("   %s x%d", name, iterations)
        stats = await measure(operation, iterations, warmup=self.config.warmup_for(iterations))

        metadata = {'linkLength': len(link), 'compress': compress}
        metadata.update(_timing_metadata(stats))
        results.append(BenchmarkResult.from_timing(
            name, Category.VERIFICATION, stats.iterations, stats.total_time, metadata
        ))

    async def benchmark_compression(self, results: List[BenchmarkResult]) -> None:
        """Time the compression step alone for every compressible fixture."""
        logger.info("🗜️  Benchmarking Compression Efficiency...")
        iterations = self.config.compression_iterations

        for payload in filter(self._compressible, self.payloads):
            data = payload.payload_bytes
            name = f"Compression {payload.description}"

            logger.debug("   %s x%d", name, iterations)
            stats = await measure(lambda: self.protocol.compress(data), iterations,
                                  warmup=self.config.warmup_for(iterations))

            try:
                compressed = await invoke(self.protocol.compress, data)
            except Exception as e:
                raise OperationFailure(f"Compression failed for {payload.description}: {e}") from e
            uncompressed_url = await self._create_link(payload, False)
            compressed_url = await self._create_link(payload, True)

            tradeoff = analyze_capacity(len(data), len(compressed_url), len(uncompressed_url))
            metadata = {
                'originalSize': len(data),
                'compressedSize': len(compressed),
                'uncompressedUrlSize': len(uncompressed_url),
                'compressedUrlSize': len(compressed_url),
                'compressionRatio': tradeoff.compression_ratio,
                'payloadEfficiency': tradeoff.efficiency,
                'expectedRatio': payload.expected_compression_ratio,
            }
            metadata.update(_timing_metadata(stats))
            results.append(BenchmarkResult.from_timing(
                name, Category.COMPRESSION, stats.iterations, stats.total_time, metadata
            ))

    async def benchmark_capacity_utilization(self, capacity_tests: List[CapacityTest]) -> None:
        """One untimed capacity entry per fixture, plus its compressed variant."""
        logger.info("📊 Benchmarking Capacity Utilization...")
        for payload in self.payloads:
            payload_size = len(payload.payload_bytes)
            uncompressed = await self._create_link(payload, False)
            capacity_tests.append(analyze_capacity(payload_size, len(uncompressed)))

            if self._compressible(payload):
                compressed = await self._create_link(payload, True)
                capacity_tests.append(
                    analyze_capacity(payload_size, len(compressed), len(uncompressed))
                )

    def compile_suite(self, results: Sequence[BenchmarkResult],
                      capacity_tests: Sequence[CapacityTest]) -> BenchmarkSuite:
        """Stamp timestamp and environment and reduce the summary."""
        environment = self.environment or capture_environment(self.protocol.version)
        return BenchmarkSuite(
            name=self.config.suite_name,
            version=self.config.suite_version,
            timestamp=get_timestamp(),
            environment=environment,
            results=tuple(results),
            capacity_analysis=tuple(capacity_tests),
            summary=summarize(results),
        )
