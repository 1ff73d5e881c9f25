"""
SDLP performance benchmark harness.

Measures link creation, verification and compression timings for the
Secure Deep Link Protocol and analyses how much of each link is payload.

Basic Usage:
    >>> import asyncio
    >>> from sdlp_bench import BenchmarkRunner, BenchmarkConfig, format_output
    >>>
    >>> runner = BenchmarkRunner(config=BenchmarkConfig.quick())
    >>> suite = asyncio.run(runner.run_all_benchmarks())
    >>> print(format_output(suite, 'table'))
"""

__version__ = "1.0.0"

from .models import (
    BenchmarkResult,
    BenchmarkSuite,
    CapacityTest,
    Category,
    Environment,
    OutputFormat,
    PayloadSizeTest,
    Summary,
    summarize,
)
from .timing import OperationFailure, TimingStats, measure
from .capacity import CapacityError, analyze_capacity
from .config import BenchmarkConfig, ConfigError
from .payloads import generate_test_payloads
from .protocol import LinkProtocol, ReferenceLinkProtocol, VerificationResult
from .runner import BenchmarkRunner
from .formatters import UnsupportedFormatError, format_output

__all__ = [
    '__version__',

    # Data model
    'BenchmarkResult',
    'BenchmarkSuite',
    'CapacityTest',
    'Category',
    'Environment',
    'OutputFormat',
    'PayloadSizeTest',
    'Summary',
    'summarize',

    # Measurement
    'OperationFailure',
    'TimingStats',
    'measure',
    'CapacityError',
    'analyze_capacity',

    # Running
    'BenchmarkConfig',
    'ConfigError',
    'generate_test_payloads',
    'LinkProtocol',
    'ReferenceLinkProtocol',
    'VerificationResult',
    'BenchmarkRunner',

    # Reporting
    'UnsupportedFormatError',
    'format_output',
]
