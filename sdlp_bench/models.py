"""
Data model for SDLP benchmark results.

All entities are frozen dataclasses so a suite cannot change once the runner
hands it over. ``to_dict`` / ``from_dict`` translate between Python attribute
names and the camelCase field names of the published suite JSON.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union


class Category(str, Enum):
    """Kind of operation a benchmark result measures."""
    CREATION = "creation"
    VERIFICATION = "verification"
    COMPRESSION = "compression"
    CAPACITY = "capacity"


class OutputFormat(str, Enum):
    """Rendering strategy for a completed suite."""
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


Scalar = Union[str, int, float, bool, None]
MetadataValue = Union[Scalar, List[Scalar]]

_SCALAR_TYPES = (str, int, float, bool, type(None))


def _normalize_metadata(metadata: Dict[str, Any]) -> Dict[str, MetadataValue]:
    """Validate metadata and return a copy with sequences stored as lists."""
    normalized = {}
    for key, value in metadata.items():
        if not isinstance(key, str):
            raise TypeError(f"Metadata keys must be strings, got {key!r}")
        if isinstance(value, (list, tuple)):
            if not all(isinstance(item, _SCALAR_TYPES) for item in value):
                raise TypeError(f"Metadata list '{key}' may only hold scalars")
            value = list(value)
        elif not isinstance(value, _SCALAR_TYPES):
            raise TypeError(
                f"Unsupported metadata value for '{key}': {type(value).__name__}"
            )
        normalized[key] = value
    return normalized


def _close(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=1e-9, abs_tol=1e-9)


def operations_per_second(average_time: float) -> float:
    """
    Convert an average time in milliseconds to operations per second.

    An average of zero cannot be turned into a rate, so the sentinel 0.0 is
    returned for it instead of infinity.
    """
    if average_time <= 0:
        return 0.0
    return 1000.0 / average_time


@dataclass(frozen=True)
class BenchmarkResult:
    """One measured scenario. Times are in milliseconds."""
    name: str
    category: Category
    iterations: int
    total_time: float
    average_time: float
    operations_per_second: float
    metadata: Optional[Dict[str, MetadataValue]] = None

    def __post_init__(self):
        object.__setattr__(self, 'category', Category(self.category))
        if self.iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {self.iterations}")
        for name in ('total_time', 'average_time', 'operations_per_second'):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be finite and non-negative, got {value}")
        if not _close(self.average_time * self.iterations, self.total_time):
            raise ValueError(
                f"average_time * iterations ({self.average_time * self.iterations}) "
                f"does not match total_time ({self.total_time})"
            )
        if not _close(self.operations_per_second, operations_per_second(self.average_time)):
            raise ValueError(
                f"operations_per_second ({self.operations_per_second}) does not match "
                f"average_time ({self.average_time})"
            )
        if self.metadata is not None:
            object.__setattr__(self, 'metadata', _normalize_metadata(self.metadata))

    @classmethod
    def from_timing(cls, name: str, category: Category, iterations: int,
                    total_time: float,
                    metadata: Optional[Dict[str, MetadataValue]] = None) -> 'BenchmarkResult':
        """
        Build a result from a total time, deriving the average and rate.

        Args:
            name: Scenario label
            category: Category of the scenario
            iterations: Number of measured iterations (warm-up excluded)
            total_time: Sum of the measured iterations in milliseconds
            metadata: Optional extra values to render alongside the result

        Returns:
            A fully populated BenchmarkResult
        """
        average_time = total_time / iterations
        return cls(
            name=name,
            category=category,
            iterations=iterations,
            total_time=total_time,
            average_time=average_time,
            operations_per_second=operations_per_second(average_time),
            metadata=metadata,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'name': self.name,
            'category': self.category.value,
            'iterations': self.iterations,
            'totalTime': self.total_time,
            'averageTime': self.average_time,
            'operationsPerSecond': self.operations_per_second,
        }
        if self.metadata is not None:
            data['metadata'] = dict(self.metadata)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BenchmarkResult':
        return cls(
            name=data['name'],
            category=Category(data['category']),
            iterations=data['iterations'],
            total_time=data['totalTime'],
            average_time=data['averageTime'],
            operations_per_second=data['operationsPerSecond'],
            metadata=data.get('metadata'),
        )


@dataclass(frozen=True)
class PayloadSizeTest:
    """Input fixture for the benchmark scenarios."""
    size: int
    description: str
    data: Union[str, bytes]
    expected_compression_ratio: Optional[float] = None

    def __post_init__(self):
        if self.size < 0:
            raise ValueError(f"Payload size must be non-negative, got {self.size}")

    @property
    def payload_bytes(self) -> bytes:
        """The fixture data as the bytes handed to the protocol."""
        if isinstance(self.data, str):
            return self.data.encode('utf-8')
        return bytes(self.data)


@dataclass(frozen=True)
class CapacityTest:
    """
    Payload-to-link size tradeoff for one fixture.

    ``compressed`` marks entries measured on a compressed link; only those
    carry a compression ratio other than 1.0.
    """
    payload_size: int
    url_length: int
    efficiency: float
    compression_ratio: float
    compressed: bool = False

    def __post_init__(self):
        # Imported here because capacity.py builds CapacityTest instances.
        from .capacity import CapacityError
        if self.url_length <= 0:
            raise CapacityError(
                f"Cannot analyse capacity of an empty link (url_length={self.url_length})"
            )
        if self.payload_size < 0:
            raise ValueError(f"payload_size must be non-negative, got {self.payload_size}")
        if not _close(self.efficiency, self.payload_size / self.url_length):
            raise ValueError(
                f"efficiency ({self.efficiency}) does not match "
                f"payload_size / url_length ({self.payload_size}/{self.url_length})"
            )
        if not math.isfinite(self.compression_ratio) or self.compression_ratio <= 0:
            raise ValueError(f"compression_ratio must be finite and positive, got {self.compression_ratio}")
        if not self.compressed and self.compression_ratio != 1.0:
            raise ValueError("An uncompressed entry must have compression_ratio 1.0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'payloadSize': self.payload_size,
            'urlLength': self.url_length,
            'efficiency': self.efficiency,
            'compressionRatio': self.compression_ratio,
            'compressed': self.compressed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CapacityTest':
        return cls(
            payload_size=data['payloadSize'],
            url_length=data['urlLength'],
            efficiency=data['efficiency'],
            compression_ratio=data['compressionRatio'],
            compressed=data.get('compressed', False),
        )


@dataclass(frozen=True)
class Environment:
    """Host description stamped on a suite. All values are opaque strings."""
    runtime: str
    platform: str
    arch: str
    sdlp_version: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'runtime': self.runtime,
            'platform': self.platform,
            'arch': self.arch,
            'sdlpVersion': self.sdlp_version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> 'Environment':
        return cls(
            runtime=data['runtime'],
            platform=data['platform'],
            arch=data['arch'],
            sdlp_version=data['sdlpVersion'],
        )


@dataclass(frozen=True)
class Summary:
    total_tests: int
    total_time: float
    average_creation_time: float
    average_verification_time: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalTests': self.total_tests,
            'totalTime': self.total_time,
            'averageCreationTime': self.average_creation_time,
            'averageVerificationTime': self.average_verification_time,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Summary':
        return cls(
            total_tests=data['totalTests'],
            total_time=data['totalTime'],
            average_creation_time=data['averageCreationTime'],
            average_verification_time=data['averageVerificationTime'],
        )


def _mean_average_time(results: Sequence[BenchmarkResult], category: Category) -> float:
    times = [r.average_time for r in results if r.category == category]
    if not times:
        return 0.0
    return sum(times) / len(times)


def summarize(results: Sequence[BenchmarkResult]) -> Summary:
    """
    Reduce a result list into the suite summary block.

    Category averages are the mean of the per-scenario average times and
    are 0.0 when the category has no results.
    """
    return Summary(
        total_tests=len(results),
        total_time=sum(r.total_time for r in results),
        average_creation_time=_mean_average_time(results, Category.CREATION),
        average_verification_time=_mean_average_time(results, Category.VERIFICATION),
    )


@dataclass(frozen=True)
class BenchmarkSuite:
    """One complete benchmark run."""
    name: str
    version: str
    timestamp: str
    environment: Environment
    results: Tuple[BenchmarkResult, ...] = ()
    capacity_analysis: Tuple[CapacityTest, ...] = ()
    summary: Optional[Summary] = None

    def __post_init__(self):
        object.__setattr__(self, 'results', tuple(self.results))
        object.__setattr__(self, 'capacity_analysis', tuple(self.capacity_analysis))
        if self.summary is None:
            object.__setattr__(self, 'summary', summarize(self.results))

    def results_for(self, category: Category) -> List[BenchmarkResult]:
        """Results of one category, in run order."""
        return [r for r in self.results if r.category == category]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'version': self.version,
            'timestamp': self.timestamp,
            'environment': self.environment.to_dict(),
            'results': [r.to_dict() for r in self.results],
            'capacityAnalysis': [c.to_dict() for c in self.capacity_analysis],
            'summary': self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BenchmarkSuite':
        return cls(
            name=data['name'],
            version=data['version'],
            timestamp=data['timestamp'],
            environment=Environment.from_dict(data['environment']),
            results=tuple(BenchmarkResult.from_dict(r) for r in data['results']),
            capacity_analysis=tuple(
                CapacityTest.from_dict(c) for c in data['capacityAnalysis']
            ),
            summary=Summary.from_dict(data['summary']),
        )
