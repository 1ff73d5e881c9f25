"""
Configuration management for the SDLP benchmark harness.

Defaults reproduce the standard run; ``quick()`` trims iteration counts for
smoke runs, and ``from_file()`` applies overrides from a JSON document.
"""

import json
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Tuple


class ConfigError(Exception):
    """Raised when configuration operations fail."""
    pass


@dataclass(frozen=True)
class BenchmarkConfig:
    """
    Knobs for one benchmark run.

    ``iteration_tiers`` maps payload sizes to creation iteration counts: the
    first tier whose bound exceeds the payload size wins, and payloads at or
    above every bound use ``max_size_iterations``.
    """
    suite_name: str = "SDLP Performance Benchmark Suite"
    suite_version: str = "1.0.0"
    payload_type: str = "application/json"
    warmup_iterations: int = 5
    verification_iterations: int = 100
    compression_iterations: int = 50
    compression_threshold: int = 256
    iteration_tiers: Tuple[Tuple[int, int], ...] = ((1024, 1000), (5120, 500), (10240, 200))
    max_size_iterations: int = 100

    def __post_init__(self):
        object.__setattr__(
            self, 'iteration_tiers',
            tuple((int(bound), int(count)) for bound, count in self.iteration_tiers)
        )
        self.validate()

    def validate(self) -> None:
        """
        Check that every count is usable.

        Raises:
            ConfigError: If a count is out of range
        """
        if self.warmup_iterations < 0:
            raise ConfigError("warmup_iterations must be >= 0")
        for name in ('verification_iterations', 'compression_iterations', 'max_size_iterations'):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be >= 1")
        if self.compression_threshold < 0:
            raise ConfigError("compression_threshold must be >= 0")
        for bound, count in self.iteration_tiers:
            if count < 1:
                raise ConfigError(f"Iteration tier for sizes below {bound} must be >= 1")

    def iterations_for_size(self, size: int) -> int:
        for bound, count in self.iteration_tiers:
            if size < bound:
                return count
        return self.max_size_iterations

    def warmup_for(self, iterations: int) -> int:
        return min(self.warmup_iterations, iterations)

    @classmethod
    def quick(cls) -> 'BenchmarkConfig':
        """Reduced iteration counts for fast runs."""
        return cls(
            warmup_iterations=2,
            verification_iterations=20,
            compression_iterations=10,
            iteration_tiers=((1024, 100), (5120, 50), (10240, 20)),
            max_size_iterations=10,
        )

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any],
                  base: 'BenchmarkConfig' = None) -> 'BenchmarkConfig':
        base = base or cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        try:
            return replace(base, **overrides)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration value: {e}")

    @classmethod
    def from_file(cls, path: str, base: 'BenchmarkConfig' = None) -> 'BenchmarkConfig':
        """
        Load overrides from a JSON file.

        Args:
            path: Path to a JSON object of field overrides
            base: Configuration the overrides apply to (defaults to cls())

        Returns:
            The resulting configuration

        Raises:
            ConfigError: If the file is missing, malformed or invalid
        """
        if not os.path.exists(path):
            raise ConfigError(f"Config file not found: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                overrides = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid config file {path}: {e}")
        if not isinstance(overrides, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")
        return cls.from_dict(overrides, base)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
