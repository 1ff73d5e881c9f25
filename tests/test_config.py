"""
Tests for benchmark configuration.
"""

import json

import pytest

from sdlp_bench.config import BenchmarkConfig, ConfigError


class TestBenchmarkConfig:
    """Defaults, presets and validation."""

    def test_default_iteration_tiers(self):
        config = BenchmarkConfig()

        assert config.iterations_for_size(32) == 1000
        assert config.iterations_for_size(1023) == 1000
        assert config.iterations_for_size(1024) == 500
        assert config.iterations_for_size(5120) == 200
        assert config.iterations_for_size(10240) == 100
        assert config.iterations_for_size(16384) == 100

    def test_default_counts(self):
        config = BenchmarkConfig()
        assert config.warmup_iterations == 5
        assert config.verification_iterations == 100
        assert config.compression_threshold == 256

    def test_warmup_capped_by_iterations(self):
        config = BenchmarkConfig()
        assert config.warmup_for(3) == 3
        assert config.warmup_for(100) == 5

    def test_quick_preset_is_smaller(self):
        quick = BenchmarkConfig.quick()
        full = BenchmarkConfig()
        assert quick.iterations_for_size(32) < full.iterations_for_size(32)
        assert quick.verification_iterations < full.verification_iterations

    @pytest.mark.parametrize("overrides", [
        {"verification_iterations": 0},
        {"warmup_iterations": -1},
        {"compression_iterations": 0},
        {"iteration_tiers": [[1024, 0]]},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ConfigError):
            BenchmarkConfig.from_dict(overrides)

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown configuration keys"):
            BenchmarkConfig.from_dict({"iterations": 5})

    def test_tiers_from_json_lists(self):
        config = BenchmarkConfig.from_dict({"iteration_tiers": [[100, 7], [200, 3]]})
        assert config.iteration_tiers == ((100, 7), (200, 3))
        assert config.iterations_for_size(150) == 3


class TestConfigFile:
    """Loading overrides from disk."""

    def test_from_file(self, tmp_path):
        path = tmp_path / "bench.json"
        path.write_text(json.dumps({"verification_iterations": 7, "suite_name": "Nightly"}))

        config = BenchmarkConfig.from_file(str(path))

        assert config.verification_iterations == 7
        assert config.suite_name == "Nightly"
        assert config.warmup_iterations == 5

    def test_from_file_over_base(self, tmp_path):
        path = tmp_path / "bench.json"
        path.write_text(json.dumps({"verification_iterations": 7}))

        config = BenchmarkConfig.from_file(str(path), BenchmarkConfig.quick())

        assert config.verification_iterations == 7
        assert config.max_size_iterations == BenchmarkConfig.quick().max_size_iterations

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            BenchmarkConfig.from_file(str(tmp_path / "missing.json"))

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bench.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            BenchmarkConfig.from_file(str(path))

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "bench.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            BenchmarkConfig.from_file(str(path))
