"""
Tests for the deterministic payload fixtures.
"""

import json

from sdlp_bench.payloads import URL_LENGTH_LIMITS, generate_test_payloads


class TestGenerateTestPayloads:
    """Fixture matrix properties."""

    def test_data_length_matches_size(self):
        for payload in generate_test_payloads():
            assert len(payload.payload_bytes) == payload.size, payload.description

    def test_fixtures_are_deterministic(self):
        first = generate_test_payloads()
        second = generate_test_payloads()
        assert [p.data for p in first] == [p.data for p in second]

    def test_seed_changes_random_content(self):
        default = {p.description: p.data for p in generate_test_payloads()}
        other = {p.description: p.data for p in generate_test_payloads(seed=7)}
        assert default['Base64 encoded data (1KB)'] != other['Base64 encoded data (1KB)']
        assert default['Minimal command (32 bytes)'] == other['Minimal command (32 bytes)']

    def test_fixtures_are_ascii(self):
        for payload in generate_test_payloads():
            assert payload.data.isascii(), payload.description

    def test_padded_small_fixtures_stay_valid_json(self):
        small = [p for p in generate_test_payloads() if p.size <= 128]
        for payload in small:
            assert isinstance(json.loads(payload.data), dict)

    def test_size_range(self):
        sizes = [p.size for p in generate_test_payloads()]
        assert min(sizes) == 32
        assert max(sizes) == 16384
        assert len(sizes) == 10

    def test_expected_ratios_on_larger_fixtures(self):
        for payload in generate_test_payloads():
            if payload.size >= 1024:
                assert 0 < payload.expected_compression_ratio < 1


class TestUrlLengthLimits:

    def test_limits_ascending(self):
        limits = [limit for limit, _ in URL_LENGTH_LIMITS]
        assert limits == sorted(limits)
        assert limits[0] == 2000
