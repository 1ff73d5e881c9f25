#!/usr/bin/env python3
"""
Command-line entry point for the SDLP benchmark suite.

Usage:
    python -m sdlp_bench [--format table|json|csv] [--quick] [--config FILE]
                         [--output-dir DIR] [--no-charts] [--verbose | --quiet]
"""

import argparse
import asyncio
import logging
import sys
import traceback
from typing import List, Optional

from .config import BenchmarkConfig
from .formatters import format_output
from .models import OutputFormat
from .runner import BenchmarkRunner


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(prog='sdlp-bench', description='SDLP Performance Benchmark Suite')
    parser.add_argument('--format', choices=[f.value for f in OutputFormat], default='table',
                        help='Output format printed to stdout (default: table)')
    parser.add_argument('--quick', action='store_true',
                        help='Run with reduced iteration counts')
    parser.add_argument('--config', type=str,
                        help='JSON file with configuration overrides')
    parser.add_argument('--output-dir', type=str,
                        help='Also write suite files, charts and a manifest under this directory')
    parser.add_argument('--no-charts', action='store_true',
                        help='Disable chart generation when writing to --output-dir')

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('--verbose', action='store_true', help='Log every scenario')
    verbosity.add_argument('--quiet', action='store_true', help='Only log warnings and errors')
    return parser


def configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format='%(message)s', force=True)


def load_config(args: argparse.Namespace) -> BenchmarkConfig:
    base = BenchmarkConfig.quick() if args.quick else BenchmarkConfig()
    if args.config:
        return BenchmarkConfig.from_file(args.config, base)
    return base


def save_run(output_dir: str, suite, generate_charts: bool) -> None:
    from .results import new_run_root, write_manifest, write_suite
    from .sysinfo import capture_system_info

    run_root = new_run_root(output_dir)
    write_suite(run_root, suite)
    if generate_charts:
        from .charts import generate_suite_charts
        generate_suite_charts(run_root, suite)
    write_manifest(run_root, capture_system_info())
    print(f"📁 Results saved to: {run_root}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = create_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        config = load_config(args)
        runner = BenchmarkRunner(config=config)
        suite = asyncio.run(runner.run_all_benchmarks())

        rendered = format_output(suite, args.format)
        if args.output_dir:
            save_run(args.output_dir, suite, generate_charts=not args.no_charts)

        print("\n✅ Benchmarks completed successfully!\n", file=sys.stderr)
        print(rendered)

        print("\n📊 Quick Summary:", file=sys.stderr)
        print(f"   Total Tests: {suite.summary.total_tests}", file=sys.stderr)
        print(f"   Avg Creation: {suite.summary.average_creation_time:.2f}ms", file=sys.stderr)
        print(f"   Avg Verification: {suite.summary.average_verification_time:.2f}ms", file=sys.stderr)
        return 0

    except Exception as e:
        print(f"\n❌ Benchmark failed: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
