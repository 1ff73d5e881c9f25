"""
Results handling and manifest generation for benchmark runs.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from .formatters import format_output
from .models import BenchmarkSuite, OutputFormat
from .sysinfo import get_timestamp

logger = logging.getLogger(__name__)

SUITE_FILENAMES = {
    OutputFormat.JSON: "suite.json",
    OutputFormat.CSV: "results.csv",
    OutputFormat.TABLE: "report.txt",
}


def new_run_root(outdir: Union[str, Path]) -> Path:
    """Create a new timestamped results directory."""
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    run_root = Path(outdir) / timestamp
    run_root.mkdir(parents=True, exist_ok=True)
    return run_root


def write_suite(run_root: Path, suite: BenchmarkSuite,
                formats: Iterable[Union[OutputFormat, str]] = tuple(OutputFormat)) -> List[Path]:
    """
    Write a suite to disk in the given formats.

    Args:
        run_root: Directory to write files into
        suite: Completed benchmark suite
        formats: Output formats to write

    Returns:
        List of written file paths
    """
    run_root = Path(run_root)
    run_root.mkdir(parents=True, exist_ok=True)
    written_files = []

    for output_format in formats:
        rendered = format_output(suite, output_format)
        path = run_root / SUITE_FILENAMES[OutputFormat(output_format)]
        path.write_text(rendered, encoding="utf-8")
        logger.debug("Wrote %s", path)
        written_files.append(path)

    return written_files


def load_suite(path: Union[str, Path]) -> BenchmarkSuite:
    """Read a suite back from a JSON file written by write_suite."""
    with open(path, "r", encoding="utf-8") as f:
        return BenchmarkSuite.from_dict(json.load(f))


def write_manifest(run_root: Path, sysinfo: Dict[str, Any]) -> Path:
    """Write manifest.json describing every file in the run directory."""
    run_root = Path(run_root)
    files = [
        {
            "path": str(path.relative_to(run_root)),
            "bytes": path.stat().st_size,
        }
        for path in sorted(run_root.glob("**/*"))
        if path.is_file() and path.name != "manifest.json"
    ]
    manifest = {
        "files": files,
        "total_files": len(files),
        "sysinfo": sysinfo,
        "timestamp": get_timestamp(),
    }

    manifest_path = run_root / "manifest.json"
    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2, default=str)
    return manifest_path
