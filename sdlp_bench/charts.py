"""
Chart generation for benchmark suites.
"""

import logging
from pathlib import Path
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from .models import BenchmarkSuite, Category  # noqa: E402

logger = logging.getLogger(__name__)


def generate_suite_charts(output_root: Path, suite: BenchmarkSuite) -> List[Path]:
    """
    Render the timing and capacity charts for a suite.

    Args:
        output_root: Run directory; charts go to its charts/ subdirectory
        suite: Completed benchmark suite

    Returns:
        Paths of the PNG files written
    """
    charts_dir = Path(output_root) / 'charts'
    charts_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for category in (Category.CREATION, Category.VERIFICATION):
        path = generate_timing_chart(charts_dir, suite, category)
        if path:
            written.append(path)

    path = generate_capacity_chart(charts_dir, suite)
    if path:
        written.append(path)

    logger.info("Charts saved to: %s", charts_dir)
    return written


def generate_timing_chart(charts_dir: Path, suite: BenchmarkSuite, category: Category):
    """Horizontal bar chart of average time per scenario."""
    results = suite.results_for(category)
    if not results:
        return None

    names = [r.name for r in results]
    averages = [r.average_time for r in results]
    y = np.arange(len(names))

    fig, ax = plt.subplots(figsize=(12, max(4, len(names) * 0.4)))
    bars = ax.barh(y, averages, alpha=0.8, color='#2E86AB')
    ax.set_yticks(y)
    ax.set_yticklabels(names, fontsize=8)
    ax.invert_yaxis()
    ax.set_xlabel('Average Time (ms)')
    ax.set_title(f'SDLP {category.value.capitalize()} Time by Scenario')
    ax.grid(True, axis='x', alpha=0.3)

    for bar in bars:
        width = bar.get_width()
        ax.annotate(f'{width:.3f}',
                    xy=(width, bar.get_y() + bar.get_height() / 2),
                    xytext=(3, 0),
                    textcoords="offset points",
                    ha='left', va='center', fontsize=8)

    path = charts_dir / f'{category.value}_times.png'
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


def generate_capacity_chart(charts_dir: Path, suite: BenchmarkSuite):
    """Efficiency versus payload size, split by compressed and uncompressed links."""
    capacity = suite.capacity_analysis
    if not capacity:
        return None

    plain = [c for c in capacity if not c.compressed]
    compressed = [c for c in capacity if c.compressed]

    fig, ax = plt.subplots(figsize=(10, 6))
    for tests, label, color in ((plain, 'Uncompressed', '#2E86AB'),
                                (compressed, 'Brotli', '#A23B72')):
        if not tests:
            continue
        sizes = np.array([t.payload_size for t in tests])
        efficiency = np.array([t.efficiency for t in tests]) * 100
        ax.scatter(sizes, efficiency, label=label, color=color, alpha=0.8)

    ax.set_xscale('log')
    ax.set_xlabel('Payload Size (bytes)')
    ax.set_ylabel('Payload Efficiency (%)')
    ax.set_title('SDLP Link Capacity Utilization')
    ax.legend()
    ax.grid(True, alpha=0.3)

    path = charts_dir / 'capacity_efficiency.png'
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path
