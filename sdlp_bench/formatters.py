"""
Output formatting for benchmark suites.

``format_output`` renders a completed suite as a fixed-width table, a JSON
document or CSV. Rendering never modifies the suite.
"""

import csv
import io
import json
from typing import Callable, Dict, List, Sequence, Union

from .models import BenchmarkResult, BenchmarkSuite, Category, OutputFormat
from .payloads import URL_LENGTH_LIMITS

RESULT_COLUMNS = ['name', 'category', 'iterations', 'totalTime', 'averageTime',
                  'operationsPerSecond']
CAPACITY_COLUMNS = ['payloadSize', 'urlLength', 'efficiency', 'compressionRatio']

SECTION_RULE = '=' * 40
MAX_NAME_WIDTH = 35


class UnsupportedFormatError(ValueError):
    """Raised when an unknown output format is requested."""
    pass


def format_duration(ms: float) -> str:
    if ms < 1:
        return f"{ms * 1000:.2f}µs"
    if ms < 1000:
        return f"{ms:.2f}ms"
    return f"{ms / 1000:.2f}s"


def format_bytes(size: float) -> str:
    if size < 1024:
        return f"{size}B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f}KB"
    return f"{size / (1024 * 1024):.1f}MB"


def format_rate(rate_per_second: float) -> str:
    if rate_per_second > 1000:
        return f"{rate_per_second / 1000:.1f}K ops/sec"
    return f"{round(rate_per_second)} ops/sec"


def format_percent(fraction: float) -> str:
    return f"{fraction * 100:.1f}%"


def format_simple_table(rows: Sequence[Sequence[str]]) -> str:
    """
    Lay rows out in padded columns, the first row being the header.

    Columns are joined with `` | `` and the header is underlined with
    ``-+-`` separators.
    """
    if not rows:
        return ''

    widths = [max(len(str(row[col])) for row in rows) for col in range(len(rows[0]))]
    lines = []
    for index, row in enumerate(rows):
        lines.append(' | '.join(str(cell).ljust(width) for cell, width in zip(row, widths)).rstrip())
        if index == 0:
            lines.append('-+-'.join('-' * width for width in widths))
    return '\n'.join(lines) + '\n\n'


def _truncate(name: str) -> str:
    if len(name) > MAX_NAME_WIDTH:
        return f"{name[:MAX_NAME_WIDTH - 3]}..."
    return name


def _result_notes(result: BenchmarkResult) -> str:
    metadata = result.metadata or {}
    notes = []
    payload_size = metadata.get('payloadSize')
    if isinstance(payload_size, int) and not isinstance(payload_size, bool) and payload_size:
        notes.append(format_bytes(payload_size))
    if metadata.get('compress') is True:
        notes.append('Compressed')
    ratio = metadata.get('compressionRatio')
    if isinstance(ratio, float) and ratio < 1:
        notes.append(f"{round((1 - ratio) * 100)}% smaller")
    return ', '.join(notes)


def _key_insights(suite: BenchmarkSuite) -> List[str]:
    insights = []

    creation = suite.results_for(Category.CREATION)
    if creation:
        fastest = min(creation, key=lambda r: r.average_time)
        slowest = max(creation, key=lambda r: r.average_time)
        insights.append(f"• Fastest Link Creation: {format_duration(fastest.average_time)} ({fastest.name})")
        insights.append(f"• Slowest Link Creation: {format_duration(slowest.average_time)} ({slowest.name})")

    verification = suite.results_for(Category.VERIFICATION)
    if verification:
        average = sum(r.average_time for r in verification) / len(verification)
        insights.append(f"• Average Verification Time: {format_duration(average)}")

    ratios = [
        r.metadata['compressionRatio'] for r in suite.results_for(Category.COMPRESSION)
        if r.metadata and isinstance(r.metadata.get('compressionRatio'), (int, float))
    ]
    if ratios:
        insights.append(f"• Best Compression: {(1 - min(ratios)) * 100:.0f}% reduction")

    capacity = suite.capacity_analysis
    if capacity:
        lengths = [c.url_length for c in capacity]
        insights.append(f"• URL Length Range: {format_bytes(min(lengths))} - {format_bytes(max(lengths))}")
        average_efficiency = sum(c.efficiency for c in capacity) / len(capacity)
        insights.append(f"• Average Payload Efficiency: {format_percent(average_efficiency)}")
        for limit, label in URL_LENGTH_LIMITS:
            fitting = sum(1 for length in lengths if length <= limit)
            insights.append(f"• Fits {label}: {fitting}/{len(lengths)} links")

    return insights


def format_as_table(suite: BenchmarkSuite) -> str:
    env = suite.environment
    summary = suite.summary
    lines = [
        '🔬 SDLP Performance Benchmark Results',
        '=====================================',
        f"   Suite: {suite.name} v{suite.version}",
        f"   Timestamp: {suite.timestamp}",
        '',
        '📋 Environment:',
        f"   Runtime: {env.runtime}",
        f"   Platform: {env.platform}/{env.arch}",
        f"   SDLP Version: {env.sdlp_version}",
        '',
    ]
    output = '\n'.join(lines) + '\n'

    for category in Category:
        results = suite.results_for(category)
        if not results:
            continue
        output += f"📈 {category.value.upper()} PERFORMANCE\n{SECTION_RULE}\n"
        rows = [['Test Name', 'Avg Time', 'Ops/Sec', 'Iterations', 'Notes']]
        for result in results:
            rows.append([
                _truncate(result.name),
                format_duration(result.average_time),
                format_rate(result.operations_per_second),
                str(result.iterations),
                _result_notes(result),
            ])
        output += format_simple_table(rows)

    if suite.capacity_analysis:
        output += f"📏 CAPACITY UTILIZATION ANALYSIS\n{SECTION_RULE}\n"
        rows = [['Payload Size', 'URL Length', 'Efficiency', 'Compression']]
        for test in suite.capacity_analysis:
            rows.append([
                format_bytes(test.payload_size),
                format_bytes(test.url_length),
                format_percent(test.efficiency),
                format_percent(test.compression_ratio) if test.compressed else 'None',
            ])
        output += format_simple_table(rows)

    insights = _key_insights(suite)
    if insights:
        output += f"🎯 KEY INSIGHTS\n{SECTION_RULE}\n" + '\n'.join(insights) + '\n\n'

    output += f"📊 SUMMARY\n{SECTION_RULE}\n"
    output += f"   Total Tests: {summary.total_tests}\n"
    output += f"   Total Time: {format_duration(summary.total_time)}\n"
    output += f"   Avg Creation Time: {format_duration(summary.average_creation_time)}\n"
    output += f"   Avg Verification Time: {format_duration(summary.average_verification_time)}\n"
    return output


def format_as_json(suite: BenchmarkSuite) -> str:
    return json.dumps(suite.to_dict(), indent=2, ensure_ascii=False)


def format_as_csv(suite: BenchmarkSuite) -> str:
    """
    Results block, a blank line, then the capacity block.

    Each block starts with its own header row; quoting follows the csv
    module's minimal quoting rules.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')

    writer.writerow(RESULT_COLUMNS)
    for result in suite.results:
        writer.writerow([
            result.name,
            result.category.value,
            result.iterations,
            f"{result.total_time:.3f}",
            f"{result.average_time:.3f}",
            f"{result.operations_per_second:.2f}",
        ])

    writer.writerow([])
    writer.writerow(CAPACITY_COLUMNS)
    for test in suite.capacity_analysis:
        writer.writerow([
            test.payload_size,
            test.url_length,
            f"{test.efficiency:.4f}",
            f"{test.compression_ratio:.4f}",
        ])

    return buffer.getvalue()


_RENDERERS: Dict[OutputFormat, Callable[[BenchmarkSuite], str]] = {
    OutputFormat.TABLE: format_as_table,
    OutputFormat.JSON: format_as_json,
    OutputFormat.CSV: format_as_csv,
}


def format_output(suite: BenchmarkSuite, output_format: Union[OutputFormat, str]) -> str:
    """
    Render a suite in the requested format.

    Args:
        suite: Completed benchmark suite
        output_format: 'table', 'json' or 'csv'

    Returns:
        The rendered text

    Raises:
        UnsupportedFormatError: If output_format is not a known format
    """
    try:
        selected = OutputFormat(output_format)
    except ValueError:
        raise UnsupportedFormatError(f"Unsupported output format: {output_format!r}") from None
    return _RENDERERS[selected](suite)
