r"""
Export formats for benchmark results.

    from mongo_bench.reporting.formats import TextExporter, render_report

    print(render_report(results))
    JsonExporter().export(collector, "results.json")
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from mongo_bench.reporting.collector import ResultCollector
from mongo_bench.types import BenchmarkResult

__all__ = [
    "BaseExporter",
    "CsvExporter",
    "JsonExporter",
    "TextExporter",
    "format_duration",
    "render_report",
]

_MICROSECOND = 1_000
_MILLISECOND = 1_000_000
_SECOND = 1_000_000_000
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE


def _with_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}." + f"{frac:0{digits}d}".rstrip("0")


def format_duration(ns: int) -> str:
    """Format nanoseconds as a compact duration: 850ns, 1.5µs, 11ms, 2m3.5s."""
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < _MICROSECOND:
        return f"{sign}{ns}ns"
    if ns < _MILLISECOND:
        return f"{sign}{_with_fraction(ns, _MICROSECOND)}µs"
    if ns < _SECOND:
        return f"{sign}{_with_fraction(ns, _MILLISECOND)}ms"

    hours, rest = divmod(ns, _HOUR)
    minutes, rest = divmod(rest, _MINUTE)
    text = sign
    if hours:
        text += f"{hours}h"
    if hours or minutes:
        text += f"{minutes}m"
    return text + f"{_with_fraction(rest, _SECOND)}s"


def render_report(results: Sequence[BenchmarkResult]) -> str:
    """Render results as the plain text report, in input order."""
    lines = [
        "MongoDB Benchmark Results",
        "=======================",
    ]

    for result in results:
        lines.append("")
        lines.append(f"- Query: {result.name}")
        lines.append(f"  Description: {result.description}")
        lines.append(f"  Collection: {result.collection}")
        lines.append(f"  Iterations: {result.iterations}")
        lines.append(f"  Total Time: {format_duration(result.total_ns)}")
        lines.append(f"  Average Time: {format_duration(result.avg_ns)}")
        lines.append(f"  Min Time: {format_duration(result.min_ns)}")
        lines.append(f"  Max Time: {format_duration(result.max_ns)}")

    return "\n".join(lines)


class BaseExporter(ABC):
    """Base class for result exporters."""

    extension: str = ".txt"

    def export(self, collector: ResultCollector, path: str | Path) -> None:
        """Export results to file."""
        Path(path).write_text(self.to_string(collector), encoding="utf-8")

    @abstractmethod
    def to_string(self, collector: ResultCollector) -> str:
        """Export results to string."""
        ...


class TextExporter(BaseExporter):
    """Export results as the plain text report."""

    def to_string(self, collector: ResultCollector) -> str:
        return render_report(collector.results)


class JsonExporter(BaseExporter):
    """Export results to JSON format."""

    extension = ".json"

    def __init__(self, *, indent: int = 2) -> None:
        self._indent = indent

    def to_string(self, collector: ResultCollector) -> str:
        return json.dumps(collector.to_dict(), indent=self._indent)


class CsvExporter(BaseExporter):
    """Export results to CSV format."""

    extension = ".csv"

    def to_string(self, collector: ResultCollector) -> str:
        lines = ["session_id,query,collection,kind,iterations,failed,total_ms,avg_ms,min_ms,max_ms"]

        session_id = collector.session.session_id

        for result in collector.results:
            line = ",".join([
                session_id,
                _csv_field(result.name),
                _csv_field(result.collection),
                result.kind.name.lower(),
                str(result.iterations),
                str(result.failed_iterations),
                f"{result.total_ms:.3f}",
                f"{result.avg_ms:.3f}",
                f"{result.min_ms:.3f}",
                f"{result.max_ms:.3f}",
            ])
            lines.append(line)

        return "\n".join(lines)


def _csv_field(value: str) -> str:
    if any(c in value for c in ',"\n'):
        return '"' + value.replace('"', '""') + '"'
    return value
