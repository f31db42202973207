r"""
Result collection and reporting.

Renders the text report and exports results
to JSON and CSV.

    from mongo_bench.reporting import ResultCollector, render_report

    print(render_report(results))
"""

from mongo_bench.reporting.collector import ResultCollector, SessionInfo
from mongo_bench.reporting.formats import (
    CsvExporter,
    JsonExporter,
    TextExporter,
    format_duration,
    render_report,
)

__all__ = [
    "CsvExporter",
    "JsonExporter",
    "ResultCollector",
    "SessionInfo",
    "TextExporter",
    "format_duration",
    "render_report",
]
