"""
Report rendering.

build_report() is a pure function of the start time, the context and the
probe results.  Sections always come out in the same order; empty context
fields are printed as empty strings rather than hidden.
"""

from datetime import datetime
from typing import Optional

from .diagnostics.context import NetworkContext
from .diagnostics.orchestrator import ProbeResults
from .utils.config import ReportLabels


def build_report(
    started_at: datetime,
    context: NetworkContext,
    results: ProbeResults,
    labels: Optional[ReportLabels] = None,
) -> str:
    """Render the full report text."""
    labels = labels or ReportLabels()
    lines = [
        f"{labels.title} - {started_at.strftime(labels.timestamp_format)}",
        "",
        f"{labels.default_interface}: {context.default_interface}",
        f"{labels.cidr}: {context.cidr}",
        "",
        f"{labels.discovery}:",
        results["discovery"].text,
        f"{labels.wifi_interface}: {context.wifi_interface}",
        f"{labels.frequency}:",
        results["wifi_link"].text,
        "",
        f"{labels.bandwidth}:",
        results["bandwidth"].text,
    ]
    return "\n".join(lines) + "\n"
