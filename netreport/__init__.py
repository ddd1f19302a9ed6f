"""
netreport - network diagnostic report

Discovers the default interface, its address range and the wireless
interface, then runs a device discovery scan, a wifi link check and a
bandwidth test concurrently and prints one report.

License: GPL-3.0
"""

__version__ = "1.0.0-Beta"
__author__ = "nursedude"
__license__ = "GPL-3.0"

from .diagnostics import (
    NetworkContext,
    ProbeResult,
    ProbeResults,
    resolve_context,
    run_probes,
)
from .report import build_report
from .utils import ProcessRunner, load_config, setup_logging

__all__ = [
    "NetworkContext",
    "ProbeResult",
    "ProbeResults",
    "resolve_context",
    "run_probes",
    "build_report",
    "ProcessRunner",
    "load_config",
    "setup_logging",
]
