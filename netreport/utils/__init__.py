"""
Utility modules for netreport.

Provides process execution, thread management, logging and
configuration loading.
"""

from .log import setup_logging, default_log_path
from .system import ProcessRunner, validate_interface_name
from .threads import ThreadManager
from .config import NetReportConfig, ProbeSettings, ReportLabels, load_config

__all__ = [
    "setup_logging",
    "default_log_path",
    "ProcessRunner",
    "validate_interface_name",
    "ThreadManager",
    "NetReportConfig",
    "ProbeSettings",
    "ReportLabels",
    "load_config",
]
