"""
Network context discovery and the concurrent probe set.
"""

from .context import NetworkContext, resolve_context
from .probes import DEFAULT_PROBES, Probe, ProbeResult
from .orchestrator import ProbeResults, run_probes

__all__ = [
    "NetworkContext",
    "resolve_context",
    "DEFAULT_PROBES",
    "Probe",
    "ProbeResult",
    "ProbeResults",
    "run_probes",
]
