"""
Diagnostic probes.

Each probe is a plain function ``(context, runner, settings) -> ProbeResult``
and never raises: a skipped prerequisite becomes a fixed placeholder text,
a failed command becomes ``"<tool> error: <output>"``.  DEFAULT_PROBES
lists them in report order.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Tuple

from ..utils.config import ProbeSettings
from ..utils.system import command_name
from .context import NetworkContext

log = logging.getLogger("probes")

CIDR_NOT_FOUND = "CIDR not found"
WIFI_NOT_FOUND = "wifi interface not found"


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one probe: its label plus output or diagnostic text."""

    label: str
    text: str


@dataclass(frozen=True)
class Probe:
    """A named probe function."""

    name: str
    func: Callable[..., ProbeResult]

    def __call__(self, context: NetworkContext, runner, settings: ProbeSettings) -> ProbeResult:
        return self.func(context, runner, settings)


def _error_text(command: str, output: str) -> str:
    return f"{command_name(command)} error: {output}"


def extract_frequency(output: str, marker: str = "freq:") -> str:
    """
    Pick the frequency line out of ``iw dev <iface> link`` output.

    Returns the first line whose stripped form starts with *marker*,
    stripped; the full untouched output when there is none.
    """
    for line in output.split("\n"):
        stripped = line.strip()
        if stripped.startswith(marker):
            return stripped
    return output


def run_discovery(context: NetworkContext, runner, settings: ProbeSettings) -> ProbeResult:
    """Ping-scan the local network for connected devices."""
    if not context.cidr:
        log.debug("Discovery skipped: no CIDR")
        return ProbeResult("discovery", CIDR_NOT_FOUND)

    cmd = settings.discovery_command
    out, ok = runner.run(cmd, *settings.discovery_args, context.cidr)
    if not ok:
        return ProbeResult("discovery", _error_text(cmd, out))
    return ProbeResult("discovery", out)


def run_wifi_link(context: NetworkContext, runner, settings: ProbeSettings) -> ProbeResult:
    """Report the frequency of the current wireless link."""
    if not context.wifi_interface:
        log.debug("Wifi link probe skipped: no wifi interface")
        return ProbeResult("wifi_link", WIFI_NOT_FOUND)

    cmd = settings.wifi_command
    out, ok = runner.run(cmd, "dev", context.wifi_interface, "link")
    if not ok:
        return ProbeResult("wifi_link", _error_text(cmd, out))
    return ProbeResult("wifi_link", extract_frequency(out, settings.frequency_marker))


def run_bandwidth(context: NetworkContext, runner, settings: ProbeSettings) -> ProbeResult:
    """Run a speed test against the configured server.  Needs no context."""
    cmd = settings.bandwidth_command
    out, ok = runner.run(cmd, "--server", settings.bandwidth_target, "--simple")
    if not ok:
        return ProbeResult("bandwidth", _error_text(cmd, out))
    return ProbeResult("bandwidth", out)


DEFAULT_PROBES: Tuple[Probe, ...] = (
    Probe("discovery", run_discovery),
    Probe("wifi_link", run_wifi_link),
    Probe("bandwidth", run_bandwidth),
)
