"""
Network context discovery.

Resolves the default interface, its IPv4 CIDR and the first wireless
interface.  Each lookup returns its value together with an error string
instead of raising; resolve_context() prints the errors as one-line
notices and leaves the matching field empty so the probes can still run.
"""

import ipaddress
import logging
import shlex
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from ..utils.config import ReportLabels
from ..utils.system import run_shell, validate_interface_name

log = logging.getLogger("context")

DEFAULT_ROUTE_PIPELINE = "ip route | awk '/default/ {print $5}'"
ADDRESS_PIPELINE = "ip -o -f inet addr show dev {iface} | awk '{{print $4}}'"
WIFI_PIPELINE = "iw dev | awk '$1==\"Interface\"{print $2}'"


@dataclass(frozen=True)
class NetworkContext:
    """Discovered network facts.  An empty string means unresolved."""

    default_interface: str = ""
    cidr: str = ""
    wifi_interface: str = ""


def _first_token(text: str) -> str:
    tokens = text.split()
    return tokens[0] if tokens else ""


def get_cidr(runner) -> Tuple[str, str, Optional[str]]:
    """
    Find the default route's interface and its IPv4 CIDR.

    The interface name is returned even when the address lookup fails.

    Returns:
        Tuple of (cidr, interface, error) where error is None on success
    """
    out, ok = run_shell(runner, DEFAULT_ROUTE_PIPELINE)
    if not ok:
        return "", "", f"get default interface: {out.strip()}"

    iface = _first_token(out)
    if not iface:
        return "", "", "default interface not found"
    if not validate_interface_name(iface):
        return "", "", f"invalid interface name: {iface!r}"

    out, ok = run_shell(runner, ADDRESS_PIPELINE.format(iface=shlex.quote(iface)))
    if not ok:
        return "", iface, f"get CIDR: {out.strip()}"

    cidr = _first_token(out)
    if not cidr:
        return "", iface, f"no IPv4 address on {iface}"
    try:
        ipaddress.IPv4Interface(cidr)
    except ValueError:
        return "", iface, f"unexpected CIDR value {cidr!r}"

    return cidr, iface, None


def get_wifi_interface(runner) -> Tuple[str, Optional[str]]:
    """
    Find the first wireless interface reported by ``iw dev``.

    Returns:
        Tuple of (interface, error) where error is None on success
    """
    out, ok = run_shell(runner, WIFI_PIPELINE)
    if not ok:
        return "", f"list wifi interfaces: {out.strip()}"

    iface = _first_token(out)
    if not iface:
        return "", "no wifi interface found"
    return iface, None


def resolve_context(
    runner,
    labels: Optional[ReportLabels] = None,
    notify: Callable[[str], None] = print,
) -> NetworkContext:
    """
    Run both lookups in order and build the NetworkContext.

    Errors are passed to *notify* as soon as they occur and never stop
    the run.
    """
    labels = labels or ReportLabels()

    cidr, iface, err = get_cidr(runner)
    if err:
        notice = f"{labels.cidr_error}: {err}"
        log.info(notice)
        notify(notice)

    wifi, err = get_wifi_interface(runner)
    if err:
        notice = f"{labels.wifi_error}: {err}"
        log.info(notice)
        notify(notice)

    context = NetworkContext(default_interface=iface, cidr=cidr, wifi_interface=wifi)
    log.debug("Resolved context: %s", context)
    return context
