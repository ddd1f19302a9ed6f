"""
Configuration management for netreport.

The defaults reproduce the historical report exactly: Portuguese labels,
``nmap -sn`` for discovery and speedtest server 3696 (São Paulo) for the
bandwidth test.  A JSON file may override any of them::

    {
      "probes": {"bandwidth_target": "1234", "command_timeout": 120},
      "labels": {"title": "Network Report"},
      "logging": {"structured": true}
    }

Unknown keys and invalid values are reported as warnings and replaced by
their defaults; a broken config file never stops a run.
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Dict, Any, List, Tuple

from . import common

log = logging.getLogger("config")


@dataclass
class ProbeSettings:
    """External commands and parameters used by the probes."""

    discovery_command: str = "nmap"
    discovery_args: List[str] = field(default_factory=lambda: ["-sn"])
    wifi_command: str = "iw"
    frequency_marker: str = "freq:"
    bandwidth_command: str = "speedtest"
    bandwidth_target: str = "3696"
    command_timeout: Optional[float] = None  # seconds, None = wait forever


@dataclass
class ReportLabels:
    """Text fragments of the rendered report and console notices."""

    title: str = "Relatório de Rede"
    timestamp_format: str = "%d/%m/%Y %H:%M:%S"
    default_interface: str = "Interface padrão"
    cidr: str = "CIDR"
    discovery: str = "Dispositivos conectados (nmap -sn)"
    wifi_interface: str = "Interface WiFi"
    frequency: str = "Frequência de conexão"
    bandwidth: str = "Speedtest (São Paulo)"
    cidr_error: str = "CIDR error"
    wifi_error: str = "WiFi interface error"


@dataclass
class LoggingSettings:
    """Where and how log records are written."""

    log_file: Optional[str] = None  # None = default rotating file
    structured: bool = False
    debug: bool = False


@dataclass
class NetReportConfig:
    """Top-level configuration container."""

    probes: ProbeSettings = field(default_factory=ProbeSettings)
    labels: ReportLabels = field(default_factory=ReportLabels)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


_SECTIONS = {
    "probes": ProbeSettings,
    "labels": ReportLabels,
    "logging": LoggingSettings,
}


def _check_value(section: str, name: str, value: Any) -> Optional[str]:
    """Return a warning for an invalid value, or None when it is acceptable."""
    if section == "probes":
        if name == "command_timeout":
            if value is None:
                return None
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                return f"probes.command_timeout must be a positive number or null, got {value!r}"
            return None
        if name == "discovery_args":
            if not isinstance(value, list) or not all(isinstance(a, str) for a in value):
                return f"probes.discovery_args must be a list of strings, got {value!r}"
            return None
        if not isinstance(value, str) or not value.strip():
            return f"probes.{name} must be a non-empty string, got {value!r}"
        if name.endswith("_command") and value.startswith("-"):
            return f"probes.{name} must not start with '-'"
        return None
    if section == "labels":
        if not isinstance(value, str):
            return f"labels.{name} must be a string, got {type(value).__name__}"
        return None
    if section == "logging":
        if name == "log_file":
            if value is not None and not isinstance(value, str):
                return f"logging.log_file must be a string or null, got {type(value).__name__}"
            return None
        if not isinstance(value, bool):
            return f"logging.{name} must be true or false, got {value!r}"
    return None


def validate_config(data: Any) -> List[str]:
    """Validate raw config structure and return a list of warnings.

    Returns an empty list when the config is valid.
    """
    if not isinstance(data, dict):
        return ["Config is not a JSON object"]

    warnings = []
    for section, values in data.items():
        cls = _SECTIONS.get(section)
        if cls is None:
            warnings.append(f"unknown config section '{section}'")
            continue
        if not isinstance(values, dict):
            warnings.append(f"{section} section must be a JSON object")
            continue
        known = {f.name for f in fields(cls)}
        for name, value in values.items():
            if name not in known:
                warnings.append(f"unknown key '{section}.{name}'")
                continue
            problem = _check_value(section, name, value)
            if problem:
                warnings.append(problem)
    return warnings


def config_from_dict(data: Dict[str, Any]) -> Tuple[NetReportConfig, List[str]]:
    """Build a NetReportConfig from raw JSON data.

    Invalid entries are dropped (the default stays in place).

    Returns:
        (config, warnings)
    """
    warnings = validate_config(data)
    if not isinstance(data, dict):
        return NetReportConfig(), warnings

    sections = {}
    for section, cls in _SECTIONS.items():
        values = data.get(section)
        if not isinstance(values, dict):
            sections[section] = cls()
            continue
        known = {f.name for f in fields(cls)}
        accepted = {
            name: value for name, value in values.items()
            if name in known and _check_value(section, name, value) is None
        }
        sections[section] = cls(**accepted)
    return NetReportConfig(**sections), warnings


def load_config(path: Optional[str] = None) -> NetReportConfig:
    """Load configuration from *path* (default ``~/.config/netreport/config.json``).

    A missing file yields the defaults silently; an unreadable or invalid
    file yields the defaults with a warning.
    """
    config_file = Path(path) if path else Path(common.CONFIG_PATH)

    if not config_file.exists():
        if path:
            log.warning("Config file %s not found, using defaults", config_file)
        else:
            log.debug("No config file found, using defaults")
        return NetReportConfig()

    try:
        with open(config_file) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        log.warning("Invalid config file %s, using defaults: %s", config_file, e)
        return NetReportConfig()
    except OSError as e:
        log.warning("Could not read config file %s, using defaults: %s", config_file, e)
        return NetReportConfig()

    config, warnings = config_from_dict(data)
    for warning in warnings:
        log.warning(warning)
    log.debug("Loaded configuration from %s", config_file)
    return config
