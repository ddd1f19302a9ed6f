#!/usr/bin/env python3
"""
netreport launcher.

Resolves the network context, runs the probes concurrently and prints the
report to stdout.  Every failure ends up as text in the report or as a
one-line notice; the exit status is always 0.

Usage:
    netreport                     # defaults, no configuration needed
    netreport --config my.json    # override labels, commands, target
    netreport --debug             # log to the console at DEBUG
"""
import argparse
import logging
import sys
from datetime import datetime
from typing import Callable, Optional

from netreport.diagnostics.context import resolve_context
from netreport.diagnostics.orchestrator import run_probes
from netreport.report import build_report
from netreport.utils.config import NetReportConfig, load_config
from netreport.utils.log import default_log_path, setup_logging
from netreport.utils.system import ProcessRunner
from version import get_version

log = logging.getLogger("launcher")


def collect_report(
    runner,
    config: Optional[NetReportConfig] = None,
    notify: Callable[[str], None] = print,
    clock: Callable[[], datetime] = datetime.now,
) -> str:
    """
    Run the whole pipeline once and return the rendered report.

    Args:
        runner: Process runner used for context discovery and probes
        config: Loaded configuration (defaults when None)
        notify: Receives context-resolution notices as they happen
        clock: Source of the report timestamp, read before any command runs
    """
    config = config or NetReportConfig()
    started_at = clock()

    context = resolve_context(runner, config.labels, notify=notify)
    results = run_probes(context, runner, config.probes)
    return build_report(started_at, context, results, config.labels)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="netreport",
        description="Print a network diagnostic report (devices, wifi frequency, bandwidth).",
    )
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("--debug", action="store_true", help="verbose logging on the console")
    parser.add_argument("--json-logs", action="store_true", help="structured JSON log lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)

    debug = args.debug or config.logging.debug
    setup_logging(
        level=logging.DEBUG if debug else logging.INFO,
        log_file=config.logging.log_file or default_log_path(),
        console_level=logging.DEBUG if debug else logging.WARNING,
        structured=args.json_logs or config.logging.structured,
    )

    runner = ProcessRunner(timeout=config.probes.command_timeout)
    report = collect_report(runner, config)
    sys.stdout.write(report)
    sys.stdout.flush()
    log.info("Report complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
