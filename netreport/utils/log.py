"""
Centralized logging configuration for netreport.

Call setup_logging() once at startup (launcher.py).  Individual modules
obtain their own loggers via logging.getLogger() with a descriptive name.

The report itself goes to stdout; log records go to stderr and, when the
log directory is usable, to a rotating file.  A home directory that cannot
be written never stops a run: the file log is simply skipped.
"""
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from netreport.utils import common

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per record, tagged with the worker thread.

    Probe threads are named ``probe-<name>``, so the ``probe`` key lets a
    log consumer group records per probe::

        {"time":"2025-01-15T12:00:00+00:00","level":"INFO","logger":"orchestrator",
         "probe":"bandwidth","msg":"probe bandwidth finished in 21.4s"}
    """

    def format(self, record):
        entry = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.threadName.startswith("probe-"):
            entry["probe"] = record.threadName[len("probe-"):]
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level=logging.INFO, log_file=None, console_level=None,
                  structured=False):
    """Configure project-wide logging.  Safe to call multiple times.

    Args:
        level: Root logger level (default INFO).
        log_file: Optional path to a rotating log file; None logs to the
                  console only.
        console_level: Console handler level, independent of *level*
                       (the CLI keeps it at WARNING unless --debug).
        structured: Use JSON structured logging format (default False).

    Returns:
        True if handlers were installed by this call.
    """
    global _configured
    if _configured:
        return False
    _configured = True

    if structured:
        formatter = JsonFormatter()
    else:
        fmt = "%(asctime)s [%(levelname)s] %(name)s (%(threadName)s): %(message)s"
        datefmt = "%Y-%m-%d %H:%M:%S"
        formatter = logging.Formatter(fmt, datefmt=datefmt)

    root = logging.getLogger()
    root.setLevel(min(level, console_level or level))

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level or level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_file, maxBytes=1_000_000, backupCount=3,
            )
        except OSError as e:
            root.warning("Could not open log file %s: %s", log_file, e)
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
    return True


def default_log_path() -> Optional[str]:
    """Return the default rotating log file path, or None if unusable.

    Uses ``~/.config/netreport/logs/netreport.log``, respecting
    ``SUDO_USER`` so logs land in the real user's home even under sudo.
    """
    try:
        os.makedirs(common.LOG_DIR, exist_ok=True)
    except OSError as e:
        logging.getLogger("log").debug("Log directory %s unusable: %s", common.LOG_DIR, e)
        return None
    return os.path.join(common.LOG_DIR, "netreport.log")
