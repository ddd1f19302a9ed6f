"""
Process execution utilities for netreport.

Every external tool (ip, iw, nmap, speedtest) is reached through
ProcessRunner.run(), which merges stdout/stderr into one text blob and
reports success as a plain boolean.  Nothing here raises: a failure to
start the executable is reported the same way as a non-zero exit.

Security Note: shell pipelines are only built from static strings and
interface names that passed validate_interface_name().
"""

import logging
import os
import re
import subprocess
from typing import Optional, Tuple

log = logging.getLogger("system")

# Linux allows up to 15 chars; aliases and VLAN suffixes push it a bit further
INTERFACE_NAME_PATTERN = re.compile(r'^[A-Za-z0-9_.:@-]+$')
MAX_INTERFACE_NAME = 64


def validate_interface_name(name: str) -> bool:
    """Validate a network interface name before it reaches a shell."""
    if not name or len(name) > MAX_INTERFACE_NAME:
        return False
    if name.startswith('-'):
        return False
    return bool(INTERFACE_NAME_PATTERN.match(name))


def command_name(command: str) -> str:
    """Return the bare executable name used in error prefixes."""
    return os.path.basename(command) or command


class ProcessRunner:
    """
    Runs external commands and captures their combined output.

    Any object exposing ``run(command, *args) -> (text, ok)`` can stand in
    for this class; tests use a fake keyed by invocation signature.

    Args:
        timeout: Seconds before the process is killed.  ``None`` waits
                 for as long as the process runs.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def run(self, command: str, *args: str) -> Tuple[str, bool]:
        """
        Execute *command* with *args* and wait for it to finish.

        Returns:
            Tuple of (output_text, ok).  On a non-zero exit the text is
            prefixed with ``exit status N``; when the process cannot be
            started the text is the OS error description.
        """
        argv = [command, *args]
        log.debug("Running: %s", " ".join(argv))

        try:
            result = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            partial = e.output or ""
            if isinstance(partial, bytes):
                partial = partial.decode(errors="replace")
            log.warning("Command timed out after %ss: %s", self.timeout, command)
            return f"timed out after {self.timeout}s\n{partial}", False
        except OSError as e:
            log.warning("Command could not start: %s: %s", command, e)
            return str(e), False

        output = result.stdout or ""
        if result.returncode != 0:
            log.warning("Command failed (rc=%d): %s", result.returncode, command)
            return f"exit status {result.returncode}\n{output}", False

        log.debug("Command succeeded: %s", command)
        return output, True


def run_shell(runner, pipeline: str) -> Tuple[str, bool]:
    """Run a static shell pipeline through *runner* via ``sh -c``."""
    return runner.run("sh", "-c", pipeline)
