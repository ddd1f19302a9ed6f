"""
Concurrent probe execution.

run_probes() starts one managed thread per probe the moment context
resolution is done and blocks until every thread has finished.  Each
worker owns exactly one slot of the ProbeResults record, so the slots need
no lock; the join in ThreadManager.join_all() is the only barrier.

There is no cancellation and no timeout here: a probe whose external
command hangs holds up the whole run.
"""

import logging
import time
import traceback
from typing import Dict, Iterable, Optional, Sequence

from ..utils.config import ProbeSettings
from ..utils.threads import ThreadManager
from .context import NetworkContext
from .probes import DEFAULT_PROBES, Probe, ProbeResult

log = logging.getLogger("orchestrator")


class ProbeResults:
    """
    Shared result record with one write-once slot per probe.

    Slots are created up front, one per probe name; a slot is only read
    after the join, so it never needs a lock.
    """

    def __init__(self, names: Iterable[str]):
        self._slots: Dict[str, Optional[ProbeResult]] = {name: None for name in names}

    def fill(self, name: str, result: ProbeResult) -> None:
        """Store the result for *name*.  Each slot accepts exactly one write."""
        if name not in self._slots:
            raise KeyError(f"no result slot for probe {name!r}")
        if self._slots[name] is not None:
            raise RuntimeError(f"result slot {name!r} written twice")
        self._slots[name] = result

    def __getitem__(self, name: str) -> ProbeResult:
        result = self._slots[name]
        if result is None:
            raise KeyError(f"probe {name!r} has not produced a result")
        return result


def _probe_worker(
    probe: Probe,
    context: NetworkContext,
    runner,
    settings: ProbeSettings,
    results: ProbeResults,
) -> None:
    start = time.monotonic()
    try:
        result = probe(context, runner, settings)
    except Exception as e:
        log.error("Probe %s raised %s: %s", probe.name, type(e).__name__, e)
        log.debug("Stack trace:\n%s", traceback.format_exc())
        result = ProbeResult(probe.name, f"{probe.name} error: {e}")
    results.fill(probe.name, result)
    log.info("probe %s finished in %.1fs", probe.name, time.monotonic() - start)


def run_probes(
    context: NetworkContext,
    runner,
    settings: Optional[ProbeSettings] = None,
    probes: Sequence[Probe] = DEFAULT_PROBES,
) -> ProbeResults:
    """
    Run every probe concurrently and wait for all of them.

    Args:
        context: Resolved network context, read-only for the probes
        runner: Process runner shared by all probes
        settings: Probe commands and parameters
        probes: Probes to run, in report order

    Returns:
        ProbeResults with one filled slot per probe
    """
    settings = settings or ProbeSettings()
    names = [p.name for p in probes]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"duplicate probe names: {', '.join(duplicates)}")

    results = ProbeResults(names)
    mgr = ThreadManager()

    log.info("Launching %d probe(s)", len(probes))
    for probe in probes:
        mgr.start_thread(
            f"probe-{probe.name}",
            _probe_worker,
            args=(probe, context, runner, settings, results),
        )

    mgr.join_all()
    return results
