"""
Thread management for the probe fan-out.

Every probe runs in a named, non-daemon thread started through the
ThreadManager.  The orchestrator launches all of them and then waits on
join_all(), which is the single synchronisation point of a run.

Usage:
    from netreport.utils.threads import ThreadManager

    mgr = ThreadManager()
    mgr.start_thread("probe-bandwidth", worker, args=(slot,))
    mgr.join_all()
"""
import logging
import threading
from typing import Callable, List, Optional

log = logging.getLogger("threads")


class ThreadManager:
    """Starts worker threads and joins them as a group."""

    def __init__(self):
        self._threads: List[threading.Thread] = []
        self._lock = threading.Lock()

    def start_thread(
        self,
        name: str,
        target: Callable,
        args: tuple = (),
        kwargs: Optional[dict] = None,
    ) -> threading.Thread:
        """Start a managed thread.

        Args:
            name:   Thread name for identification.
            target: Function to run in thread.
            args:   Positional arguments for *target*.
            kwargs: Keyword arguments for *target*.

        Returns:
            The started thread.
        """
        if kwargs is None:
            kwargs = {}

        thread = threading.Thread(
            target=target, args=args, kwargs=kwargs, name=name,
        )
        thread.daemon = False

        with self._lock:
            self._threads.append(thread)

        thread.start()
        log.debug("Started managed thread: %s", name)
        return thread

    def join_all(self) -> None:
        """Block until every managed thread has finished.

        There is no timeout: a worker stuck on an external process holds
        up the caller.
        """
        with self._lock:
            threads, self._threads = self._threads, []

        for thread in threads:
            thread.join()
        log.debug("Joined %d managed thread(s)", len(threads))
