# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import threading
from collections.abc import Callable

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import CredentialsError, MJFatalError
from mjsync_lib.core.logger import get_logger
from mjsync_lib.properties.credentials import Credentials
from mjsync_lib.sync.synchronizer import SyncReport, Synchronizer

logger = get_logger(__name__, show_time=True)


class Scheduler:
    """
    Triggers synchronization runs periodically and on demand.

    Timer-triggered runs execute on a background thread, every on-demand run
    on a thread of its own. Overlapping runs are turned into no-ops by the
    synchronizer. A fatal error in any run stops the scheduler and is
    re-raised from `wait`.
    """

    def __init__(
        self,
        synchronizer: Synchronizer,
        ordering_mode: str,
        credentials_loader: Callable[[], Credentials] = Credentials.load,
        interval: float = CFG.scheduler.interval,
    ):
        """
        Initialize the scheduler.

        Args:
            synchronizer (Synchronizer): Synchronizer performing the runs.
            ordering_mode (str): Ordering mode used by all runs of this process.
            credentials_loader (Callable[[], Credentials]): Called before every run
                to obtain fresh credentials.
            interval (float): Interval (in seconds) between timer-triggered runs.
        """
        self._synchronizer = synchronizer
        self._ordering_mode = ordering_mode
        self._credentials_loader = credentials_loader
        self._interval = interval

        self._stop = threading.Event()
        self._timer: threading.Thread | None = None
        self._workers: list[threading.Thread] = []
        self._workers_lock = threading.Lock()
        self._fatal_error: MJFatalError | None = None

    @property
    def fatal_error(self) -> MJFatalError | None:
        return self._fatal_error

    def isStopped(self) -> bool:
        return self._stop.is_set()

    def start(self) -> None:
        """
        Start the timer thread. The first timer-triggered run happens one interval after the start.
        """
        if self._timer is not None:
            logger.debug("Scheduler is already started.")
            return

        logger.info(
            f"Synchronizing '{self._ordering_mode}' jobs every {self._interval:g} seconds."
        )
        self._timer = threading.Thread(
            target=self._timerLoop, name="mjsync-timer", daemon=True
        )
        self._timer.start()

    def trigger(self) -> threading.Thread:
        """
        Start an on-demand run on a new thread.

        The run state is re-activated first, so an on-demand run also lifts
        a previous deactivation.

        Returns:
            threading.Thread: The thread executing the run.
        """
        self._synchronizer.state.activate()

        thread = threading.Thread(target=self.runOnce, name="mjsync-sync", daemon=True)
        with self._workers_lock:
            self._workers = [t for t in self._workers if t.is_alive()]
            self._workers.append(thread)
        thread.start()
        return thread

    def cancel(self) -> None:
        """
        Stop the timer and ask in-flight runs to stop at their next check point.
        """
        if not self._stop.is_set():
            logger.info("Cancelling synchronization.")
        self._stop.set()
        self._synchronizer.state.deactivate("cancelled")

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until the scheduler is stopped or the timeout expires.

        Args:
            timeout (float | None): Maximal time to wait in seconds. None waits indefinitely.

        Returns:
            bool: True if the scheduler has stopped.

        Raises:
            MJFatalError: If a run ended with a fatal error.
        """
        stopped = self._stop.wait(timeout)
        if stopped:
            self._joinThreads()

        if self._fatal_error is not None:
            raise self._fatal_error

        return stopped

    def runOnce(self) -> SyncReport | None:
        """
        Perform a single run in the calling thread.

        Returns:
            SyncReport | None: Statistics of the run, or None if the run could not start
            or ended with an error.
        """
        try:
            credentials = self._credentials_loader()
        except CredentialsError as e:
            logger.error(e.logMessage())
            return None

        try:
            return self._synchronizer.runSync(
                credentials.user_id, credentials.session_token, self._ordering_mode
            )
        except MJFatalError as e:
            # the synchronizer has already logged the error
            self._fatal_error = e
            self.cancel()
            return None
        except Exception as e:
            # an unexpected error ends only this run
            logger.critical(e, exc_info=True, stack_info=True)
            return None

    def _timerLoop(self) -> None:
        while not self._stop.wait(self._interval):
            logger.debug("Timer-triggered synchronization run.")
            self.runOnce()

    def _joinThreads(self) -> None:
        current = threading.current_thread()
        with self._workers_lock:
            threads = [*self._workers, self._timer]

        for thread in threads:
            if thread is not None and thread is not current:
                thread.join(CFG.scheduler.join_timeout)
