# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import threading
from dataclasses import dataclass
from enum import Enum

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import MJError, MJFatalError
from mjsync_lib.core.logger import get_logger
from mjsync_lib.fetch.catalog import CatalogFetcher
from mjsync_lib.properties.job import decode_page
from mjsync_lib.store.store import JobStore

from .processor import JobOutcome, JobProcessor
from .run_state import RunState

logger = get_logger(__name__, show_time=True)


class StopReason(Enum):
    """Reason a synchronization run ended."""

    # All pages up to the page limit were processed.
    PAGE_LIMIT = "page limit reached"
    # Too many consecutive empty pages were returned.
    EMPTY_PAGES = "empty pages"
    # Fetching, storing, or decoding a page failed.
    FAILED = "failed"
    # The run state was deactivated during the run.
    DEACTIVATED = "deactivated"
    # The run state was inactive when the run was requested.
    INACTIVE = "inactive"
    # Another run was in progress when the run was requested.
    BUSY = "busy"


@dataclass
class SyncReport:
    """Statistics of a single synchronization run."""

    pages_fetched: int = 0
    jobs_seen: int = 0
    jobs_downloaded: int = 0
    jobs_skipped: int = 0
    jobs_rejected: int = 0
    stop_reason: StopReason = StopReason.PAGE_LIMIT
    error: MJError | None = None

    def record(self, outcome: JobOutcome) -> None:
        """Count the outcome of one processed job."""
        match outcome:
            case JobOutcome.DOWNLOADED:
                self.jobs_downloaded += 1
            case JobOutcome.SKIPPED:
                self.jobs_skipped += 1
            case JobOutcome.REJECTED:
                self.jobs_rejected += 1

    def summary(self) -> str:
        return (
            f"Run ended ({self.stop_reason.value}): {self.pages_fetched} page(s) fetched, "
            f"{self.jobs_seen} job(s) seen, {self.jobs_downloaded} downloaded, "
            f"{self.jobs_skipped} already present."
        )


class Synchronizer:
    """
    Walks the paginated job listing and materializes every listed job.

    Only one run executes at a time: a run requested while another one is in
    progress returns immediately. Failures to fetch, store, or decode a page
    end the current run; fatal errors raised while processing a job are
    logged and propagated to the caller.
    """

    def __init__(
        self,
        fetcher: CatalogFetcher,
        store: JobStore,
        processor: JobProcessor | None = None,
        state: RunState | None = None,
        max_pages: int = CFG.sync.max_pages,
        empty_page_limit: int = CFG.sync.empty_page_limit,
    ):
        """
        Initialize the synchronizer.

        Args:
            fetcher (CatalogFetcher): Client used to fetch listing pages.
            store (JobStore): Store receiving page dumps and jobs.
            processor (JobProcessor | None): Processor materializing jobs.
                Defaults to a processor writing into `store`.
            state (RunState | None): Run state shared with the processor.
                Defaults to a new active state.
            max_pages (int): Last page number requested during a run (inclusive).
            empty_page_limit (int): Stop a run after this many consecutive empty pages.
                Disabled if 0.
        """
        self._fetcher = fetcher
        self._store = store
        self._processor = processor or JobProcessor(store)
        self._state = state or RunState()
        self._max_pages = max_pages
        self._empty_page_limit = empty_page_limit
        self._run_lock = threading.Lock()

    @property
    def state(self) -> RunState:
        return self._state

    def isRunning(self) -> bool:
        return self._run_lock.locked()

    def runSync(
        self, user_id: str, session_token: str, ordering_mode: str
    ) -> SyncReport:
        """
        Perform one synchronization run.

        Args:
            user_id (str): Identifier of the user whose jobs are synchronized.
            session_token (str): Session token authenticating the listing requests.
            ordering_mode (str): Server-side ordering, `new` or `top-all`.

        Returns:
            SyncReport: Statistics of the run and the reason it ended.

        Raises:
            MJFatalError: If processing a job requires terminating the process.
        """
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Another synchronization run is in progress. Skipping.")
            return SyncReport(stop_reason=StopReason.BUSY)

        try:
            report = self._run(user_id, session_token, ordering_mode)
        finally:
            self._run_lock.release()

        logger.info(report.summary())
        return report

    def _run(self, user_id: str, session_token: str, ordering_mode: str) -> SyncReport:
        report = SyncReport()

        if not self._state.isActive():
            logger.info("Synchronization is disabled. Skipping the run.")
            report.stop_reason = StopReason.INACTIVE
            return report

        try:
            self._store.ensureRoot()
        except MJError as e:
            return self._fail(report, e)

        empty_streak = 0
        for page in range(1, self._max_pages + 1):
            if not self._state.isActive():
                report.stop_reason = StopReason.DEACTIVATED
                return report

            try:
                payload = self._fetcher.fetchPage(
                    user_id, session_token, ordering_mode, page
                )
                report.pages_fetched += 1
                # the raw page is kept even if it cannot be decoded
                self._store.writePage(page, payload)
                jobs = decode_page(payload)
            except MJError as e:
                return self._fail(report, e)

            logger.debug(f"Page {page} lists {len(jobs)} job(s).")
            for job in jobs:
                if not self._state.isActive():
                    report.stop_reason = StopReason.DEACTIVATED
                    return report

                report.jobs_seen += 1
                try:
                    report.record(self._processor.processJob(job, self._state))
                except MJFatalError as e:
                    logger.critical(e.logMessage())
                    raise

            empty_streak = 0 if jobs else empty_streak + 1
            if 0 < self._empty_page_limit <= empty_streak:
                logger.info(
                    f"Received {empty_streak} consecutive empty page(s). Stopping the run."
                )
                report.stop_reason = StopReason.EMPTY_PAGES
                return report

        report.stop_reason = StopReason.PAGE_LIMIT
        return report

    def _fail(self, report: SyncReport, error: MJError) -> SyncReport:
        logger.error(error.logMessage())
        report.stop_reason = StopReason.FAILED
        report.error = error
        return report
