# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import threading

from mjsync_lib.core.logger import get_logger

logger = get_logger(__name__)


class RunState:
    """
    Switch gating whether synchronization may proceed.

    The state is shared by the synchronizer and the job processor and checked
    before every page and every job. Once deactivated (by an unsafe job
    identifier or by an external cancellation) all remaining work of the
    current run is skipped and later runs are no-ops until `activate` is called.
    """

    def __init__(self, active: bool = True):
        self._active = threading.Event()
        if active:
            self._active.set()

    def isActive(self) -> bool:
        return self._active.is_set()

    def activate(self) -> None:
        """Allow synchronization runs to proceed."""
        if not self._active.is_set():
            logger.debug("Synchronization re-activated.")
        self._active.set()

    def deactivate(self, reason: str | None = None) -> None:
        """
        Stop the current run at its next check point and disable later runs.

        Args:
            reason (str | None): Optional description logged at debug level.
        """
        self._active.clear()
        logger.debug(
            f"Synchronization deactivated{f': {reason}' if reason else ''}."
        )
