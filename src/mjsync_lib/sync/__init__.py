# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Synchronization of a user's completed jobs into the local job store.

This module defines the `Synchronizer`, which walks the paginated listing
and dumps every page before decoding it, the `JobProcessor`, which
idempotently downloads a single job and marks it as completed, and the
`RunState` switch through which unsafe input or a cancellation stops a run.
"""

from .processor import JobOutcome, JobProcessor
from .run_state import RunState
from .synchronizer import StopReason, SyncReport, Synchronizer

__all__ = [
    "JobOutcome",
    "JobProcessor",
    "RunState",
    "StopReason",
    "SyncReport",
    "Synchronizer",
]
