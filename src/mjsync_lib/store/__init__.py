# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
On-disk layout of synchronized jobs.

This module defines the `JobStore` class, which maps job identifiers and page
numbers to paths inside the jobs directory and performs the individual writes
(page dumps, job metadata, completion sentinels), and `JobRecord`, a read-only
summary of one job directory.
"""

from .store import JobRecord, JobStore

__all__ = [
    "JobRecord",
    "JobStore",
]
