# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Periodic and on-demand triggering of synchronization runs.

The `Scheduler` runs the synchronizer on a fixed interval from a background
thread, starts additional runs on request, and supports cooperative
cancellation when the owning session ends.
"""

from .scheduler import Scheduler

__all__ = [
    "Scheduler",
]
