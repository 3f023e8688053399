# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Core implementation of the mjsync command-line tool.

This package polls the listing of a user's completed generation jobs and
mirrors every job, its metadata and its output images, into a local jobs
directory exactly once, resuming interrupted downloads. All mjsync CLI
commands ultimately delegate to the functionality implemented here.
"""

from .mjsync import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "core",
    "fetch",
    "login",
    "properties",
    "schedule",
    "status",
    "store",
    "sync",
    "watch",
]
