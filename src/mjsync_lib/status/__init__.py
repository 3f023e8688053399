# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Read-only view of the local job store.

This module defines the `StatusPresenter`, which renders the stored jobs
as a Rich panel or as YAML.
"""

from .presenter import StatusPresenter

__all__ = [
    "StatusPresenter",
]
