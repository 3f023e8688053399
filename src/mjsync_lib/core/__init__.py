# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Core infrastructure for mjsync.

This module collects the foundational pieces used across the mjsync codebase:
configuration, error types, structured logging, and the in-process log stream
consumed by frontends.
"""
