# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
The `mjsync watch` command, running the scheduler in the foreground.
"""
