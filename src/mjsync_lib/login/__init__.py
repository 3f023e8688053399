# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
The `mjsync login` command, storing the user ID and session token.
"""
