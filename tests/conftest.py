# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import pytest

from mjsync_lib.core.log_stream import LOG_STREAM


@pytest.fixture(autouse=True)
def clear_log_stream():
    """Start every test with an empty log stream."""
    LOG_STREAM.clear()
    yield
    LOG_STREAM.clear()
