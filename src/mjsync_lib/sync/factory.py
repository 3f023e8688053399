# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

from pathlib import Path

import requests

from mjsync_lib.core.config import CFG
from mjsync_lib.fetch.catalog import CatalogFetcher
from mjsync_lib.fetch.image import ImageFetcher
from mjsync_lib.store.store import JobStore

from .processor import JobProcessor
from .run_state import RunState
from .synchronizer import Synchronizer


def create_synchronizer(
    jobs_dir: Path | str | None = None,
    max_pages: int | None = None,
    empty_page_limit: int | None = None,
) -> Synchronizer:
    """
    Assemble a synchronizer with its fetchers, store, and processor.

    Both fetchers share a single HTTP session.

    Args:
        jobs_dir (Path | str | None): Root of the job store. Defaults to the configured directory.
        max_pages (int | None): Last page requested during a run. Defaults to the configured value.
        empty_page_limit (int | None): Consecutive empty pages ending a run.
            Defaults to the configured value.

    Returns:
        Synchronizer: A synchronizer with an active run state.
    """
    session = requests.Session()
    store = JobStore(jobs_dir)

    return Synchronizer(
        CatalogFetcher(session),
        store,
        JobProcessor(store, ImageFetcher(session)),
        RunState(),
        max_pages=max_pages if max_pages is not None else CFG.sync.max_pages,
        empty_page_limit=(
            empty_page_limit
            if empty_page_limit is not None
            else CFG.sync.empty_page_limit
        ),
    )
