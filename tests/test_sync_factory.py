# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

from mjsync_lib.core.config import CFG
from mjsync_lib.sync.factory import create_synchronizer


def test_create_synchronizer_defaults():
    synchronizer = create_synchronizer()

    assert str(synchronizer._store.root) == CFG.sync.jobs_dir
    assert synchronizer._max_pages == CFG.sync.max_pages
    assert synchronizer._empty_page_limit == CFG.sync.empty_page_limit
    assert synchronizer.state.isActive()


def test_create_synchronizer_overrides(tmp_path):
    synchronizer = create_synchronizer(tmp_path / "out", max_pages=5, empty_page_limit=0)

    assert synchronizer._store.root == tmp_path / "out"
    assert synchronizer._max_pages == 5
    assert synchronizer._empty_page_limit == 0


def test_create_synchronizer_shares_session():
    synchronizer = create_synchronizer()

    assert (
        synchronizer._fetcher._session
        is synchronizer._processor._image_fetcher._session
    )
    assert synchronizer._processor._store is synchronizer._store
