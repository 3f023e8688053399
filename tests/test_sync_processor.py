# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

from unittest.mock import MagicMock

import pytest

from mjsync_lib.core.error import (
    ImageDownloadError,
    PersistenceError,
    TransportError,
    UnsafeFilenameError,
)
from mjsync_lib.core.log_stream import LOG_STREAM
from mjsync_lib.fetch.image import ImageFetcher
from mjsync_lib.properties.job import Job
from mjsync_lib.store.store import JobStore
from mjsync_lib.sync.processor import JobOutcome, JobProcessor
from mjsync_lib.sync.run_state import RunState

JOB_ID = "11111111-1111-1111-1111-111111111111"


def _write_url_tail(url, destination):
    destination.write_bytes(url.encode())


@pytest.fixture
def store(tmp_path):
    store = JobStore(tmp_path / "jobs")
    store.ensureRoot()
    return store


@pytest.fixture
def fetcher():
    fetcher = MagicMock(spec=ImageFetcher)
    fetcher.downloadImage.side_effect = _write_url_tail
    return fetcher


@pytest.fixture
def processor(store, fetcher):
    return JobProcessor(store, fetcher)


def test_process_job_materializes_new_job(processor, store, fetcher):
    job = Job(JOB_ID, "2023-11-05", ("https://x/0_0.png", "https://x/0_1.png"))
    state = RunState()

    assert processor.processJob(job, state) == JobOutcome.DOWNLOADED

    job_dir = store.jobDir(JOB_ID)
    assert (job_dir / "job.json").is_file()
    assert (job_dir / "0_0.png").read_bytes() == b"https://x/0_0.png"
    assert (job_dir / "0_1.png").read_bytes() == b"https://x/0_1.png"
    assert store.isCompleted(JOB_ID)
    assert fetcher.downloadImage.call_count == 2
    assert state.isActive()


def test_process_job_logs_image_lines(processor):
    processor.processJob(Job(JOB_ID, image_paths=("https://x/1_0.png",)), RunState())

    lines = LOG_STREAM.lines()
    assert f"Downloading {JOB_ID}." in lines
    assert "[200] 1_0.png" in lines


def test_process_job_is_idempotent(processor, fetcher):
    job = Job(JOB_ID, image_paths=("https://x/0_0.png",))
    processor.processJob(job, RunState())
    fetcher.downloadImage.reset_mock()

    assert processor.processJob(job, RunState()) == JobOutcome.SKIPPED
    fetcher.downloadImage.assert_not_called()
    assert f"Skipping {JOB_ID} -- already downloaded." in LOG_STREAM.lines()


def test_process_job_resumes_interrupted_job(processor, store, fetcher):
    job_dir = store.createJobDir(JOB_ID)
    (job_dir / "0_0.png").write_bytes(b"stale")

    job = Job(JOB_ID, image_paths=("https://x/0_0.png", "https://x/0_1.png"))
    assert processor.processJob(job, RunState()) == JobOutcome.DOWNLOADED

    assert (job_dir / "0_0.png").read_bytes() == b"https://x/0_0.png"
    assert (job_dir / "0_1.png").is_file()
    assert store.isCompleted(JOB_ID)
    assert fetcher.downloadImage.call_count == 2
    assert f"{JOB_ID} did not finish syncing. Will try again!" in LOG_STREAM.lines()


def test_process_job_without_images_is_completed(processor, store, fetcher):
    assert processor.processJob(Job(JOB_ID), RunState()) == JobOutcome.DOWNLOADED

    assert store.isCompleted(JOB_ID)
    fetcher.downloadImage.assert_not_called()


@pytest.mark.parametrize(
    "job_id",
    ["../escape", "11111111-1111-1111-1111-11111111111", "", "ABCDEF00-1111-1111-1111-111111111111"],
)
def test_process_job_rejects_unsafe_id(processor, store, fetcher, job_id):
    state = RunState()

    assert processor.processJob(Job(job_id), state) == JobOutcome.REJECTED

    assert not state.isActive()
    assert list(store.root.iterdir()) == []
    fetcher.downloadImage.assert_not_called()
    assert LOG_STREAM.lines()[0] == (
        f"[806] Potentially unsafe job ID '{job_id}' -- stopping!"
    )


def test_process_job_unsafe_filename_is_fatal(processor, store, fetcher):
    job = Job(JOB_ID, image_paths=("https://x/0_0.png", "https://x/../../evil.sh"))

    with pytest.raises(UnsafeFilenameError, match="evil.sh"):
        processor.processJob(job, RunState())

    # the first image is stored, the job stays incomplete
    assert fetcher.downloadImage.call_count == 1
    assert not store.isCompleted(JOB_ID)


def test_process_job_letter_in_filename_is_fatal(processor, fetcher):
    with pytest.raises(UnsafeFilenameError):
        processor.processJob(Job(JOB_ID, image_paths=("https://x/1_a.png",)), RunState())

    fetcher.downloadImage.assert_not_called()


def test_process_job_download_failure_is_fatal(processor, store, fetcher):
    fetcher.downloadImage.side_effect = TransportError("refused", 809)

    with pytest.raises(ImageDownloadError, match="0_0.png") as exc_info:
        processor.processJob(Job(JOB_ID, image_paths=("https://x/0_0.png",)), RunState())

    assert isinstance(exc_info.value.__cause__, TransportError)
    assert not store.isCompleted(JOB_ID)


def test_process_job_image_write_failure_propagates(processor, fetcher):
    fetcher.downloadImage.side_effect = PersistenceError("disk full", 809)

    with pytest.raises(PersistenceError, match="disk full"):
        processor.processJob(Job(JOB_ID, image_paths=("https://x/0_0.png",)), RunState())


def test_process_job_default_fetcher(store):
    assert isinstance(JobProcessor(store)._image_fetcher, ImageFetcher)


def test_process_job_survives_failing_log_subscriber(processor, store, monkeypatch):
    def broken(line):
        raise RuntimeError("widget gone")

    monkeypatch.setattr(LOG_STREAM, "handleError", MagicMock())
    LOG_STREAM.subscribe(broken)
    try:
        outcome = processor.processJob(
            Job(JOB_ID, image_paths=("https://x/0_0.png",)), RunState()
        )
    finally:
        LOG_STREAM.unsubscribe(broken)

    assert outcome == JobOutcome.DOWNLOADED
    assert store.isCompleted(JOB_ID)
    assert (store.jobDir(JOB_ID) / "job.json").is_file()
