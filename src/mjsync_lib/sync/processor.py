# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

from enum import Enum

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import ImageDownloadError, TransportError, UnsafeFilenameError
from mjsync_lib.core.log_stream import coded
from mjsync_lib.core.logger import get_logger
from mjsync_lib.fetch.image import ImageFetcher
from mjsync_lib.properties.job import Job
from mjsync_lib.properties.validation import (
    image_filename,
    validate_image_filename,
    validate_job_id,
)
from mjsync_lib.store.store import JobStore

from .run_state import RunState

logger = get_logger(__name__)


class JobOutcome(Enum):
    """Result of processing a single job."""

    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    REJECTED = "rejected"


class JobProcessor:
    """
    Materializes a single job in the job store, exactly once.

    Processing is idempotent and resumable: a job whose directory holds the
    completion sentinel is skipped; a job directory without the sentinel is
    treated as an interrupted download and all images are fetched again.
    """

    def __init__(self, store: JobStore, image_fetcher: ImageFetcher | None = None):
        """
        Initialize the job processor.

        Args:
            store (JobStore): Store the job is written into.
            image_fetcher (ImageFetcher | None): Fetcher used to download the images.
                A new fetcher is created if not provided.
        """
        self._store = store
        self._image_fetcher = image_fetcher or ImageFetcher()

    def processJob(self, job: Job, state: RunState) -> JobOutcome:
        """
        Validate the job, download its images, and mark it as completed.

        Args:
            job (Job): The job to materialize.
            state (RunState): State of the current run. Deactivated if the
                job identifier is unsafe.

        Returns:
            JobOutcome: DOWNLOADED if the images were fetched, SKIPPED if the job
            was already complete, REJECTED if the job identifier is unsafe.

        Raises:
            UnsafeFilenameError: If an image URL ends with an unsafe filename.
            ImageDownloadError: If an image cannot be downloaded.
            PersistenceError: If the job metadata, an image, or the completion
                sentinel cannot be written.
        """
        if not validate_job_id(job.id):
            logger.error(
                coded(
                    CFG.codes.unsafe_job_id,
                    f"Potentially unsafe job ID '{job.id}' -- stopping!",
                )
            )
            state.deactivate(f"unsafe job ID '{job.id}'")
            return JobOutcome.REJECTED

        if self._store.hasJobDir(job.id):
            if self._store.isCompleted(job.id):
                logger.info(f"Skipping {job.id} -- already downloaded.")
                return JobOutcome.SKIPPED

            logger.warning(f"{job.id} did not finish syncing. Will try again!")
        else:
            logger.info(f"Downloading {job.id}.")
            self._store.createJobDir(job.id)

        self._store.writeJob(job)

        for url in job.image_paths:
            self._downloadImage(job, url)

        self._store.markCompleted(job.id)
        return JobOutcome.DOWNLOADED

    def _downloadImage(self, job: Job, url: str) -> None:
        """
        Validate the filename the image URL ends with and download the image.

        Raises:
            UnsafeFilenameError: If the filename is unsafe.
            ImageDownloadError: If the image cannot be downloaded.
        """
        filename = image_filename(url)
        if not validate_image_filename(filename):
            raise UnsafeFilenameError(
                f"Potentially unsafe image path '{url}' ending with '{filename}' -- stopping!"
            )

        logger.info(coded(CFG.codes.image_download, filename))
        try:
            self._image_fetcher.downloadImage(
                url, self._store.imagePath(job.id, filename)
            )
        except TransportError as e:
            raise ImageDownloadError(
                f"Could not download image '{filename}' of job {job.id}: {e}"
            ) from e
