# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

from dataclasses import dataclass
from pathlib import Path

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import PageWriteError, PersistenceError
from mjsync_lib.core.logger import get_logger
from mjsync_lib.properties.job import Job

logger = get_logger(__name__)


@dataclass(frozen=True)
class JobRecord:
    """Summary of one job directory, as seen on disk."""

    job_id: str
    path: Path
    completed: bool
    images: tuple[Path, ...]


class JobStore:
    """
    Filesystem projection of the synchronized jobs.

    Layout of the store root:
        last_page_<n>.json     raw body of the last fetched listing page n
        <job id>/job.json      serialized job metadata
        <job id>/<image>       downloaded images
        <job id>/completed     empty sentinel; present iff all images were downloaded

    The store has no lifecycle of its own. It only knows where things live and
    how to write them; deciding when to write is up to the job processor.
    """

    JOB_FILE = "job.json"
    SENTINEL = "completed"
    PAGE_PATTERN = "last_page_{}.json"

    def __init__(self, root: Path | str | None = None):
        """
        Initialize the job store.

        Args:
            root (Path | str | None): Root directory of the store.
                Defaults to the configured jobs directory.
        """
        self._root = Path(root if root is not None else CFG.sync.jobs_dir)

    @property
    def root(self) -> Path:
        return self._root

    def ensureRoot(self) -> None:
        """
        Create the root directory of the store if it does not exist.

        Raises:
            PageWriteError: If the directory cannot be created.
        """
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PageWriteError(
                f"Could not create the jobs directory '{self._root}': {e}."
            ) from e

    def pagePath(self, page: int) -> Path:
        """Return the path of the dump of listing page `page`."""
        return self._root / JobStore.PAGE_PATTERN.format(page)

    def writePage(self, page: int, payload: bytes) -> Path:
        """
        Write the raw body of a listing page, overwriting any previous dump.

        Raises:
            PageWriteError: If the file cannot be written.
        """
        path = self.pagePath(page)
        try:
            path.write_bytes(payload)
        except OSError as e:
            raise PageWriteError(f"Could not write '{path}': {e}.") from e

        logger.debug(f"Wrote {len(payload)} bytes of page {page} to '{path}'.")
        return path

    def jobDir(self, job_id: str) -> Path:
        """Return the directory of the job. The identifier must be validated beforehand."""
        return self._root / job_id

    def hasJobDir(self, job_id: str) -> bool:
        return self.jobDir(job_id).is_dir()

    def isCompleted(self, job_id: str) -> bool:
        """Return True if the completion sentinel of the job exists."""
        return (self.jobDir(job_id) / JobStore.SENTINEL).exists()

    def createJobDir(self, job_id: str) -> Path:
        """
        Create the directory of the job.

        Raises:
            PersistenceError: If the directory cannot be created.
        """
        path = self.jobDir(job_id)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(
                f"Could not create the job directory '{path}': {e}."
            ) from e
        return path

    def writeJob(self, job: Job) -> Path:
        """
        Write the job metadata into its directory, overwriting any previous copy.

        Raises:
            PersistenceError: If the metadata cannot be serialized or written.
        """
        path = self.jobDir(job.id) / JobStore.JOB_FILE
        try:
            path.write_text(job.toJson())
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(
                f"Could not write job metadata to '{path}': {e}."
            ) from e
        return path

    def imagePath(self, job_id: str, filename: str) -> Path:
        """Return the path of an image inside the job directory. The filename must be validated beforehand."""
        return self.jobDir(job_id) / filename

    def markCompleted(self, job_id: str) -> Path:
        """
        Create the empty completion sentinel of the job.

        Raises:
            PersistenceError: If the sentinel cannot be written.
        """
        path = self.jobDir(job_id) / JobStore.SENTINEL
        try:
            path.write_bytes(b"")
        except OSError as e:
            raise PersistenceError(
                f"Could not write the completion sentinel '{path}': {e}.",
                CFG.codes.sentinel_write,
            ) from e
        return path

    def records(self) -> list[JobRecord]:
        """
        Collect a read-only summary of all job directories, sorted by job identifier.

        Page dumps and stray files in the root are ignored.
        """
        if not self._root.is_dir():
            return []

        records = []
        for path in sorted(self._root.iterdir()):
            if not path.is_dir():
                continue

            images = tuple(
                sorted(
                    p
                    for p in path.iterdir()
                    if p.is_file()
                    and p.name not in (JobStore.JOB_FILE, JobStore.SENTINEL)
                )
            )
            records.append(
                JobRecord(
                    job_id=path.name,
                    path=path,
                    completed=(path / JobStore.SENTINEL).exists(),
                    images=images,
                )
            )

        return records
