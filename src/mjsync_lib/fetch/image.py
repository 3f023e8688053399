# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

from pathlib import Path

import requests

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import PersistenceError, TransportError
from mjsync_lib.core.logger import get_logger

logger = get_logger(__name__)


class ImageFetcher:
    """
    Downloads single images by URL.

    No content type or integrity checks are performed and the destination
    is trusted to have been validated by the caller.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = CFG.timeouts.image,
    ):
        self._session = session or requests.Session()
        self._timeout = timeout

    def downloadImage(self, url: str, destination: Path) -> None:
        """
        Download the image and write it to `destination`, overwriting any existing file.

        Args:
            url (str): URL of the image.
            destination (Path): Path to write the image to.

        Raises:
            TransportError: If the image cannot be requested or its body read.
            PersistenceError: If the image cannot be written.
        """
        try:
            response = self._session.get(url, timeout=self._timeout)
            data = response.content
        except requests.RequestException as e:
            raise TransportError(
                f"Could not download '{url}': {e}", CFG.codes.image_failure
            ) from e

        try:
            Path(destination).write_bytes(data)
        except OSError as e:
            raise PersistenceError(
                f"Could not write '{destination}': {e}.", CFG.codes.image_failure
            ) from e

        logger.debug(f"Wrote {len(data)} bytes to '{destination}'.")
