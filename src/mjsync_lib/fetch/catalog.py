# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import requests

from mjsync_lib.core.config import CFG
from mjsync_lib.core.error import MJError, TransportError
from mjsync_lib.core.logger import get_logger

logger = get_logger(__name__)


class CatalogFetcher:
    """
    HTTP client fetching raw pages of the recent-jobs listing of a user.

    The endpoint returns no pagination metadata, so the fetcher only ever
    returns the unparsed body of the requested page. Deciding when to stop
    paging is left to the caller.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        url: str | None = None,
        timeout: float | None = CFG.timeouts.catalog,
    ):
        """
        Initialize the catalog fetcher.

        Args:
            session (requests.Session | None): Session used to send requests.
                A new session is created if not provided.
            url (str | None): Listing endpoint. Defaults to the configured endpoint.
            timeout (float | None): Request timeout in seconds. None means no timeout.
        """
        self._session = session or requests.Session()
        self._url = url or CFG.api.recent_jobs_url
        self._timeout = timeout

    def fetchPage(
        self, user_id: str, session_token: str, ordering_mode: str, page: int
    ) -> bytes:
        """
        Fetch one page of the completed jobs of a user.

        Args:
            user_id (str): Identifier of the user whose jobs are listed.
            session_token (str): Session token used for the authentication cookie.
            ordering_mode (str): Server-side ordering, `new` or `top-all`.
            page (int): 1-based page number.

        Returns:
            bytes: The unparsed response body.

        Raises:
            MJError: If the ordering mode is not supported.
            TransportError: If the request cannot be constructed or sent,
                or its body cannot be read.
        """
        if ordering_mode not in CFG.api.ordering_modes:
            raise MJError(
                f"Unsupported ordering mode '{ordering_mode}'. "
                f"Use one of: {', '.join(CFG.api.ordering_modes)}."
            )

        params = {
            "orderBy": ordering_mode,
            "jobStatus": "completed",
            "userId": user_id,
            "dedupe": "true",
            "refreshApi": "0",
            "page": str(page),
        }
        headers = {
            "User-Agent": CFG.api.user_agent,
            "Content-Type": "application/json",
            "Cookie": f"{CFG.api.session_cookie}={session_token}",
        }

        logger.debug(f"Requesting page {page} of '{ordering_mode}' jobs.")
        try:
            response = self._session.get(
                self._url, params=params, headers=headers, timeout=self._timeout
            )
            body = response.content
        except requests.RequestException as e:
            raise TransportError(f"Could not fetch page {page}: {e}") from e

        logger.debug(
            f"Page {page} answered with status {response.status_code} ({len(body)} bytes)."
        )
        return body
