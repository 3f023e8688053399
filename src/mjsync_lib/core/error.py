# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Exception types used throughout mjsync.

Errors derived from `MJError` are recoverable: they stop the current operation
(usually a sync run), but the process keeps going and the next scheduled run
starts afresh. Errors derived from `MJFatalError` signal conditions under which
the process must not continue, such as a potential path injection or job metadata
that could not be persisted.

Each exception carries an exit code used by mjsync commands to report failures
and a diagnostic code that prefixes the corresponding log message.
"""

from .config import CFG
from .log_stream import coded


class MJError(Exception):
    """Common exception type for all recoverable mjsync errors."""

    exit_code = CFG.exit_codes.default

    def __init__(self, message: object, code: int | None = None):
        super().__init__(message)
        self.code = code

    def logMessage(self) -> str:
        """Return the message prefixed with the diagnostic code, if any."""
        if self.code is None:
            return str(self)
        return coded(self.code, self)


class CredentialsError(MJError):
    """Raised when the user identifier or the session token cannot be read."""

    pass


class TransportError(MJError):
    """Raised when a request cannot be constructed, sent, or its body read."""

    def __init__(self, message: object, code: int = CFG.codes.catalog_fetch):
        super().__init__(message, code)


class PageWriteError(MJError):
    """Raised when a raw listing page cannot be written to the job store."""

    def __init__(self, message: object, code: int = CFG.codes.page_write):
        super().__init__(message, code)


class DecodeError(MJError):
    """Raised when a listing page is not a valid sequence of jobs."""

    def __init__(self, message: object, code: int = CFG.codes.page_decode):
        super().__init__(message, code)


class MJFatalError(Exception):
    """
    Raised when mjsync must terminate the whole process.

    Should only be used when continuing could leave the job store in an unsafe
    or silently incomplete state.
    """

    exit_code = CFG.exit_codes.fatal

    def __init__(self, message: object, code: int | None = None):
        super().__init__(message)
        self.code = code

    def logMessage(self) -> str:
        """Return the message prefixed with the diagnostic code, if any."""
        if self.code is None:
            return str(self)
        return coded(self.code, self)


class UnsafeFilenameError(MJFatalError):
    """Raised when an image URL ends with a filename that is not safe to write."""

    def __init__(self, message: object, code: int = CFG.codes.unsafe_filename):
        super().__init__(message, code)


class PersistenceError(MJFatalError):
    """Raised when job metadata, an image, or the completion sentinel cannot be written."""

    def __init__(self, message: object, code: int = CFG.codes.metadata_write):
        super().__init__(message, code)


class ImageDownloadError(MJFatalError):
    """Raised when an image of a job cannot be downloaded."""

    def __init__(self, message: object, code: int = CFG.codes.image_failure):
        super().__init__(message, code)
