# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Safety predicates for values received from the remote API.

Job identifiers and image filenames end up as path components inside the job
store, so both must match strict patterns before anything is written to disk.
The predicates are pure: they neither log nor raise. Deciding what a failed
check means for the current run is left to the caller.
"""

import re

# Canonical lowercase UUID, e.g. `0b3c0d1e-9f2a-4c5b-8d7e-6a5f4e3d2c1b`.
_JOB_ID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
)

# Digits and underscores followed by one of the supported image extensions.
_IMAGE_FILENAME_PATTERN = re.compile(r"[0-9_]+\.(png|jpg|jpeg|webp)")


def validate_job_id(job_id: object) -> bool:
    """
    Check whether the job identifier is a canonical lowercase UUID.

    Args:
        job_id (object): The identifier to check.

    Returns:
        bool: True if the identifier is safe to use as a directory name.
    """
    return isinstance(job_id, str) and _JOB_ID_PATTERN.fullmatch(job_id) is not None


def validate_image_filename(name: object) -> bool:
    """
    Check whether an image filename is safe to write into a job directory.

    Args:
        name (object): The filename to check.

    Returns:
        bool: True if the name consists of digits and underscores
        followed by `.png`, `.jpg`, `.jpeg`, or `.webp`.
    """
    return (
        isinstance(name, str)
        and _IMAGE_FILENAME_PATTERN.fullmatch(name) is not None
    )


def image_filename(url: str) -> str:
    """
    Return the final `/`-separated segment of an image URL.

    The result is not validated.
    """
    return url.split("/")[-1]
