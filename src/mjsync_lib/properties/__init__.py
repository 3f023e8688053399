# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
Data types and predicates describing what mjsync synchronizes.

This package defines the `Job` record received from the remote listing API,
the `Credentials` used to request it, and the safety predicates applied to job
identifiers and image filenames before they are used as paths.
"""

from .credentials import Credentials
from .job import Job, decode_page
from .validation import image_filename, validate_image_filename, validate_job_id

__all__ = [
    "Credentials",
    "Job",
    "decode_page",
    "image_filename",
    "validate_image_filename",
    "validate_job_id",
]
