# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

"""
HTTP clients talking to the remote service.

`CatalogFetcher` retrieves raw pages of a user's completed-jobs listing,
`ImageFetcher` downloads individual images. Both use `requests` and never retry.
"""

from .catalog import CatalogFetcher
from .image import ImageFetcher

__all__ = [
    "CatalogFetcher",
    "ImageFetcher",
]
