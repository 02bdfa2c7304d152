# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP client for the Selectel storage REST API.

Example:
    >>> from tools.http_client import SelectelClient
    >>> client = SelectelClient()
    >>> await client.authenticate("12345", "secret")
    >>> resp = await client.list_containers()
"""

from .client import (
    ARCHIVE_FORMATS,
    AUTH_URL,
    CONTAINER_TYPES,
    GALLERY_SECRET_HEADER,
    ListOptions,
    SelectelClient,
    Session,
    UploadResult,
    hash_gallery_secret,
)

__all__ = [
    "ARCHIVE_FORMATS",
    "AUTH_URL",
    "CONTAINER_TYPES",
    "GALLERY_SECRET_HEADER",
    "ListOptions",
    "SelectelClient",
    "Session",
    "UploadResult",
    "hash_gallery_secret",
]
