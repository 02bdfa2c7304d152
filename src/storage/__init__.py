# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Storage abstraction layer: generic file-driver contract and errors.

This module defines the storage-engine-agnostic API that concrete drivers
(Selectel, and any future backend) implement, plus a small registry that
lets the host application look drivers up by name.

Usage:
    from storage import get_driver

    driver = get_driver("selectel", config)

    # Write a file
    url = await driver.put("files/report.pdf", content)

    # Read a file
    data = await driver.get("files/report.pdf")

    # Get a temporary download URL
    url = await driver.get_signed_url("files/report.pdf", expiry=3600)
"""

from .driver import StorageDriver, get_driver, register_driver, registered_drivers
from .errors import (
    AuthenticationError,
    NotAuthenticatedError,
    PartialMoveError,
    SigningError,
    StorageError,
    StorageFileNotFoundError,
)

__all__ = [
    "AuthenticationError",
    "NotAuthenticatedError",
    "PartialMoveError",
    "SigningError",
    "StorageDriver",
    "StorageError",
    "StorageFileNotFoundError",
    "get_driver",
    "register_driver",
    "registered_drivers",
]
