# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Abstract file-driver contract and driver registry.

Every driver exposes the same async file API so the host application can
swap storage engines by configuration alone. Drivers register themselves
by name with ``register_driver``; the host resolves them with
``get_driver``.

Example:
    ::

        from storage import StorageDriver, register_driver

        class MyDriver(StorageDriver):
            ...

        register_driver("mine", MyDriver)
        driver = get_driver("mine", config)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import FileInfo, MoveResult

_drivers: dict[str, type[StorageDriver]] = {}


class StorageDriver(ABC):
    """Abstract base class for file drivers.

    Network operations are coroutines. ``get_url`` is a pure computation
    and stays synchronous.
    """

    @abstractmethod
    async def exists(self, location: str) -> bool:
        """Check if a file exists.

        Args:
            location: Object key inside the configured container.

        Returns:
            True if the file exists, False otherwise.
        """

    @abstractmethod
    async def put(self, location: str, content: Any) -> str:
        """Store content at location.

        Args:
            location: Object key inside the configured container.
            content: Bytes, text or a binary stream.

        Returns:
            URL of the stored object.
        """

    @abstractmethod
    async def get(self, location: str) -> bytes:
        """Read the content stored at location."""

    @abstractmethod
    async def delete(self, location: str) -> Any:
        """Remove the file at location."""

    @abstractmethod
    async def copy(self, src: str, dest: str) -> Any:
        """Copy a file within the configured container."""

    @abstractmethod
    async def move(self, src: str, dest: str, dest_container: str | None = None) -> MoveResult:
        """Copy src to dest, then delete src.

        Not atomic: if the delete fails the copy is left in place.
        """

    @abstractmethod
    async def list(self) -> list[FileInfo]:
        """List the files in the configured container."""

    @abstractmethod
    def get_url(self, location: str, container: str | None = None) -> str:
        """Public URL for location. Does not check that the file exists."""

    @abstractmethod
    async def get_signed_url(self, location: str, expiry: int = 600) -> str:
        """Temporary URL granting access to a private file.

        Raises:
            StorageFileNotFoundError: If the file does not exist.
        """


def register_driver(name: str, driver_class: type[StorageDriver]) -> None:
    """Register a driver class under a name.

    Args:
        name: Lookup name (case-insensitive).
        driver_class: StorageDriver subclass taking the config as first argument.
    """
    if not (isinstance(driver_class, type) and issubclass(driver_class, StorageDriver)):
        raise TypeError(f"{driver_class!r} is not a StorageDriver subclass")
    _drivers[name.lower()] = driver_class


def get_driver(name: str, config: Any, **kwargs: Any) -> StorageDriver:
    """Instantiate a registered driver.

    Args:
        name: Registered driver name.
        config: Driver configuration, passed through unchanged.
        **kwargs: Extra keyword arguments for the driver constructor.

    Raises:
        ValueError: If no driver is registered under name.
    """
    key = name.lower()
    if key not in _drivers:
        available = ", ".join(sorted(_drivers)) or "none"
        raise ValueError(f"Storage driver '{name}' not found (available: {available})")
    return _drivers[key](config, **kwargs)


def registered_drivers() -> list[str]:
    """Names of all registered drivers, sorted."""
    return sorted(_drivers)


__all__ = ["StorageDriver", "get_driver", "register_driver", "registered_drivers"]
