# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SelectelDriver: generic file-driver API on top of Selectel storage.

SelectelDriver implements storage.StorageDriver by composing
SelectelClient calls. It hides authentication timing and turns raw
provider responses into the shapes the generic file API expects.

Class Hierarchy:
    StorageDriver (storage.driver)
        └── SelectelDriver (this class)

Authentication:
    Every network method calls auth() first. By default auth() always
    re-authenticates, so a long-lived driver never works with a stale
    token. With ``reuse_token=True`` a session that is still valid for
    more than ``token_margin`` seconds is reused. auth() runs under a
    per-driver lock and each request uses a snapshot of the session, so
    concurrent calls never send an empty or half-replaced token.

Errors:
    Provider and transport errors surface as httpx.HTTPError. exists()
    is the exception: it reports False unless ``strict_exists`` is set.
    move() is not atomic and raises PartialMoveError when the source
    could not be removed after a successful copy.

Usage:
    driver = SelectelDriver(SelectelConfig(login="12345", password="secret",
                                           container="media",
                                           container_url="https://12345.selcdn.ru"))

    url = await driver.put("docs/report.pdf", pdf_bytes)
    data = await driver.get("docs/report.pdf")
    await driver.move("docs/report.pdf", "archive/report.pdf")

    # Sync usage (REPL, scripts):
    files = driver.list()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote, urlsplit

import httpx
from genro_toolbox import smartasync

from storage import StorageDriver
from storage.errors import (
    NotAuthenticatedError,
    PartialMoveError,
    SigningError,
    StorageError,
    StorageFileNotFoundError,
)
from storage.models import ExistsResult, FileInfo, MoveResult, Presence
from tools.http_client import ListOptions, SelectelClient, Session

from .selectel_config import SelectelConfig

logger = logging.getLogger("genro_selectel")


class SelectelDriver(StorageDriver):
    """Selectel storage driver.

    Attributes:
        config: SelectelConfig instance
        client: SelectelClient owning the session

    Example:
        >>> driver = SelectelDriver({"login": "12345", "password": "secret",
        ...                          "container": "media",
        ...                          "container_url": "https://12345.selcdn.ru"})
        >>> await driver.exists("a.txt")
        False
    """

    def __init__(
        self,
        config: SelectelConfig | dict[str, Any] | None = None,
        client: SelectelClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize driver.

        Args:
            config: SelectelConfig, or a dict of its fields as supplied by
                the host application's drive configuration.
            client: SelectelClient to use. Created from config if None.
            transport: Optional httpx transport for a newly created client.
        """
        if isinstance(config, dict):
            config = SelectelConfig(**config)
        self.config = config or SelectelConfig()
        self.client = client or SelectelClient(transport=transport, timeout=self.config.timeout)
        self._auth_lock = asyncio.Lock()

    def _object_path(self, location: str, container: str | None = None) -> str:
        return f"{container or self.config.container}/{location.lstrip('/')}"

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    @smartasync
    async def auth(self) -> Session:
        """Authenticate with the configured credentials.

        Returns:
            The Session the next request will use.
        """
        async with self._auth_lock:
            session = self.client.session
            if (
                self.config.reuse_token
                and session is not None
                and session.is_valid
                and not session.is_expired(self.config.token_margin)
            ):
                return session
            return await self.client.authenticate(self.config.login, self.config.password)

    # -------------------------------------------------------------------------
    # File API
    # -------------------------------------------------------------------------

    @smartasync
    async def list(self, prefix: str | None = None) -> list[FileInfo]:
        """List the files in the configured container (single page).

        Args:
            prefix: Only return objects whose name starts with prefix.
        """
        await self.auth()
        resp = await self.client.list_files(
            self.config.container, ListOptions(format="json", prefix=prefix)
        )
        resp.raise_for_status()
        if resp.status_code == 204 or not resp.content:
            return []
        return [FileInfo.from_dict(item) for item in resp.json()]

    @smartasync
    async def probe(self, location: str) -> ExistsResult:
        """Check a location and tell missing files apart from failed requests.

        Returns:
            ExistsResult with FOUND (non-empty body), NOT_FOUND (404 or empty
            body) or ERROR (any other failure, with the exception attached).
        """
        try:
            await self.auth()
            resp = await self.client.get_object(self._object_path(location))
            if resp.status_code == 404:
                return ExistsResult(Presence.NOT_FOUND)
            resp.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL, StorageError) as exc:
            return ExistsResult(Presence.ERROR, error=exc)
        if not resp.content:
            return ExistsResult(Presence.NOT_FOUND)
        return ExistsResult(Presence.FOUND)

    @smartasync
    async def exists(self, location: str) -> bool:
        """Find if a file exists.

        Failed requests count as missing files unless ``strict_exists``
        is set, in which case their error is raised.
        """
        result = await self.probe(location)
        if result.presence is Presence.ERROR:
            if self.config.strict_exists:
                raise result.error  # type: ignore[misc]
            logger.warning(f"exists('{location}') treated as missing after error: {result.error}")
        return result.found

    @smartasync
    async def put(self, location: str, content: Any, headers: dict[str, str] | None = None) -> str:
        """Create or replace a file.

        Args:
            location: Object key inside the container.
            content: Bytes, text, a binary file object or a byte iterator.
            headers: Extra object headers (X-Delete-After, X-Object-Meta-*, ...).

        Returns:
            URL of the uploaded object.
        """
        await self.auth()
        result = await self.client.upload_object(content, self._object_path(location), headers)
        if result.response is not None:
            result.response.raise_for_status()
        logger.info(f"Uploaded '{location}' ({result.status_code})")
        return result.url

    @smartasync
    async def get(self, location: str) -> bytes:
        """Download a file and return its content."""
        await self.auth()
        resp = await self.client.get_object(self._object_path(location))
        resp.raise_for_status()
        return resp.content

    @smartasync
    async def delete(self, location: str) -> httpx.Response:
        """Remove a file. Returns the raw provider response."""
        await self.auth()
        resp = await self.client.delete_object(self._object_path(location))
        resp.raise_for_status()
        logger.info(f"Deleted '{location}'")
        return resp

    @smartasync
    async def copy(self, src: str, dest: str, dest_container: str | None = None) -> bytes:
        """Copy a file server-side.

        Args:
            src: Source key in the configured container.
            dest: Destination key.
            dest_container: Destination container, the configured one if None.

        Returns:
            Response body of the copy request.
        """
        await self.auth()
        resp = await self.client.copy_object(
            self._object_path(src), self._object_path(dest, dest_container)
        )
        resp.raise_for_status()
        logger.info(f"Copied '{src}' to '{self._object_path(dest, dest_container)}'")
        return resp.content

    @smartasync
    async def move(self, src: str, dest: str, dest_container: str | None = None) -> MoveResult:
        """Move a file: copy, then delete the source.

        Not atomic. A failed copy propagates unchanged and the source is
        left alone. A failed delete raises PartialMoveError; the copy then
        exists at the destination alongside the source.

        Returns:
            MoveResult with both phases completed.
        """
        result = MoveResult(
            source=self._object_path(src),
            destination=self._object_path(dest, dest_container),
        )
        await self.copy(src, dest, dest_container)
        result.copied = True
        try:
            await self.delete(src)
        except (httpx.HTTPError, StorageError) as exc:
            logger.warning(f"Move '{result.source}' -> '{result.destination}': source not deleted")
            raise PartialMoveError(result, exc) from exc
        result.deleted = True
        return result

    def get_url(self, location: str, container: str | None = None) -> str:
        """Public URL of a file. Does not check that the file exists.

        An explicit port is kept unless it is 80.

        Raises:
            ValueError: If container_url is missing or has no scheme and host.
        """
        if not self.config.container_url:
            raise ValueError("container_url is not configured")
        base = urlsplit(self.config.container_url)
        if not base.scheme or not base.hostname:
            raise ValueError(
                f"container_url '{self.config.container_url}' needs a scheme and host"
            )
        netloc = base.hostname
        if base.port is not None and base.port != 80:
            netloc = f"{netloc}:{base.port}"
        prefix = base.path.rstrip("/")
        key = quote(location.lstrip("/"), safe="/")
        return f"{base.scheme}://{netloc}{prefix}/{container or self.config.container}/{key}"

    @smartasync
    async def get_signed_url(self, location: str, expiry: int = 600) -> str:
        """Temporary URL for a private file.

        Args:
            location: Object key inside the container.
            expiry: Validity in seconds (default 10 minutes).

        Raises:
            StorageFileNotFoundError: If the file does not exist. Nothing is signed.
            SigningError: If no temp URL key is configured or signing fails.
        """
        if not await self.exists(location):
            raise StorageFileNotFoundError(location)
        if not self.config.temp_url_key:
            raise SigningError("temp_url_key is not configured")
        try:
            return self.client.sign_url(
                self._object_path(location), expiry, self.config.temp_url_key
            )
        except (ValueError, NotAuthenticatedError) as exc:
            raise SigningError(f"Cannot sign URL for '{location}': {exc}") from exc

    # -------------------------------------------------------------------------
    # Container helpers
    # -------------------------------------------------------------------------

    @smartasync
    async def containers(self) -> list[dict[str, Any]]:
        """Containers of the account as returned by the JSON listing."""
        await self.auth()
        resp = await self.client.list_containers(format="json")
        resp.raise_for_status()
        if resp.status_code == 204 or not resp.content:
            return []
        return resp.json()

    @smartasync
    async def extract_archive(
        self, stream: Any, archive_format: str, folder: str = ""
    ) -> dict[str, Any]:
        """Upload an archive and unpack it into the container.

        Args:
            stream: Archive bytes, binary file object or byte iterator.
            archive_format: 'tar', 'tar.gz' or 'tar.bz2'.
            folder: Target folder inside the container.

        Returns:
            Extraction report from the provider (files created, errors).
        """
        await self.auth()
        path = self._object_path(folder) if folder else self.config.container
        resp = await self.client.extract_archive(stream, path, archive_format)
        resp.raise_for_status()
        logger.info(f"Extracted {archive_format} archive into '{path}'")
        return resp.json() if resp.content else {}


__all__ = ["SelectelDriver"]
