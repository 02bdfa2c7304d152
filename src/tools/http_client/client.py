# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP client for the Selectel cloud storage REST API.

This module provides SelectelClient, a thin async client over the
Swift-style HTTP surface of Selectel storage. Every method issues one
request and hands back the raw ``httpx.Response``: interpreting status
codes is left to the caller.

Features:
    - Token authentication against the fixed auth endpoint
    - Immutable Session value replaced as a whole on each authentication
    - Account, container and object operations
    - Archive extraction from a byte stream
    - Swift temporary URL signing

Example:
    ::

        client = SelectelClient()
        await client.authenticate("12345", "secret")

        resp = await client.list_files("photos", ListOptions(prefix="2025/"))
        files = resp.json()

        result = await client.upload_object(b"data", "photos/a.txt")
        print(result.url, result.status_code)

Note:
    Transport failures propagate as ``httpx.HTTPError``. Calling any
    operation before ``authenticate`` raises NotAuthenticatedError
    without touching the network.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import time
from collections.abc import AsyncIterable, AsyncIterator, Iterable
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from typing import IO, Any
from urllib.parse import quote, urlsplit

import httpx

from storage.errors import AuthenticationError, NotAuthenticatedError

logger = logging.getLogger(__name__)

AUTH_URL = "https://auth.selcdn.ru/"

AUTH_USER_HEADER = "X-Auth-User"
AUTH_KEY_HEADER = "X-Auth-Key"
AUTH_TOKEN_HEADER = "X-Auth-Token"
STORAGE_URL_HEADER = "X-Storage-Url"
EXPIRE_TOKEN_HEADER = "X-Expire-Auth-Token"
CONTAINER_TYPE_HEADER = "X-Container-Meta-Type"
TEMP_URL_KEY_HEADER = "X-Account-Meta-Temp-URL-Key"
GALLERY_SECRET_HEADER = "X-Container-Meta-Gallery-Secret"

CONTAINER_TYPES = ("public", "private", "gallery")
ARCHIVE_FORMATS = ("tar", "tar.gz", "tar.bz2")
CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class Session:
    """Authenticated session returned by the auth endpoint."""

    storage_url: str
    auth_token: str
    expires_at: datetime | None = None

    @property
    def is_valid(self) -> bool:
        return bool(self.storage_url and self.auth_token)

    def is_expired(self, margin: float = 0) -> bool:
        """True if the token expires within ``margin`` seconds (or expiry is unknown)."""
        if self.expires_at is None:
            return True
        return datetime.now(timezone.utc) + timedelta(seconds=margin) >= self.expires_at


@dataclass(frozen=True)
class ListOptions:
    """Optional query parameters for a container listing.

    Only fields that are set are sent, always in declaration order.
    """

    format: str | None = "json"
    limit: int | None = None
    marker: str | None = None
    prefix: str | None = None
    path: str | None = None
    delimiter: str | None = None

    def to_params(self) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = []
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or value == "":
                continue
            params.append((f.name, str(value)))
        return params


@dataclass
class UploadResult:
    """Outcome of an object upload."""

    url: str
    status_code: int
    response: httpx.Response | None = field(default=None, repr=False, compare=False)


def hash_gallery_secret(secret: str) -> str:
    """SHA-1 hex digest sent in place of a gallery container secret."""
    return hashlib.sha1(secret.encode("utf-8")).hexdigest()


class SelectelClient:
    """Async HTTP client for Selectel storage.

    Attributes:
        auth_url: Authentication endpoint.
        session: Current Session, or None before authenticate().

    Example:
        >>> client = SelectelClient()
        >>> await client.authenticate("12345", "secret")
        >>> resp = await client.get_object("photos/cat.jpg")
    """

    def __init__(
        self,
        auth_url: str = AUTH_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        """Initialize client.

        Args:
            auth_url: Authentication endpoint URL.
            transport: Optional httpx transport (tests use httpx.MockTransport).
            timeout: Request timeout in seconds. None waits indefinitely.
        """
        self.auth_url = auth_url
        self.session: Session | None = None
        self._transport = transport
        self._timeout = timeout

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None and self.session.is_valid

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self._timeout)

    def _require_session(self, operation: str) -> Session:
        """Snapshot the current session or fail before any request is made."""
        session = self.session
        if session is None or not session.is_valid:
            raise NotAuthenticatedError(operation)
        return session

    @staticmethod
    def _url(session: Session, path: str = "") -> str:
        return session.storage_url + quote(path.lstrip("/"), safe="/")

    async def _request(
        self,
        operation: str,
        method: str,
        path: str = "",
        headers: dict[str, str] | None = None,
        params: list[tuple[str, str]] | None = None,
        content: Any = None,
    ) -> httpx.Response:
        """Send one authenticated request and return the raw response."""
        session = self._require_session(operation)
        request_headers = {AUTH_TOKEN_HEADER: session.auth_token}
        if headers:
            request_headers.update(headers)
        url = self._url(session, path)
        logger.debug(f"{operation}: {method} {url}")
        async with self._http() as http:
            return await http.request(
                method, url, headers=request_headers, params=params, content=content
            )

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    async def authenticate(self, login: str, password: str) -> Session:
        """Get an auth token and storage URL and store them as the session.

        Args:
            login: Account number.
            password: Storage password.

        Returns:
            The new Session.

        Raises:
            httpx.HTTPStatusError: If the server rejects the credentials (403).
            AuthenticationError: If the response lacks the storage URL or token,
                or its token expiry is not a whole number of seconds.
        """
        async with self._http() as http:
            resp = await http.get(
                self.auth_url,
                headers={AUTH_USER_HEADER: login, AUTH_KEY_HEADER: password},
            )
        resp.raise_for_status()

        storage_url = resp.headers.get(STORAGE_URL_HEADER, "")
        auth_token = resp.headers.get(AUTH_TOKEN_HEADER, "")
        if not storage_url or not auth_token:
            raise AuthenticationError(
                f"Auth response {resp.status_code} has no storage URL or token"
            )
        if not storage_url.endswith("/"):
            storage_url += "/"

        expires_at = None
        expire_seconds = resp.headers.get(EXPIRE_TOKEN_HEADER)
        if expire_seconds:
            try:
                lifetime = int(expire_seconds)
            except ValueError as exc:
                raise AuthenticationError(
                    f"Auth response has an invalid token expiry: {expire_seconds!r}"
                ) from exc
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=lifetime)

        self.session = Session(storage_url, auth_token, expires_at)
        logger.info(f"Authenticated '{login}' on {storage_url}")
        return self.session

    # -------------------------------------------------------------------------
    # Account and containers
    # -------------------------------------------------------------------------

    async def account_info(self) -> httpx.Response:
        """Account totals: containers, objects, bytes stored and downloaded (HEAD)."""
        return await self._request("account_info", "HEAD")

    async def list_containers(
        self, format: str = "json", limit: int | None = None, marker: str | None = None
    ) -> httpx.Response:
        """List containers.

        Args:
            format: 'json' or 'xml'.
            limit: Maximum number of containers (server default 10000).
            marker: Name of the last container from the previous page.
        """
        params = [("format", format)]
        if limit:
            params.append(("limit", str(limit)))
        if marker:
            params.append(("marker", marker))
        return await self._request("list_containers", "GET", params=params)

    async def create_container(self, name: str, container_type: str = "private") -> httpx.Response:
        """Create a container (201 created, 202 already exists)."""
        return await self._request(
            "create_container", "PUT", name, headers={CONTAINER_TYPE_HEADER: container_type}
        )

    async def get_container_info(self, name: str) -> httpx.Response:
        return await self._request("get_container_info", "HEAD", name)

    async def update_container(self, name: str, container_type: str) -> httpx.Response:
        """Change the container type ('public', 'private' or 'gallery')."""
        return await self._request(
            "update_container", "POST", name, headers={CONTAINER_TYPE_HEADER: container_type}
        )

    async def delete_container(self, name: str) -> httpx.Response:
        """Delete a container (409 if not empty)."""
        return await self._request("delete_container", "DELETE", name)

    async def set_temp_url_key(self, key: str) -> httpx.Response:
        """Set the account key used to sign temporary URLs."""
        return await self._request("set_temp_url_key", "POST", headers={TEMP_URL_KEY_HEADER: key})

    # -------------------------------------------------------------------------
    # Objects
    # -------------------------------------------------------------------------

    async def list_files(self, container: str, options: ListOptions | None = None) -> httpx.Response:
        """List objects of a container. The body is left unparsed."""
        options = options or ListOptions()
        return await self._request("list_files", "GET", container, params=options.to_params())

    async def upload_object(
        self,
        data: Any,
        hosting_path: str,
        extra_headers: dict[str, str] | None = None,
    ) -> UploadResult:
        """Upload an object.

        Args:
            data: Object body (bytes, str or a stream).
            hosting_path: ``{container}/{key}``.
            extra_headers: Copied onto the request verbatim, except the
                gallery secret header which is sent as its SHA-1 hex digest.

        Returns:
            UploadResult with the object URL and the response status code.
        """
        session = self._require_session("upload_object")
        headers: dict[str, str] = {}
        for name, value in (extra_headers or {}).items():
            if name == GALLERY_SECRET_HEADER:
                value = hash_gallery_secret(value)
            headers[name] = value
        resp = await self._request(
            "upload_object", "PUT", hosting_path, headers=headers, content=_async_body(data)
        )
        return UploadResult(
            url=self._url(session, hosting_path), status_code=resp.status_code, response=resp
        )

    async def extract_archive(
        self,
        stream: bytes | IO[bytes] | Iterable[bytes] | AsyncIterable[bytes],
        hosting_path: str,
        archive_format: str,
    ) -> httpx.Response:
        """Upload an archive and unpack it server-side.

        Args:
            stream: Archive bytes, a binary file object or a byte iterator.
            hosting_path: ``{container}``, ``{container}/{folder}`` or ``""``.
            archive_format: One of 'tar', 'tar.gz', 'tar.bz2'.
        """
        if archive_format not in ARCHIVE_FORMATS:
            raise ValueError(
                f"Unsupported archive format '{archive_format}', expected one of {ARCHIVE_FORMATS}"
            )
        return await self._request(
            "extract_archive",
            "PUT",
            hosting_path,
            headers={"Accept": "application/json"},
            params=[("extract-archive", archive_format)],
            content=_async_body(stream),
        )

    async def copy_object(self, src_path: str, dest_path: str) -> httpx.Response:
        """Server-side copy (COPY with Destination header)."""
        destination = "/" + quote(dest_path.lstrip("/"), safe="/")
        return await self._request(
            "copy_object", "COPY", src_path, headers={"Destination": destination}
        )

    async def delete_object(self, path: str) -> httpx.Response:
        return await self._request("delete_object", "DELETE", path)

    async def get_object(self, path: str) -> httpx.Response:
        return await self._request("get_object", "GET", path)

    # -------------------------------------------------------------------------
    # Temporary URLs
    # -------------------------------------------------------------------------

    def sign_url(self, path: str, expires_in: int, key: str, method: str = "GET") -> str:
        """Build a Swift temporary URL for an object.

        Args:
            path: ``{container}/{key}``.
            expires_in: Validity in seconds from now.
            key: Account temp URL key.
            method: HTTP method the URL grants.

        Returns:
            Absolute URL carrying ``temp_url_sig`` and ``temp_url_expires``.
        """
        session = self._require_session("sign_url")
        if not key:
            raise ValueError("A temp URL key is required to sign URLs")
        expires = int(time.time()) + int(expires_in)
        url = self._url(session, path)
        body = f"{method.upper()}\n{expires}\n{urlsplit(url).path}"
        sig = hmac.new(key.encode("utf-8"), body.encode("utf-8"), hashlib.sha1).hexdigest()
        return f"{url}?temp_url_sig={sig}&temp_url_expires={expires}"


def _async_body(data: Any) -> Any:
    """Adapt a request body for httpx.AsyncClient.

    Bytes and text pass through. Files and sync iterators are wrapped in an
    async generator, as AsyncClient only streams async iterables.
    """
    if isinstance(data, bytearray):
        return bytes(data)
    if data is None or isinstance(data, (bytes, str, AsyncIterable)):
        return data
    if hasattr(data, "read"):
        return _aiter_file(data)
    if isinstance(data, Iterable):
        return _aiter_chunks(data)
    raise TypeError(f"Unsupported request body type: {type(data).__name__}")


async def _aiter_file(fileobj: IO[bytes]) -> AsyncIterator[bytes]:
    while True:
        chunk = fileobj.read(CHUNK_SIZE)
        if not chunk:
            break
        yield chunk


async def _aiter_chunks(chunks: Iterable[bytes]) -> AsyncIterator[bytes]:
    for chunk in chunks:
        yield chunk


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
