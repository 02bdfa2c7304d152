# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration dataclass for the Selectel storage driver.

SelectelConfig is the single entry point for driver configuration. The
four connection settings (login, password, container, container_url) are
what the host application's drive configuration supplies; the remaining
fields tune authentication and error reporting.

Configuration via environment variables:
    SELECTEL_LOGIN: Account login
    SELECTEL_PASSWORD: Storage password
    SELECTEL_CONTAINER: Default container
    SELECTEL_CONTAINER_URL: Public base URL used by get_url()
    SELECTEL_TEMP_URL_KEY: Account key for signed URLs
    SELECTEL_REUSE_TOKEN: Reuse a valid token instead of re-authenticating
    SELECTEL_TOKEN_MARGIN: Seconds before expiry a token is renewed
    SELECTEL_STRICT_EXISTS: Raise transport errors from exists()
    SELECTEL_TIMEOUT: HTTP timeout in seconds

Usage:
    config = SelectelConfig(
        login="12345",
        password="secret",
        container="media",
        container_url="https://12345.selcdn.ru",
    )
    driver = SelectelDriver(config)

    # Or from environment (Docker/production):
    driver = SelectelDriver(selectel_config_from_env())
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = ("1", "true", "yes")


@dataclass
class SelectelConfig:
    """Main configuration container for SelectelDriver.

    Connection Settings:
        login: Account number used as X-Auth-User
        password: Storage password used as X-Auth-Key
        container: Container all driver paths are relative to
        container_url: Public base URL (scheme, host, optional port)

    Behaviour Settings:
        temp_url_key: Key for temporary URL signatures
        reuse_token: Expiry-aware token reuse
        token_margin: Renewal margin in seconds
        strict_exists: exists() raises on transport errors
        timeout: HTTP timeout in seconds
    """

    login: str = ""
    """Account login (X-Auth-User)."""

    password: str = ""
    """Storage password (X-Auth-Key)."""

    container: str = ""
    """Container the driver reads and writes."""

    container_url: str = ""
    """Public base URL of the container host, e.g. https://12345.selcdn.ru."""

    temp_url_key: str | None = None
    """Account temp URL key. Required by get_signed_url()."""

    reuse_token: bool = False
    """Reuse a still-valid token. If False, every call re-authenticates."""

    token_margin: int = 60
    """A reused token is renewed this many seconds before it expires."""

    strict_exists: bool = False
    """If True, exists() raises transport/server errors instead of returning False."""

    timeout: float | None = None
    """HTTP timeout in seconds. None waits indefinitely."""

    def __repr__(self) -> str:
        return (
            f"SelectelConfig(login={self.login!r}, container={self.container!r}, "
            f"container_url={self.container_url!r}, reuse_token={self.reuse_token})"
        )


def selectel_config_from_env() -> SelectelConfig:
    """Build SelectelConfig from SELECTEL_* environment variables.

    Returns:
        SelectelConfig instance populated from environment.
    """
    timeout = os.environ.get("SELECTEL_TIMEOUT")
    return SelectelConfig(
        login=os.environ.get("SELECTEL_LOGIN", ""),
        password=os.environ.get("SELECTEL_PASSWORD", ""),
        container=os.environ.get("SELECTEL_CONTAINER", ""),
        container_url=os.environ.get("SELECTEL_CONTAINER_URL", ""),
        temp_url_key=os.environ.get("SELECTEL_TEMP_URL_KEY") or None,
        reuse_token=os.environ.get("SELECTEL_REUSE_TOKEN", "").lower() in _TRUE_VALUES,
        token_margin=int(os.environ.get("SELECTEL_TOKEN_MARGIN", "60")),
        strict_exists=os.environ.get("SELECTEL_STRICT_EXISTS", "").lower() in _TRUE_VALUES,
        timeout=float(timeout) if timeout else None,
    )


__all__ = ["SelectelConfig", "selectel_config_from_env"]
