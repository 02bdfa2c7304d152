# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Result types returned by storage drivers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass
class FileInfo:
    """One object descriptor from a container listing."""

    name: str
    bytes: int = 0
    last_modified: str | None = None
    content_type: str | None = None
    hash: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return self.bytes

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileInfo:
        """Create FileInfo from a JSON listing entry.

        Virtual folders returned with a delimiter come back as
        ``{"subdir": "photos/"}`` and are mapped to a zero-size entry.
        """
        if "subdir" in data and "name" not in data:
            return cls(name=data["subdir"], content_type="application/directory")
        known = {"name", "bytes", "last_modified", "content_type", "hash"}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(
            name=data["name"],
            bytes=int(data.get("bytes") or 0),
            last_modified=data.get("last_modified"),
            content_type=data.get("content_type"),
            hash=data.get("hash"),
            extra=extra,
        )


class Presence(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class ExistsResult:
    """Outcome of an existence probe.

    ``error`` is set only when ``presence`` is ``Presence.ERROR``.
    """

    presence: Presence
    error: BaseException | None = None

    @property
    def found(self) -> bool:
        return self.presence is Presence.FOUND

    def __bool__(self) -> bool:
        return self.found


@dataclass
class MoveResult:
    """Which phases of a copy-then-delete move completed."""

    source: str
    destination: str
    copied: bool = False
    deleted: bool = False

    @property
    def complete(self) -> bool:
        return self.copied and self.deleted


__all__ = ["ExistsResult", "FileInfo", "MoveResult", "Presence"]
