# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the storage package: driver registry, result types and errors."""

from __future__ import annotations

import pytest

from genro_selectel import SelectelConfig, SelectelDriver
from storage import (
    NotAuthenticatedError,
    PartialMoveError,
    StorageDriver,
    StorageError,
    StorageFileNotFoundError,
    get_driver,
    register_driver,
    registered_drivers,
)
from storage.models import ExistsResult, FileInfo, MoveResult, Presence


class TestDriverRegistry:
    """Tests for register_driver / get_driver."""

    def test_selectel_registered(self):
        """Importing genro_selectel registers the driver and its short alias."""
        assert "selectel" in registered_drivers()
        assert "sel" in registered_drivers()

    def test_get_driver_builds_instance(self):
        """get_driver passes the config to the driver class."""
        config = SelectelConfig(login="1", password="p", container="media")

        driver = get_driver("Selectel", config)

        assert isinstance(driver, SelectelDriver)
        assert driver.config is config

    def test_get_driver_unknown(self):
        """Unknown names raise ValueError listing what is available."""
        with pytest.raises(ValueError, match="available"):
            get_driver("nope", {})

    def test_register_rejects_non_driver(self):
        """Only StorageDriver subclasses can be registered."""
        with pytest.raises(TypeError):
            register_driver("bad", dict)  # type: ignore[arg-type]

    def test_abstract_driver_cannot_instantiate(self):
        """StorageDriver is abstract."""
        with pytest.raises(TypeError):
            StorageDriver()  # type: ignore[abstract]


class TestFileInfo:
    """Tests for FileInfo.from_dict."""

    def test_from_dict_full(self):
        """All known listing fields are parsed."""
        info = FileInfo.from_dict(
            {
                "name": "docs/a.txt",
                "bytes": 12,
                "hash": "abc",
                "content_type": "text/plain",
                "last_modified": "2025-01-01T00:00:00",
                "downloaded": 3,
            }
        )

        assert info.name == "docs/a.txt"
        assert info.size == 12
        assert info.content_type == "text/plain"
        assert info.last_modified == "2025-01-01T00:00:00"
        assert info.extra == {"downloaded": 3}

    def test_from_dict_subdir(self):
        """Delimiter listings return virtual folders as subdir entries."""
        info = FileInfo.from_dict({"subdir": "photos/"})

        assert info.name == "photos/"
        assert info.bytes == 0
        assert info.content_type == "application/directory"


class TestResults:
    """Tests for ExistsResult and MoveResult."""

    def test_exists_result_truthiness(self):
        """Only FOUND is truthy."""
        assert ExistsResult(Presence.FOUND)
        assert not ExistsResult(Presence.NOT_FOUND)
        assert not ExistsResult(Presence.ERROR, error=RuntimeError("x"))

    def test_move_result_complete(self):
        """A move is complete only when both phases ran."""
        result = MoveResult("media/a", "media/b", copied=True)

        assert result.complete is False
        result.deleted = True
        assert result.complete is True


class TestErrors:
    """Tests for the error hierarchy."""

    def test_not_authenticated_status(self):
        """NotAuthenticatedError carries the 499 status code."""
        exc = NotAuthenticatedError("get_object")

        assert isinstance(exc, StorageError)
        assert exc.status_code == 499
        assert "get_object" in str(exc)

    def test_file_not_found_is_builtin(self):
        """StorageFileNotFoundError can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError) as exc_info:
            raise StorageFileNotFoundError("docs/a.txt")

        assert exc_info.value.location == "docs/a.txt"
        assert str(exc_info.value) == "File not found: docs/a.txt"

    def test_partial_move_error(self):
        """PartialMoveError exposes the phase result."""
        result = MoveResult("media/a", "media/b", copied=True)

        exc = PartialMoveError(result, RuntimeError("boom"))

        assert exc.result is result
        assert "media/a" in str(exc)
