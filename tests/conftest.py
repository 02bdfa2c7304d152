# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared pytest fixtures for Selectel driver tests."""

import pytest

from fake_selectel import FakeSelectel
from genro_selectel import SelectelConfig, SelectelDriver


@pytest.fixture
def fake():
    """In-memory Selectel service with a 'media' container."""
    return FakeSelectel()


@pytest.fixture
def config():
    """Driver configuration matching the fake service credentials."""
    return SelectelConfig(
        login=FakeSelectel.LOGIN,
        password=FakeSelectel.PASSWORD,
        container="media",
        container_url="https://12345.selcdn.ru",
        temp_url_key="temp-key",
    )


@pytest.fixture
def driver(fake, config):
    """SelectelDriver wired to the fake service."""
    return SelectelDriver(config, transport=fake.transport())


# Marker registration
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "network: marks tests requiring network access")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
