# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""genro-selectel: Selectel cloud storage driver for the Genropy framework.

This package exposes Selectel storage (Swift-style containers and objects)
through the generic file-driver API of the ``storage`` package.

Main components:
    SelectelConfig: Configuration dataclass
    SelectelDriver: File driver (exists, list, put, get, delete, copy,
        move, get_url, get_signed_url)
    selectel_config_from_env: Factory to build config from environment

Usage:
    from genro_selectel import SelectelConfig, SelectelDriver

    config = SelectelConfig(
        login="12345",
        password="secret",
        container="media",
        container_url="https://12345.selcdn.ru",
    )
    driver = SelectelDriver(config)
    url = await driver.put("docs/a.txt", b"hello")

    # Or through the driver registry:
    from storage import get_driver
    driver = get_driver("selectel", config)
"""

__version__ = "0.1.0"

from storage import register_driver

from .selectel_config import SelectelConfig, selectel_config_from_env
from .selectel_driver import SelectelDriver

register_driver("selectel", SelectelDriver)
register_driver("sel", SelectelDriver)

__all__ = [
    "SelectelConfig",
    "SelectelDriver",
    "selectel_config_from_env",
    "main",
]


def main() -> None:
    """CLI entry point."""
    from .cli import cli

    cli()
