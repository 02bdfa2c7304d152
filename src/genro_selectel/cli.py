# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Click command line interface for the Selectel driver.

Commands run the driver's smartasync methods synchronously. The driver is
built from SELECTEL_* environment variables unless one is passed as the
Click context object.

Example:
    ::

        export SELECTEL_LOGIN=12345 SELECTEL_PASSWORD=secret SELECTEL_CONTAINER=media
        genro-selectel list --prefix docs/
        genro-selectel put docs/a.txt ./a.txt
        genro-selectel signed-url docs/a.txt --expiry 3600
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

import click
import httpx

from storage.errors import StorageError

from . import __version__
from .selectel_config import selectel_config_from_env
from .selectel_driver import SelectelDriver


def _handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Report driver and HTTP failures as Click errors (exit code 1)."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (StorageError, httpx.HTTPError) as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


@click.group()
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Selectel storage driver CLI."""
    if ctx.obj is None:
        ctx.obj = SelectelDriver(selectel_config_from_env())


@cli.command("list")
@click.option("--prefix", default=None, help="Only list names starting with prefix")
@click.pass_obj
@_handle_errors
def list_cmd(driver: SelectelDriver, prefix: str | None) -> None:
    """List files in the container."""
    for info in driver.list(prefix=prefix):
        click.echo(f"{info.name}\t{info.bytes}\t{info.last_modified or ''}")


@cli.command("containers")
@click.pass_obj
@_handle_errors
def containers_cmd(driver: SelectelDriver) -> None:
    """List containers of the account."""
    for item in driver.containers():
        click.echo(item.get("name", ""))


@cli.command("put")
@click.argument("location")
@click.argument("source", type=click.File("rb"))
@click.pass_obj
@_handle_errors
def put_cmd(driver: SelectelDriver, location: str, source: Any) -> None:
    """Upload SOURCE file to LOCATION."""
    click.echo(driver.put(location, source.read()))


@cli.command("get")
@click.argument("location")
@click.option("-o", "--output", type=click.File("wb"), default="-", help="Output file")
@click.pass_obj
@_handle_errors
def get_cmd(driver: SelectelDriver, location: str, output: Any) -> None:
    """Download LOCATION."""
    output.write(driver.get(location))


@cli.command("delete")
@click.argument("location")
@click.pass_obj
@_handle_errors
def delete_cmd(driver: SelectelDriver, location: str) -> None:
    """Delete LOCATION."""
    driver.delete(location)
    click.echo(f"Deleted {location}")


@cli.command("copy")
@click.argument("src")
@click.argument("dest")
@click.pass_obj
@_handle_errors
def copy_cmd(driver: SelectelDriver, src: str, dest: str) -> None:
    """Copy SRC to DEST inside the container."""
    driver.copy(src, dest)
    click.echo(f"Copied {src} -> {dest}")


@cli.command("move")
@click.argument("src")
@click.argument("dest")
@click.option("--dest-container", default=None, help="Destination container")
@click.pass_obj
@_handle_errors
def move_cmd(driver: SelectelDriver, src: str, dest: str, dest_container: str | None) -> None:
    """Move SRC to DEST (copy, then delete)."""
    result = driver.move(src, dest, dest_container)
    click.echo(f"Moved {result.source} -> {result.destination}")


@cli.command("exists")
@click.argument("location")
@click.pass_obj
@_handle_errors
def exists_cmd(driver: SelectelDriver, location: str) -> None:
    """Exit with 0 if LOCATION exists, 1 otherwise."""
    found = driver.exists(location)
    click.echo("yes" if found else "no")
    if not found:
        raise SystemExit(1)


@cli.command("url")
@click.argument("location")
@click.pass_obj
@_handle_errors
def url_cmd(driver: SelectelDriver, location: str) -> None:
    """Print the public URL of LOCATION."""
    try:
        click.echo(driver.get_url(location))
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command("signed-url")
@click.argument("location")
@click.option("--expiry", default=600, show_default=True, help="Validity in seconds")
@click.pass_obj
@_handle_errors
def signed_url_cmd(driver: SelectelDriver, location: str, expiry: int) -> None:
    """Print a temporary URL for LOCATION."""
    click.echo(driver.get_signed_url(location, expiry=expiry))


__all__ = ["cli"]
