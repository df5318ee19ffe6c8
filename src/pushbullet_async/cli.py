"""Command-line interface for pushbullet_async."""

from __future__ import annotations

import asyncio
import functools
import logging
import mimetypes
import sys
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any, TypeVar

import click

from pushbullet_async import (
    ChannelTarget,
    ClientTarget,
    DeviceTarget,
    File,
    Link,
    Note,
    PushbulletClient,
    PushbulletError,
    PushTarget,
    SelfUser,
    UserTarget,
    iter_file,
)
from pushbullet_async.config import TOKEN_VAR, get_config, get_log_level

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

T = TypeVar("T")


def _get_token(ctx: click.Context) -> str:
    """Token from --token / PUSHBULLET_TOKEN, falling back to a .env file."""
    token = ctx.obj.get("token")
    if token:
        return token
    try:
        return get_config()[TOKEN_VAR]
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, turning library errors into a message and exit code 1."""
    try:
        return asyncio.run(coro)
    except PushbulletError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


def _resolve_target(
    device: str | None,
    email: str | None,
    channel: str | None,
    client: str | None,
) -> PushTarget:
    chosen = [opt for opt in (device, email, channel, client) if opt]
    if len(chosen) > 1:
        raise click.UsageError("Only one of --device, --email, --channel, --client may be given")
    if device:
        return DeviceTarget(iden=device)
    if email:
        return UserTarget(email=email)
    if channel:
        return ChannelTarget(tag=channel)
    if client:
        return ClientTarget(iden=client)
    return SelfUser()


def target_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the push target options and pass the resolved target as `target`."""

    @click.option("--device", "-d", help="Device iden to push to")
    @click.option("--email", "-e", help="Email of the user to push to")
    @click.option("--channel", help="Channel tag to push to")
    @click.option("--client", "client_iden", help="OAuth client iden to push to")
    @functools.wraps(func)
    def wrapper(
        *args: Any,
        device: str | None,
        email: str | None,
        channel: str | None,
        client_iden: str | None,
        **kwargs: Any,
    ) -> Any:
        target = _resolve_target(device, email, channel, client_iden)
        return func(*args, target=target, **kwargs)

    return wrapper


@click.group()
@click.version_option(package_name="pushbullet-async")
@click.option("--token", "-t", envvar=TOKEN_VAR, help="Pushbullet access token")
@click.option("--verbose", "-v", is_flag=True, help="Log requests and responses")
@click.pass_context
def main(ctx: click.Context, token: str | None, verbose: bool) -> None:
    """Pushbullet CLI - Push notes, links and files to your devices."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_log_level(),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ctx.ensure_object(dict)
    ctx.obj["token"] = token


@main.command()
@click.pass_context
def me(ctx: click.Context) -> None:
    """Show the logged in user."""
    token = _get_token(ctx)

    async def run() -> None:
        async with PushbulletClient(token) as client:
            user = await client.get_user()
        click.echo(f"{user.name} <{user.email}>")

    _run(run())


@main.command()
@click.pass_context
def devices(ctx: click.Context) -> None:
    """List devices registered to the account."""
    token = _get_token(ctx)

    async def run() -> None:
        async with PushbulletClient(token) as client:
            items = await client.list_devices()
        if not items:
            click.echo("(no devices)")
        for device in items:
            line = f"  {device.nickname or '(unnamed)'}  {device.iden}"
            if not device.active:
                line += click.style("  (inactive)", fg="yellow")
            click.echo(line)

    _run(run())


@main.command()
@click.argument("title")
@click.argument("body", default="")
@target_options
@click.pass_context
def note(ctx: click.Context, title: str, body: str, target: PushTarget) -> None:
    """Push a note.

    Examples:

        pushbullet note "Build finished" "All tests passed"

        pushbullet note Hello --device ujpah72o0sjAoRtnM0jc
    """
    token = _get_token(ctx)

    async def run() -> None:
        async with PushbulletClient(token) as client:
            await client.push(target, Note(title=title, body=body))

    _run(run())
    click.echo(click.style("Note pushed.", fg="green"))


@main.command()
@click.argument("url")
@click.option("--title", default="", help="Link title")
@click.option("--body", default="", help="Message to go with the link")
@target_options
@click.pass_context
def link(ctx: click.Context, url: str, title: str, body: str, target: PushTarget) -> None:
    """Push a link.

    Examples:

        pushbullet link https://example.com --title Example
    """
    token = _get_token(ctx)

    async def run() -> None:
        async with PushbulletClient(token) as client:
            await client.push(target, Link(title=title, body=body, url=url))

    _run(run())
    click.echo(click.style("Link pushed.", fg="green"))


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--type", "file_type", default=None, help="MIME type (guessed from the name by default)")
@click.option("--body", default="", help="Message to go with the file")
@target_options
@click.pass_context
def upload(
    ctx: click.Context,
    path: Path,
    file_type: str | None,
    body: str,
    target: PushTarget,
) -> None:
    """Upload a file and push it.

    PATH: The file to upload. It is streamed, never loaded into memory.

    Examples:

        pushbullet upload report.pdf

        pushbullet upload notes.txt --body "Meeting notes" --email friend@example.com
    """
    token = _get_token(ctx)
    mime = file_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"

    async def run() -> str:
        async with PushbulletClient(token) as client:
            uploaded = await client.upload_request(path.name, mime, iter_file(path))
            await client.push(
                target,
                File(
                    body=body,
                    file_name=uploaded.file_name,
                    file_type=uploaded.file_type,
                    file_url=uploaded.file_url,
                ),
            )
        return uploaded.file_url

    file_url = _run(run())
    click.echo(click.style("✓ ", fg="green") + f"{path.name} -> {file_url}")


if __name__ == "__main__":
    main()
