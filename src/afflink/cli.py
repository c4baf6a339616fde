"""Click CLI with commands: save-key, clear-key, status, brands, convert, shell."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click

from afflink.clipboard import copy_to_clipboard
from afflink.config import load_config
from afflink.converter import describe
from afflink.db import get_engine, init_db
from afflink.exceptions import ClipboardError
from afflink.http import create_http_client
from afflink.keystore import KeyStore
from afflink.models import LoadResult
from afflink.session import LinkSession
from afflink.statuses import KeyStatus
from afflink.utils.logging import setup_logging

T = TypeVar("T")

_USABLE = (KeyStatus.VALID, KeyStatus.VALID_NO_BRANDS)
_QUIT_WORDS = ("", "q", "quit", "exit")


@click.group()
@click.option("--config", "config_path", default="config.yaml", help="Path to config YAML file.")
@click.option("-v", "--verbose", is_flag=True, help="Show info-level logs on stderr.")
@click.pass_context
def cli(ctx: click.Context, config_path: str, verbose: bool) -> None:
    """Afflink: turn merchant URLs into affiliate tracking links."""
    ctx.ensure_object(dict)
    cfg = load_config(config_path)
    ctx.obj["config"] = cfg

    engine = get_engine(cfg.settings.database_url)
    init_db(engine)
    ctx.obj["store"] = KeyStore(engine)
    ctx.obj["log"] = setup_logging(
        cfg.settings.log_dir,
        "afflink",
        console_level=logging.INFO if verbose else logging.WARNING,
    )


def _run(ctx: click.Context, fn: Callable[[LinkSession], Awaitable[T]]) -> T:
    """Run *fn* with a fresh session whose HTTP client lives for the call."""
    cfg = ctx.obj["config"]

    async def _main() -> T:
        async with create_http_client(
            proxy_url=cfg.settings.proxy_url or None,
            timeout=cfg.settings.http_timeout,
        ) as client:
            session = LinkSession(client, ctx.obj["store"], ctx.obj["log"], cfg.api)
            return await fn(session)

    return asyncio.run(_main())


def _status_line(result: LoadResult) -> str:
    if result.status == KeyStatus.VALID:
        return f"API key OK. Loaded {result.offer_count} brands ({result.brand_count} convertible domains)."
    if result.status == KeyStatus.VALID_NO_BRANDS:
        return "API key OK, but no approved brands were found. Apply to brands on the affiliate network first."
    if result.status == KeyStatus.INVALID:
        reason = (result.detail or "no data returned").rstrip(".")
        return f"API key rejected: {reason}. Check the key and try again."
    return f"Could not reach the affiliate API: {result.detail}"


def _copy(url: str) -> None:
    try:
        copy_to_clipboard(url)
    except ClipboardError as exc:
        click.echo(f"Copy failed, please copy manually. ({exc})", err=True)
    else:
        click.echo("Copied to clipboard.", err=True)


async def _load_or_explain(session: LinkSession) -> bool:
    """Load the stored key; print why conversions are unavailable if they are."""
    result = await session.load()
    if result is None:
        click.echo("No API key saved. Run 'afflink save-key KEY' first.", err=True)
        return False
    if result.status not in _USABLE:
        click.echo(_status_line(result), err=True)
        return False
    return True


@cli.command("save-key")
@click.argument("api_key")
@click.pass_context
def save_key(ctx: click.Context, api_key: str) -> None:
    """Store an API key and fetch its brands."""
    if not api_key.strip():
        click.echo("Please enter an API key.", err=True)
        raise SystemExit(1)

    result = _run(ctx, lambda session: session.save_key(api_key))
    click.echo(_status_line(result))
    if result.status not in _USABLE:
        raise SystemExit(1)


@cli.command("clear-key")
@click.pass_context
def clear_key(ctx: click.Context) -> None:
    """Forget the stored API key."""

    async def _clear(session: LinkSession) -> None:
        session.clear()

    _run(ctx, _clear)
    click.echo("API key cleared.")


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show whether a key is stored and how many brands it unlocks."""
    result = _run(ctx, lambda session: session.load())
    if result is None:
        click.echo("No API key saved. Run 'afflink save-key KEY' first.")
        return
    click.echo(_status_line(result))


@cli.command()
@click.option("--search", default=None, help="Only show domains or brand names containing this text.")
@click.pass_context
def brands(ctx: click.Context, search: str | None) -> None:
    """List the merchant domains the stored key can convert."""

    async def _brands(session: LinkSession) -> bool:
        if not await _load_or_explain(session):
            return False
        _print_brands(session, search)
        return True

    if not _run(ctx, _brands):
        raise SystemExit(1)


def _print_brands(session: LinkSession, search: str | None) -> None:
    needle = (search or "").lower()
    shown = 0
    for domain, entry in sorted(session.index.items()):
        if needle and needle not in domain and needle not in entry.name.lower():
            continue
        click.echo(f"  {domain}  {entry.name}")
        shown += 1
    click.echo(f"\n{shown} of {session.brand_count} domains shown.")


@cli.command()
@click.argument("url")
@click.option("--copy", "copy_result", is_flag=True, help="Copy the tracking link to the clipboard.")
@click.pass_context
def convert(ctx: click.Context, url: str, copy_result: bool) -> None:
    """Convert a merchant URL into a tracking link."""

    async def _convert(session: LinkSession):
        if not await _load_or_explain(session):
            return None
        return session.convert(url)

    result = _run(ctx, _convert)
    if result is None:
        raise SystemExit(1)
    if not result.ok:
        click.echo(describe(result), err=True)
        raise SystemExit(1)

    click.echo(result.url)
    if copy_result:
        _copy(result.url)


@cli.command()
@click.option("--copy", "copy_result", is_flag=True, help="Copy every tracking link to the clipboard.")
@click.pass_context
def shell(ctx: click.Context, copy_result: bool) -> None:
    """Convert URLs interactively until a blank line, 'quit', or EOF."""

    async def _shell(session: LinkSession) -> bool:
        if not await _load_or_explain(session):
            return False
        click.echo(f"{session.brand_count} brands loaded. Paste a URL ('reload' refreshes, blank line quits).")

        while True:
            try:
                # Blocking read, kept off the event loop
                line = await asyncio.to_thread(click.prompt, "url", default="", show_default=False, prompt_suffix="> ")
            except click.Abort:
                break
            line = line.strip()
            if line.lower() in _QUIT_WORDS:
                break
            if line.lower() == "reload":
                result = await session.load()
                click.echo(_status_line(result) if result else "No API key saved.")
                continue

            converted = session.convert(line)
            if not converted.ok:
                click.echo(describe(converted))
                continue
            click.echo(converted.url)
            if copy_result:
                _copy(converted.url)
        return True

    if not _run(ctx, _shell):
        raise SystemExit(1)
