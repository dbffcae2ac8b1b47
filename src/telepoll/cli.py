from __future__ import annotations

from pathlib import Path

import anyio
import msgspec
import typer

from . import __version__
from .config import ConfigError
from .logging import get_logger, setup_logging
from .settings import TelepollSettings, load_settings
from .telegram import Bot, GetUpdates, PollSession, TelegramError
from .telegram.api_models import UPDATE_KINDS

logger = get_logger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to telepoll.toml (default: ~/.config/telepoll/telepoll.toml).",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Log Telegram requests and responses.",
    ),
) -> None:
    setup_logging(debug=debug)
    ctx.obj = config


def _settings(ctx: typer.Context) -> TelepollSettings:
    try:
        settings, _ = load_settings(ctx.obj)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    return settings


def _run(func, *args) -> None:
    try:
        anyio.run(func, *args)
    except TelegramError as e:
        typer.echo(f"telegram error: {e}", err=True)
        raise typer.Exit(code=1)


def build_poll_request(
    settings: TelepollSettings,
    *,
    limit: int | None,
    timeout: int | None,
    allowed: list[str],
) -> GetUpdates:
    request = settings.polling.to_request()
    if limit is not None:
        request.limit = limit
    if timeout is not None:
        if timeout >= settings.poll_timeout_s:
            raise typer.BadParameter(
                f"must be shorter than poll_timeout_s ({settings.poll_timeout_s:g}s)",
                param_hint="--timeout",
            )
        request.timeout = timeout
    if allowed:
        unknown = sorted(set(allowed) - set(UPDATE_KINDS))
        if unknown:
            raise typer.BadParameter(
                f"unknown update kind(s): {', '.join(unknown)}; "
                f"expected one of {', '.join(UPDATE_KINDS)}",
                param_hint="--allowed",
            )
        request.allowed_updates = list(allowed)
    return request


async def _log_errors(session: PollSession) -> None:
    async for error in session.errors:
        logger.error(
            "poll.error", error=str(error), error_type=error.__class__.__name__
        )


async def _poll(
    settings: TelepollSettings, request: GetUpdates, max_updates: int | None
) -> None:
    async with await Bot.from_settings(settings) as bot:
        async with bot.poll_updates(request) as session:
            async with anyio.create_task_group() as tg:
                tg.start_soon(_log_errors, session)
                count = 0
                async for update in session.updates:
                    typer.echo(msgspec.json.encode(update).decode())
                    count += 1
                    if max_updates is not None and count >= max_updates:
                        session.cancel()
                        session.updates.close()
                        break


async def _me(settings: TelepollSettings) -> None:
    async with await Bot.from_settings(settings) as bot:
        typer.echo(msgspec.json.encode(bot.self_user).decode())


async def _delete_webhook(settings: TelepollSettings) -> None:
    async with await Bot.from_settings(settings) as bot:
        deleted = await bot.delete_webhook()
        typer.echo("webhook deleted" if deleted else "no webhook to delete")


@app.command()
def me(ctx: typer.Context) -> None:
    """Check the token and print the bot identity."""
    _run(_me, _settings(ctx))


@app.command()
def poll(
    ctx: typer.Context,
    limit: int | None = typer.Option(
        None, "--limit", min=1, max=100, help="Maximum updates per batch."
    ),
    timeout: int | None = typer.Option(
        None, "--timeout", help="Long-poll timeout in seconds."
    ),
    allowed: list[str] = typer.Option(
        [],
        "--allowed",
        help="Update kind to subscribe to (repeatable; default all).",
    ),
    max_updates: int | None = typer.Option(
        None, "--max", min=1, help="Stop after this many updates."
    ),
) -> None:
    """Stream updates to stdout as JSON lines."""
    settings = _settings(ctx)
    request = build_poll_request(
        settings, limit=limit, timeout=timeout, allowed=allowed
    )
    _run(_poll, settings, request, max_updates)


@app.command("delete-webhook")
def delete_webhook(ctx: typer.Context) -> None:
    """Remove a webhook so the bot can be polled."""
    _run(_delete_webhook, _settings(ctx))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
