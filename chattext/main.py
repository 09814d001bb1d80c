"""chattext entry point: inspect, convert and deliver legacy-coded chat text."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click

from chattext.chat.archive import MessageArchive
from chattext.chat.dispatcher import ChatDispatcher
from chattext.chat.log import ChatLog
from chattext.config import Settings, load_settings
from chattext.core.bus import EventBus
from chattext.text import codec
from chattext.text.component import TextComponent
from chattext.text.errors import ChatTextError
from chattext.utils.logging import get_logger, setup_logging

log = get_logger(__name__)


class ChatSession:
    """Wires the bus, chat log and optional archive together from settings."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.bus = EventBus()
        self.archive: MessageArchive | None = None
        if settings.archive.enabled:
            self.archive = MessageArchive(settings.get_archive_path())
        self.dispatcher = ChatDispatcher(
            self.bus,
            ChatLog(max_lines=settings.chat.max_lines),
            history_limit=settings.chat.history_limit,
            archive=self.archive,
        )

    async def start(self) -> None:
        if self.archive is not None:
            await self.archive.start()
        await self.bus.start()
        log.info("session_started", archive=self.archive is not None)

    async def stop(self) -> None:
        await self.bus.stop()
        if self.archive is not None:
            await self.archive.stop()
        log.info("session_stopped")


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """Build, inspect and convert styled chat text."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    ctx.obj = settings


@cli.command()
@click.argument("text")
@click.option("--indent", default=2, show_default=True, help="JSON indentation")
def parse(text: str, indent: int) -> None:
    """Split TEXT on its formatting codes and print the encoded parts."""
    component = _build(text)
    log.debug("parsed", parts=len(component))
    click.echo(codec.dumps(component, indent=indent))


@cli.command(name="format")
@click.argument("descriptor")
def format_(descriptor: str) -> None:
    """Build a message from a JSON DESCRIPTOR (or list) and print its formatted text."""
    click.echo(_build(_load_json(descriptor)).formatted_text)


@cli.command()
@click.argument("text")
def plain(text: str) -> None:
    """Print TEXT with its formatting codes removed."""
    click.echo(_build(text).unformatted_text)


@cli.command()
@click.argument("text")
@click.option("--id", "dispatch_id", type=int, default=None, help="Dispatch id to send under")
@click.option("--action-bar", is_flag=True, help="Show on the action bar instead of chat")
@click.pass_obj
def send(settings: Settings, text: str, dispatch_id: int | None, action_bar: bool) -> None:
    """Deliver TEXT through a chat session, archiving it when enabled."""
    component = _build(text)
    if dispatch_id is not None:
        component = component.with_dispatch_id(dispatch_id)
    asyncio.run(_send(settings, component, action_bar))
    click.echo(component.formatted_text)


@cli.command()
@click.option("--limit", default=20, show_default=True, help="Number of messages")
@click.option("--channel", type=click.Choice(["chat", "action_bar"]), default=None)
@click.pass_obj
def history(settings: Settings, limit: int, channel: str | None) -> None:
    """Print archived messages, newest first."""
    if not settings.archive.enabled:
        raise click.ClickException("The message archive is disabled")
    for component in asyncio.run(_recent(settings, limit, channel)):
        click.echo(component.unformatted_text)


async def _send(settings: Settings, component: TextComponent, action_bar: bool) -> None:
    session = ChatSession(settings)
    await session.start()
    try:
        if action_bar:
            await session.dispatcher.action_bar(component)
        else:
            await session.dispatcher.chat(component)
    finally:
        await session.stop()


async def _recent(settings: Settings, limit: int, channel: str | None) -> list[TextComponent]:
    archive = MessageArchive(settings.get_archive_path())
    await archive.start()
    try:
        return await archive.recent(limit=limit, channel=channel)
    finally:
        await archive.stop()


def _load_json(value: str) -> Any:
    try:
        return json.loads(value)
    except ValueError as exc:
        raise click.BadParameter(f"not valid JSON: {exc}", param_hint="DESCRIPTOR") from exc


def _build(value: object) -> TextComponent:
    try:
        return TextComponent(value)
    except ChatTextError as exc:
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":
    cli()
