"""Shared setup and rendering for CLI commands."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from learnlog.core.config import Config
from learnlog.core.exceptions import ConfigurationError
from learnlog.core.notifications import Notification, NotificationLevel, NotificationLog, Notifier
from learnlog.core.storage import LocalStorage
from learnlog.core.timers import Scheduler, TimerQueue
from learnlog.journal import (
    Diary,
    DiaryConfig,
    Entry,
    EntryStats,
    EntryStore,
    SearchEngine,
    ValidationConfig,
    Validator,
)

LEARNLOG_DIR = Path.home() / ".learnlog"
CONFIG_PATH = LEARNLOG_DIR / "config.yaml"

_LEVEL_STYLES = {
    NotificationLevel.INFO: "cyan",
    NotificationLevel.SUCCESS: "green",
    NotificationLevel.WARNING: "yellow",
    NotificationLevel.ERROR: "bold red",
    NotificationLevel.UNDO: "magenta",
}


def load_config(config_file: str | None = None, data_dir: str | None = None) -> Config:
    """Load config from *config_file*, or ~/.learnlog/config.yaml when present."""
    if config_file is None and CONFIG_PATH.exists():
        config_file = str(CONFIG_PATH)
    return Config(config_file=config_file, data_dir=data_dir)


def build_diary(
    config: Config,
    *,
    scheduler: Scheduler | None = None,
    notifier: Notifier | None = None,
    clock: Callable[[], float] = time.time,
) -> Diary:
    """Compose storage, store, search and validation from *config* and load saved entries."""
    settings = DiaryConfig.from_config(config)
    storage = LocalStorage(config.get("paths.storage_dir"), quota_bytes=settings.quota_bytes)
    store = EntryStore(
        storage,
        scheduler or TimerQueue(),
        storage_key=settings.storage_key,
        undo_timeout=settings.undo_timeout,
        notifier=notifier,
    )
    store.load()
    return Diary(
        store,
        search=SearchEngine(settings.max_cache_size),
        validator=Validator(ValidationConfig.from_config(config)),
        notifier=notifier,
        clock=clock,
    )


class CliState:
    """Per-invocation state; the diary is built on first use."""

    def __init__(self, config: Config, console: Console | None = None):
        self.config = config
        self.console = console or Console()
        self.notifications = NotificationLog()
        self.timers = TimerQueue()
        self._diary: Diary | None = None

    @property
    def diary(self) -> Diary:
        if self._diary is None:
            try:
                self._diary = build_diary(self.config, scheduler=self.timers, notifier=self.notifications)
            except ConfigurationError as e:
                raise click.ClickException(str(e)) from e
        return self._diary

    def flush(self) -> list[Notification]:
        """Print and forget pending notifications."""
        items = self.notifications.drain()
        for item in items:
            style = _LEVEL_STYLES[item.level]
            self.console.print(f"[{style}]{escape(item.message)}[/{style}]")
        return items


def render_entries(console: Console, entries: Iterable[Entry], title: str = "Entries") -> None:
    entries = list(entries)
    if not entries:
        console.print("[dim]No entries.[/dim]")
        return
    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Topic", style="bold")
    table.add_column("Content")
    for entry in entries:
        preview = entry.content if len(entry.content) <= 60 else entry.content[:57] + "..."
        table.add_row(
            str(entry.id), entry.created_at.strftime("%Y-%m-%d %H:%M"), escape(entry.topic), escape(preview)
        )
    console.print(table)


def render_entry(console: Console, entry: Entry) -> None:
    lines = [escape(entry.content), ""]
    if entry.link:
        lines.append(f"Link: {escape(entry.link)}")
    if entry.image_url:
        lines.append(f"Image: {escape(entry.image_url)}")
    lines.append(f"[dim]#{entry.id} · {entry.created_at:%Y-%m-%d %H:%M}[/dim]")
    console.print(Panel("\n".join(lines).rstrip(), title=escape(entry.topic)))


def render_stats(console: Console, stats: EntryStats) -> None:
    console.print(f"Total: {stats.total}  Today: {stats.today}  Last 7 days: {stats.week}")


pass_state = click.make_pass_decorator(CliState)
