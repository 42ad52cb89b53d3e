"""learnlog add/list/search/show/edit/delete/stats/day: entry commands."""

from __future__ import annotations

from datetime import datetime

import click

from .common import CliState, pass_state, render_entries, render_entry, render_stats


@click.command()
@click.argument("topic")
@click.argument("content")
@click.option("--link", default=None, help="Related http(s) URL.")
@click.option("--image-url", default=None, help="Image http(s) URL.")
@pass_state
def add(state: CliState, topic: str, content: str, link: str | None, image_url: str | None) -> None:
    """Record a new entry."""
    entry = state.diary.create_entry(topic, content, link=link, image_url=image_url)
    state.flush()
    if entry is None:
        raise SystemExit(1)
    click.echo(f"#{entry.id}")


@click.command("list")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Show at most N entries.")
@pass_state
def list_entries(state: CliState, limit: int | None) -> None:
    """List entries, most recent first."""
    entries = state.diary.store.get_entries()
    render_entries(state.console, entries[:limit] if limit else entries)


@click.command()
@click.argument("terms", nargs=-1, required=True)
@pass_state
def search(state: CliState, terms: tuple[str, ...]) -> None:
    """Show entries containing every search term."""
    query = " ".join(terms)
    results = state.diary.search(query)
    render_entries(state.console, results, title=f"Results for '{query}' ({len(results)})")


@click.command()
@click.argument("entry_id", type=int)
@pass_state
def show(state: CliState, entry_id: int) -> None:
    """Show one entry in full."""
    entry = state.diary.get(entry_id)
    if entry is None:
        raise click.ClickException(f"Entry {entry_id} not found")
    render_entry(state.console, entry)


@click.command()
@click.argument("entry_id", type=int)
@click.option("--topic", default=None)
@click.option("--content", default=None)
@click.option("--link", default=None, help="New link; pass an empty string to remove it.")
@click.option("--image-url", default=None, help="New image URL; pass an empty string to remove it.")
@pass_state
def edit(
    state: CliState,
    entry_id: int,
    topic: str | None,
    content: str | None,
    link: str | None,
    image_url: str | None,
) -> None:
    """Change fields of an existing entry."""
    changes = {
        key: value
        for key, value in {"topic": topic, "content": content, "link": link, "image_url": image_url}.items()
        if value is not None
    }
    if not changes:
        raise click.UsageError("Nothing to change. Pass at least one of --topic, --content, --link, --image-url.")
    ok = state.diary.edit_entry(entry_id, **changes)
    state.flush()
    if not ok:
        raise SystemExit(1)


@click.command()
@click.argument("entry_id", type=int)
@pass_state
def delete(state: CliState, entry_id: int) -> None:
    """Delete an entry. Use 'learnlog shell' to be able to undo."""
    ok = state.diary.delete_entry(entry_id)
    state.notifications.drain()
    if not ok:
        raise click.ClickException(f"Entry {entry_id} not found")
    click.echo(f"Entry {entry_id} deleted.")


@click.command()
@pass_state
def stats(state: CliState) -> None:
    """Show entry counts."""
    render_stats(state.console, state.diary.stats)


@click.command()
@click.argument("when", type=click.DateTime(formats=["%Y-%m-%d"]))
@pass_state
def day(state: CliState, when: datetime) -> None:
    """List the entries of one day (YYYY-MM-DD)."""
    entries = state.diary.entries_on(when.date())
    render_entries(state.console, entries, title=f"{when:%A %d %B %Y}")
