"""learnlog export/import/clear: whole-diary commands."""

from __future__ import annotations

import asyncio

import click

from learnlog.core.exceptions import FileIOError
from learnlog.journal.transfer import export_filename, read_import, write_export

from .common import CliState, pass_state


@click.command()
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the JSON instead of writing a file.")
@pass_state
def export(state: CliState, path: str | None, to_stdout: bool) -> None:
    """Export all entries as JSON (default: learning-diary-YYYY-MM-DD.json)."""
    if to_stdout:
        click.echo(state.diary.export_data())
        state.notifications.drain()
        return

    entries = state.diary.store.get_entries()
    try:
        target = asyncio.run(write_export(path or export_filename(), entries))
    except FileIOError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"Exported {len(entries)} entries to {target}")


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@pass_state
def import_entries(state: CliState, path: str) -> None:
    """Merge entries from a JSON export. Existing ids are skipped."""
    try:
        raw = asyncio.run(read_import(path))
    except FileIOError as e:
        raise click.ClickException(str(e)) from e
    state.diary.import_data(raw)
    state.flush()


@click.command()
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@pass_state
def clear(state: CliState, yes: bool) -> None:
    """Delete ALL entries. This cannot be undone."""
    if not yes:
        click.confirm("Delete ALL entries? This cannot be undone.", abort=True)
    state.diary.clear_all()
    state.flush()
