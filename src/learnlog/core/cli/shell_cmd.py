"""learnlog shell: interactive session with a live undo window."""

from __future__ import annotations

import shlex

import click
from rich.console import Console
from rich.panel import Panel

from .common import CliState, pass_state, render_entries, render_entry, render_stats

HELP_TEXT = (
    "Commands:\n"
    "  add                   Record a new entry (prompts for fields)\n"
    "  list [N]              Show the current results\n"
    "  search [TERMS...]     Filter by terms (no terms resets)\n"
    "  show ID               Show one entry\n"
    "  delete ID             Delete an entry (undoable for a few seconds)\n"
    "  undo                  Restore the last deleted entry\n"
    "  stats                 Show counts\n"
    "  help                  Show this help\n"
    "  exit                  Quit"
)


class DiaryShell:
    """Read-eval loop over a :class:`CliState`.

    Due timers run before and after every command, so an undo window that
    expired while the user was typing is closed before ``undo`` is tried.
    """

    def __init__(self, state: CliState):
        self.state = state
        self.console: Console = state.console
        self._running = False

    def run(self) -> None:
        self._running = True
        self.console.print(Panel("Type 'help' for commands, 'exit' to quit.", title="Learnlog"))
        while self._running:
            try:
                line = self.console.input("[bold cyan]learnlog>[/] ").strip()
            except (EOFError, KeyboardInterrupt):
                self.console.print("\nGoodbye!")
                break
            self.state.timers.run_due()
            if line:
                self.execute(line)
            self.state.timers.run_due()
            self.state.flush()

    def execute(self, line: str) -> None:
        try:
            command, *args = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]{e}[/red]")
            return

        handler = getattr(self, f"do_{command.lower()}", None)
        if handler is None:
            self.console.print(f"[red]Unknown command '{command}'. Type 'help'.[/red]")
            return
        try:
            handler(args)
        except (ValueError, IndexError):
            self.console.print(f"[red]Usage error for '{command}'. Type 'help'.[/red]")

    # -- Commands -----------------------------------------------------------

    def do_add(self, args: list[str]) -> None:
        topic = self.console.input("Topic: ")
        content = self.console.input("Content: ")
        link = self.console.input("Link (optional): ")
        image_url = self.console.input("Image URL (optional): ")
        self.state.diary.create_entry(topic, content, link=link, image_url=image_url)

    def do_list(self, args: list[str]) -> None:
        results = self.state.diary.results
        limit = int(args[0]) if args else None
        render_entries(self.console, results[:limit] if limit else results)

    def do_search(self, args: list[str]) -> None:
        query = " ".join(args)
        results = self.state.diary.search(query)
        title = f"Results for '{query}' ({len(results)})" if query else "Entries"
        render_entries(self.console, results, title=title)

    def do_show(self, args: list[str]) -> None:
        entry = self.state.diary.get(int(args[0]))
        if entry is None:
            self.console.print("[red]Entry not found[/red]")
            return
        render_entry(self.console, entry)

    def do_delete(self, args: list[str]) -> None:
        if self.state.diary.delete_entry(int(args[0])):
            seconds = self.state.diary.store.undo_timeout
            self.console.print(f"[dim]Type 'undo' within {seconds:g}s to restore it.[/dim]")

    def do_undo(self, args: list[str]) -> None:
        self.state.diary.undo_delete()

    def do_stats(self, args: list[str]) -> None:
        render_stats(self.console, self.state.diary.stats)

    def do_help(self, args: list[str]) -> None:
        self.console.print(Panel(HELP_TEXT, title="Help"))

    def do_exit(self, args: list[str]) -> None:
        self.console.print("Goodbye!")
        self._running = False

    do_quit = do_exit


@click.command()
@pass_state
def shell(state: CliState) -> None:
    """Interactive session where deletions can be undone."""
    DiaryShell(state).run()
