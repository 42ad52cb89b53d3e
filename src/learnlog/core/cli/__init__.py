"""Learnlog CLI entry point for entry, data and shell commands."""

import click

from learnlog import __version__
from learnlog.core.utils.logging import setup_logging


@click.group()
@click.version_option(version=__version__, package_name="learnlog")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), help="YAML or JSON config file.")
@click.option("--data-dir", type=click.Path(file_okay=False), help="Where entries are stored.")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_dir: str | None, log_level: str | None) -> None:
    """Learnlog: a personal learning diary."""
    from .common import CliState, load_config

    config = load_config(config_file, data_dir)
    setup_logging(level=log_level or config.get("logging.level", "WARNING"), log_file=config.get("logging.file"))
    ctx.obj = CliState(config)


# Register subcommands (lazy imports keep startup fast)
from .data_cmd import clear, export, import_entries
from .entries_cmd import add, day, delete, edit, list_entries, search, show, stats
from .shell_cmd import shell

for _command in (add, list_entries, search, show, edit, delete, stats, day, export, import_entries, clear, shell):
    main.add_command(_command)
