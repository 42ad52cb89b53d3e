"""
loguru sinks for the learnlog CLI.

Library modules only ever do ``from loguru import logger``; choosing where
log records go is left to the host. The CLI calls :func:`setup_logging` once
per invocation with the level and file taken from the ``logging`` config
section (or ``--log-level``).
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def setup_logging(
    level: str = "WARNING",
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> list[int]:
    """
    Replace all loguru sinks with stderr and, optionally, a rotating file.

    Args:
        level: Minimum level name, any case (``debug``, ``WARNING``, ...).
        log_file: File sink path; its parent directory is created.
        rotation: Size or interval at which the file is rotated.
        retention: How long rotated files are kept.

    Returns:
        The ids of the sinks added, for ``logger.remove(id)``.
    """
    level = level.upper()
    logger.remove()
    sink_ids = [logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)]

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        sink_ids.append(
            logger.add(path, level=level, format=FILE_FORMAT, rotation=rotation, retention=retention)
        )
    return sink_ids
