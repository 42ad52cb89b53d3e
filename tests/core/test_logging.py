"""Tests for learnlog.core.utils.logging."""

from loguru import logger

from learnlog.core.utils.logging import setup_logging


def test_file_sink_receives_messages(tmp_path):
    log_file = tmp_path / "learnlog.log"
    setup_logging(level="debug", log_file=str(log_file))
    try:
        logger.debug("entry store loaded")
    finally:
        logger.remove()
    assert "entry store loaded" in log_file.read_text()


def test_level_filters_file_output(tmp_path):
    log_file = tmp_path / "learnlog.log"
    setup_logging(level="WARNING", log_file=str(log_file))
    try:
        logger.info("quiet")
        logger.warning("loud")
    finally:
        logger.remove()
    text = log_file.read_text()
    assert "loud" in text
    assert "quiet" not in text


def test_returns_sink_ids_and_creates_parent(tmp_path):
    log_file = tmp_path / "logs" / "nested" / "learnlog.log"
    sink_ids = setup_logging(level="info", log_file=log_file)
    try:
        assert len(sink_ids) == 2
        assert log_file.parent.is_dir()
    finally:
        logger.remove()


def test_console_only():
    try:
        assert len(setup_logging()) == 1
    finally:
        logger.remove()
