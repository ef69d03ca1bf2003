"""Tests for the logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from iconbundle.logging import configure_logging, format_command, get_logger, log_command


def test_get_logger_nests_under_package() -> None:
    assert get_logger().name == "iconbundle"
    assert get_logger("send").name == "iconbundle.send"


def test_format_command_quotes_arguments() -> None:
    assert format_command(["scp", "_tmp_mail.svg", "v25.host:/opt/my dir/mail.svg"]) == (
        "$ scp _tmp_mail.svg 'v25.host:/opt/my dir/mail.svg'"
    )


def test_log_command_echoes_at_info(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("iconbundle"), "propagate", True)
    caplog.set_level(logging.INFO, logger="iconbundle")

    log_command(get_logger("send"), ["chmod", "664", "mail.svg"])

    assert [record.getMessage() for record in caplog.records] == ["$ chmod 664 mail.svg"]


def test_configure_logging_replaces_handlers(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "iconbundle.log"

    configure_logging()
    logger = configure_logging(verbose=True, log_file=log_file)
    try:
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        logger.debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "DEBUG iconbundle: hello" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
