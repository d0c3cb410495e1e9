from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration,
forced reconfiguration and log file rotation.
"""

import logging
from logging.handlers import QueueListener
from pathlib import Path

import pytest

from transmatrix.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from transmatrix.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR
from transmatrix.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Clean up our root logger handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def _our_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    """TC-01: Verify that multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    initial_handler_count = len(_our_handlers())
    configure_logging(cfg)

    assert len(_our_handlers()) == initial_handler_count == 1


def test_force_reconfigures_level() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(_our_handlers()) == 1


def test_log_rotation(tmp_path: Path) -> None:
    """TC-02: Verify file rotation when size limit is exceeded."""
    log_file = tmp_path / "test_rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")
    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Stopping the listener flushes the queue
    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "test_rotate.log.1").exists(), "Rotation backup file was not created."


def test_queue_listener_architecture() -> None:
    """TC-03: Verify that the root logger uses a QueueHandler-based architecture."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is True
    assert isinstance(getattr(root, _QUEUE_LISTENER_ATTR), QueueListener)


def test_shutdown_is_repeatable() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    shutdown_logging()
    shutdown_logging()
    assert _our_handlers() == []


def test_unwritable_log_file_keeps_console(tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")

    configure_logging(LoggingConfig(level="INFO", console=True, log_file=str(blocker / "x.log")))

    assert len(_our_handlers()) == 1
    assert "Cannot open log file" in capsys.readouterr().err


def test_settings_from_app_config() -> None:
    cfg = LoggingConfig.from_settings({"log_level": "WARNING", "log_file": ""})
    assert cfg.level == "WARNING"
    assert cfg.log_file is None
    assert cfg.console is True

    debug_cfg = LoggingConfig.from_settings({"log_level": "ERROR", "log_file": "/tmp/t.log"}, debug=True)
    assert debug_cfg.level == "DEBUG"
    assert debug_cfg.log_file == "/tmp/t.log"
