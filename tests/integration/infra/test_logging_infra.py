from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, log file rotation logic and clean shutdown.
"""

import logging
import time
from logging.handlers import QueueListener
from pathlib import Path
from typing import Iterator

import pytest

from treedigest.infra.logging import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    shutdown_logging,
)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Clean up our root logger handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def test_logging_idempotency() -> None:
    """TC-01: Verify that multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    # First call
    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    # Second call
    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_log_rotation(tmp_path: Path) -> None:
    """TC-02: Verify file rotation when size limit is exceeded."""
    log_file = tmp_path / "test_rotate.log"
    # Set very small max_bytes for testing rotation
    cfg = LoggingConfig(
        level="DEBUG",
        log_file=str(log_file),
        max_bytes=100,  # 100 bytes
        backup_count=1
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")

    # Write enough data to trigger rotation
    for i in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Give time for the QueueListener to process
    time.sleep(0.5)

    # Check if rotation happened (should see .log and .log.1)
    backup_file = tmp_path / "test_rotate.log.1"
    assert log_file.exists()
    assert backup_file.exists(), "Rotation backup file was not created."


def test_queue_listener_architecture() -> None:
    """TC-03: Verify that the root logger uses a QueueHandler-based architecture."""
    cfg = LoggingConfig(level="INFO", console=True)
    configure_logging(cfg)

    root = logging.getLogger()
    queue_handlers = [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]

    assert len(queue_handlers) == 1
    assert isinstance(getattr(root, _QUEUE_LISTENER_ATTR), QueueListener)


def test_shutdown_flushes_and_detaches(tmp_path: Path) -> None:
    """TC-04: After shutdown every queued record is on disk and our handlers are gone."""
    log_file = tmp_path / "run.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    logging.getLogger("treedigest.test").info("traversal summary")
    shutdown_logging()

    root = logging.getLogger()
    assert "traversal summary" in log_file.read_text(encoding="utf-8")
    assert not [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]
    assert getattr(root, _QUEUE_LISTENER_ATTR) is None
    assert not hasattr(root, _CONFIGURED_FLAG_ATTR)


def test_level_filtering(tmp_path: Path) -> None:
    """TC-05: The default WARNING level keeps informational records out."""
    log_file = tmp_path / "quiet.log"
    configure_logging(LoggingConfig(console=False, log_file=str(log_file)))

    logger = logging.getLogger("treedigest.test")
    logger.info("hidden")
    logger.warning("shown")
    shutdown_logging()

    content = log_file.read_text(encoding="utf-8")
    assert "shown" in content
    assert "hidden" not in content


def test_unwritable_log_file_keeps_console(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """TC-06: A log file that cannot be opened is reported and skipped."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    configure_logging(LoggingConfig(level="INFO", log_file=str(blocker / "x.log")))

    root = logging.getLogger()
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is True
    assert "Cannot open log file" in capsys.readouterr().err


def test_from_dict_maps_runtime_keys() -> None:
    cfg = LoggingConfig.from_dict({"log_level": "DEBUG", "log_file": "/tmp/x.log"})

    assert cfg.level == "DEBUG"
    assert cfg.log_file == "/tmp/x.log"
    assert LoggingConfig.from_dict({}).level == "WARNING"
