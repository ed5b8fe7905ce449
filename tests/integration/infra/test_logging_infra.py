from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the QueueListener architecture, idempotency of configuration and
log file rotation.
"""

import logging
from pathlib import Path

import pytest

from suitecheck.infra.logging import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    shutdown_logging,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove our handlers before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def _our_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    """TC-01: Repeated configuration does not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    first = len(_our_handlers())
    configure_logging(cfg)

    assert first == 1
    assert len(_our_handlers()) == first


def test_force_reconfigures() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    old_listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not old_listener
    assert len(_our_handlers()) == 1


def test_log_file_receives_records(tmp_path: Path) -> None:
    """TC-02: Records reach the file once the listener is flushed."""
    log_file = tmp_path / "logs" / "suitecheck.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file)))

    logging.getLogger("suitecheck.test").warning("scan finished")
    shutdown_logging()

    content = log_file.read_text(encoding="utf-8")
    assert "scan finished" in content
    assert "suitecheck.test" in content


def test_log_rotation(tmp_path: Path) -> None:
    """TC-03: A small size limit produces a backup segment."""
    log_file = tmp_path / "rotate.log"
    configure_logging(LoggingConfig(
        level="DEBUG", console=False, log_file=str(log_file), max_bytes=100, backup_count=1
    ))

    for _ in range(10):
        logging.getLogger("suitecheck.rotate").debug("a long line to trigger rotation " * 3)
    shutdown_logging()

    assert (tmp_path / "rotate.log.1").exists()


def test_shutdown_clears_configured_flag() -> None:
    configure_logging(LoggingConfig())
    shutdown_logging()

    root = logging.getLogger()
    assert not getattr(root, _CONFIGURED_FLAG_ATTR, False)
    assert _our_handlers() == []


def test_no_handlers_leaves_root_unconfigured() -> None:
    configure_logging(LoggingConfig(console=False, log_file=None))

    assert _our_handlers() == []
