from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies that reconfiguration replaces rather than duplicates handlers,
log file rotation, and the per-snippet stamp on file records.
"""

import logging
from pathlib import Path

import pytest

from snippet4ng.infra.logging import LoggingConfig, configure_logging, get_logger, snippet_context
from snippet4ng.infra.logging.context import current_snippet
from snippet4ng.infra.logging.handlers import is_managed


def _managed_handlers():
    return [h for h in logging.getLogger().handlers if is_managed(h)]


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove our handlers before and after each test."""
    def _reset() -> None:
        root = logging.getLogger()
        for h in _managed_handlers():
            root.removeHandler(h)
            h.close()

    _reset()
    yield
    _reset()


def test_reconfiguration_does_not_duplicate_handlers() -> None:
    """TC-01: Repeated configuration keeps a single set of handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    configure_logging(cfg)

    assert len(_managed_handlers()) == 1


def test_reconfiguration_applies_new_level() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="debug"))

    assert logging.getLogger().level == logging.DEBUG
    assert _managed_handlers()[0].level == logging.DEBUG


def test_unknown_level_falls_back_to_info() -> None:
    assert LoggingConfig(level="chatty").level_no == logging.INFO


def test_foreign_handlers_are_kept() -> None:
    root = logging.getLogger()
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())
        assert foreign in root.handlers
    finally:
        root.removeHandler(foreign)


def test_log_rotation(tmp_path: Path) -> None:
    """TC-02: Verify file rotation when size limit is exceeded."""
    log_file = tmp_path / "test_rotate.log"
    configure_logging(LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    ))
    logger = get_logger("test_rotate")

    for _ in range(10):
        logger.debug("Generating component for a long snippet path. " * 5)

    assert log_file.exists()
    assert (tmp_path / "test_rotate.log.1").exists(), "Rotation backup file was not created."


def test_file_records_carry_snippet(tmp_path: Path) -> None:
    """TC-03: Lines logged while a snippet is processed name that snippet."""
    log_file = tmp_path / "run.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))
    logger = get_logger("snippet4ng.test")

    logger.info("before")
    with snippet_context("cards/basic-card.txt"):
        logger.info("inside")
    logger.info("after")

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert "| cards/basic-card.txt |" in lines[1]
    assert lines[1].endswith("inside")
    assert "| - |" in lines[0]
    assert "| - |" in lines[2]


def test_snippet_context_restores_on_error() -> None:
    with pytest.raises(RuntimeError):
        with snippet_context("a.txt"):
            assert current_snippet() == "a.txt"
            raise RuntimeError("boom")

    assert current_snippet() == "-"


def test_unwritable_log_file_keeps_console(tmp_path: Path, capsys) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    configure_logging(LoggingConfig(console=True, log_file=str(blocker / "run.log")))

    assert len(_managed_handlers()) == 1
    assert "Cannot open log file" in capsys.readouterr().err
