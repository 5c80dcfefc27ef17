"""Tests for logging configuration."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from presencebridge.logging import configure_logging, get_logger
from presencebridge.settings import Settings


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def test_level_from_settings(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(Settings(log_level="WARNING"))
    log = get_logger("test")

    log.info("hidden_event")
    log.warning("shown_event", game="Balatro")

    err = capsys.readouterr().err
    assert "hidden_event" not in err
    assert "shown_event" in err
    assert "Balatro" in err


def test_explicit_level_overrides_settings(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(Settings(log_level="ERROR"), level="debug")

    get_logger("test").debug("debug_event")

    assert "debug_event" in capsys.readouterr().err


def test_unknown_level_falls_back_to_info(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(level="chatty")

    log = get_logger("test")
    log.debug("debug_event")
    log.info("info_event")

    err = capsys.readouterr().err
    assert "debug_event" not in err
    assert "info_event" in err
