from __future__ import annotations

import logging

import pytest

from cert_registry.core.logging import _ContainerFormatter, setup_logging


def _record(level: int, msg: str = "hello", *, filename: str = "svc.py", lineno: int = 1):
    return logging.LogRecord(
        name="cert_registry.services.issuance_engine",
        level=level,
        pathname=filename,
        lineno=lineno,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.mark.parametrize(
    ("name", "level"),
    [("debug", logging.DEBUG), ("warning", logging.WARNING), ("nonexistent", logging.INFO)],
)
def test_setup_logging_sets_root_level(name: str, level: int) -> None:
    setup_logging(name)
    assert logging.getLogger().level == level


@pytest.mark.parametrize("noisy", ["uvicorn", "httpx", "sqlalchemy.engine"])
def test_setup_logging_floors_third_party_at_warning(noisy: str) -> None:
    setup_logging("debug")
    assert logging.getLogger(noisy).level == logging.WARNING

    setup_logging("error")
    assert logging.getLogger(noisy).level == logging.ERROR


def test_setup_logging_installs_single_handler() -> None:
    setup_logging("info")
    setup_logging("info")
    assert len(logging.getLogger().handlers) == 1


def test_formatter_omits_location_below_warning() -> None:
    output = _ContainerFormatter().format(_record(logging.INFO, "minted"))
    assert "minted" in output
    assert "[svc.py:" not in output


@pytest.mark.parametrize("level", [logging.WARNING, logging.ERROR])
def test_formatter_appends_location_from_warning(level: int) -> None:
    output = _ContainerFormatter().format(_record(level, "denied", lineno=42))
    assert "denied" in output
    assert "[svc.py:42]" in output


def test_formatter_timestamp_has_milliseconds() -> None:
    output = _ContainerFormatter().format(_record(logging.INFO))
    timestamp = output.split(" ", 1)[0]
    # 2026-01-01T00:00:00.123+00:00
    assert timestamp[19] == "."
    assert timestamp[20:23].isdigit()
