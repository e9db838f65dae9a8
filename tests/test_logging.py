"""Tests for structlog logging configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from unittest.mock import patch

import pytest
import structlog
from structlog.testing import capture_logs

from shamir_custody.core.scheme import SchemeParams, WrongShareCount, recover, split
from shamir_custody.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = [
        h for h in root.handlers if not isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    root.setLevel(level)


def _emit_rejection() -> None:
    params = SchemeParams(threshold=2, total_shares=3, prime=101)
    with pytest.raises(WrongShareCount):
        recover(params, [])


class TestRendering:
    def test_json_lines_carry_event_context(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict("os.environ", {"LOG_FORMAT": "json", "LOG_LEVEL": "INFO"}):
            configure_logging()
        _emit_rejection()

        lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
        records = [json.loads(line) for line in lines]
        rejection = next(r for r in records if r["event"] == "recover_rejected")
        assert rejection["reason"] == "wrong_share_count"
        assert rejection["expected"] == 2
        assert rejection["got"] == 0
        assert rejection["level"] == "warning"
        assert "timestamp" in rejection

    def test_console_output_is_not_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict("os.environ", {"LOG_FORMAT": "console", "LOG_LEVEL": "INFO"}):
            configure_logging()
        _emit_rejection()

        out = capsys.readouterr().out
        assert "recover_rejected" in out
        assert "wrong_share_count" in out
        with pytest.raises(json.JSONDecodeError):
            json.loads(out.splitlines()[0])

    def test_stdlib_records_share_the_renderer(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict("os.environ", {"LOG_FORMAT": "json", "LOG_LEVEL": "INFO"}):
            configure_logging()
        logging.getLogger("third_party").warning("plain stdlib message")

        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert record["event"] == "plain stdlib message"


class TestLevels:
    def test_warning_level_hides_debug_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict("os.environ", {"LOG_FORMAT": "json", "LOG_LEVEL": "WARNING"}):
            configure_logging()
        params = SchemeParams(threshold=2, total_shares=3, prime=101)
        recover(params, split(params, 7)[:2])
        assert "secret_recovered" not in capsys.readouterr().out

    def test_debug_level_shows_split_and_recover(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict("os.environ", {"LOG_FORMAT": "json", "LOG_LEVEL": "DEBUG"}):
            configure_logging()
        params = SchemeParams(threshold=2, total_shares=3, prime=101)
        recover(params, split(params, 7)[:2])

        events = [json.loads(line)["event"] for line in capsys.readouterr().out.splitlines() if line.strip()]
        assert "secret_split" in events
        assert "secret_recovered" in events

    def test_unknown_level_falls_back_to_info(self) -> None:
        with patch.dict("os.environ", {"LOG_LEVEL": "LOUD"}):
            configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_reconfiguring_keeps_single_handler(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1


class TestLoggedContent:
    def test_recover_rejection_is_logged(self) -> None:
        with capture_logs() as logs:
            _emit_rejection()
        assert any(
            e["event"] == "recover_rejected" and e["reason"] == "wrong_share_count"
            for e in logs
        )

    def test_secret_never_logged(self) -> None:
        params = SchemeParams(threshold=2, total_shares=3, prime=2**127 - 1)
        secret = 424242424242
        with capture_logs() as logs:
            shares = split(params, secret)
            recover(params, shares[:2])
        rendered = repr(logs)
        assert str(secret) not in rendered
        assert all(str(s.y) not in rendered for s in shares)

    def test_config_warning_is_logged(self) -> None:
        from shamir_custody.config import Config

        with capture_logs() as logs:
            Config(prime=101).validate(strict=False)
        assert any(e["event"] == "config_warning" for e in logs)
