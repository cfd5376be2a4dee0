"""
Unit tests for the runner exception hierarchy and error helpers.
"""

import logging

import pytest

from utils.errors import (
    ConfigurationError,
    LaunchError,
    OutputPathError,
    RunnerError,
    error_context,
    format_exception_chain,
)


class TestHierarchy:

    @pytest.mark.parametrize("cls", [ConfigurationError, LaunchError, OutputPathError])
    def test_subclasses_runner_error(self, cls):
        assert issubclass(cls, RunnerError)

    def test_message_includes_context(self):
        err = LaunchError("Could not start", program="radar-fundamentos", operation="launch")
        text = str(err)
        assert text.startswith("Could not start")
        assert "operation=launch" in text
        assert "radar-fundamentos" in text

    def test_to_dict(self):
        cause = FileNotFoundError("missing")
        err = ConfigurationError("bad key", config_key="intervalo_fim", cause=cause)
        data = err.to_dict()
        assert data["error_type"] == "ConfigurationError"
        assert data["details"] == {"config_key": "intervalo_fim"}
        assert data["cause"] == "missing"


class TestErrorContext:

    def test_wraps_foreign_exceptions(self):
        with pytest.raises(RunnerError) as exc_info:
            with error_context("writing file", task="acao"):
                raise PermissionError("denied")
        assert exc_info.value.operation == "writing file"
        assert exc_info.value.task == "acao"
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_enriches_runner_errors(self):
        with pytest.raises(OutputPathError) as exc_info:
            with error_context("preparing output", path="/tmp/x"):
                raise OutputPathError("nope")
        assert exc_info.value.operation == "preparing output"
        assert exc_info.value.details["path"] == "/tmp/x"

    def test_no_reraise_logs_at_level(self, caplog):
        with caplog.at_level(logging.WARNING, logger="radar_runner"):
            with error_context("optional step", reraise=False, log_level=logging.WARNING):
                raise OSError("disk full")
        assert any(
            r.levelno == logging.WARNING and "Failed while optional step" in r.getMessage()
            for r in caplog.records
        )


def test_format_exception_chain():
    try:
        try:
            raise FileNotFoundError("radar-fundamentos")
        except FileNotFoundError as e:
            raise LaunchError("Could not start", cause=e) from e
    except LaunchError as err:
        text = format_exception_chain(err)

    assert text.startswith("LaunchError: Could not start")
    assert "Caused by: FileNotFoundError: radar-fundamentos" in text
