"""Unit tests for structured logging."""

import json
import logging
from unittest.mock import MagicMock

import pytest

from stlview.core.config import LoggingConfig
from stlview.utils.logging import (
    LOG_FILE_NAME,
    StructuredLogger,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Close the handlers a test installed and restore the default level."""
    yield
    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.WARNING)


def _flush() -> None:
    for handler in logging.getLogger().handlers:
        handler.flush()


class TestSetupLogging:
    """Test handler and renderer wiring."""

    def test_json_events_on_stderr(self, capsys):
        setup_logging(LoggingConfig(format="json"))

        get_logger("stlview.tests").info("mesh_loaded", triangles=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip().splitlines()[-1])
        assert event["event"] == "mesh_loaded"
        assert event["triangles"] == 3
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_stdlib_records_share_the_format(self, capsys):
        setup_logging(LoggingConfig(format="json"))

        logging.getLogger("stlview.tests").warning("from stdlib")

        event = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert event["event"] == "from stdlib"
        assert event["level"] == "warning"

    def test_console_format(self, capsys):
        setup_logging(LoggingConfig(format="console", colorize=False))

        get_logger("stlview.tests").warning("reload_failed", path="a.stl")

        err = capsys.readouterr().err
        assert "reload_failed" in err
        assert "path=a.stl" in err

    def test_single_stderr_handler_after_repeat_setup(self):
        setup_logging()
        setup_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_explicit_log_file_gets_json(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(LoggingConfig(format="console", colorize=False), log_file=log_file)

        get_logger("stlview.tests").info("written", size_bytes=84)
        _flush()

        event = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert event["event"] == "written"
        assert event["size_bytes"] == 84

    def test_log_dir_is_created(self, tmp_path):
        log_dir = tmp_path / "logs" / "nested"

        setup_logging(LoggingConfig(log_to_file=True, log_dir=log_dir))

        assert (log_dir / LOG_FILE_NAME).exists()

    def test_log_dir_ignored_unless_enabled(self, tmp_path):
        setup_logging(LoggingConfig(log_dir=tmp_path / "logs"))

        assert not (tmp_path / "logs").exists()

    @pytest.mark.parametrize("level", ["DEBUG", "WARNING", "ERROR"])
    def test_root_level(self, level: str):
        setup_logging(LoggingConfig(level=level))

        assert logging.getLogger().level == getattr(logging, level)

    def test_libraries_capped_at_warning(self):
        setup_logging(LoggingConfig(level="DEBUG"))

        assert logging.getLogger("trimesh").level == logging.WARNING
        assert logging.getLogger("numpy").level == logging.WARNING

    def test_events_below_level_dropped(self, capsys):
        setup_logging(LoggingConfig(level="ERROR", format="json"))

        get_logger("stlview.tests").warning("ignored")

        assert capsys.readouterr().err == ""


class TestStructuredLogger:
    """Test operation start and outcome events."""

    def test_completed_carries_updated_context(self):
        logger = MagicMock()

        with StructuredLogger(logger, "mesh_load", path="a.stl") as op:
            op.update_context(triangles=4)

        started, completed = logger.info.call_args_list
        assert started.args == ("mesh_load_started",)
        assert started.kwargs == {"path": "a.stl"}
        assert completed.args == ("mesh_load_completed",)
        assert completed.kwargs["triangles"] == 4
        assert completed.kwargs["duration_ms"] >= 0
        logger.error.assert_not_called()

    def test_failure_is_logged_and_reraised(self):
        logger = MagicMock()

        with pytest.raises(ValueError):
            with StructuredLogger(logger, "mesh_load", path="a.stl"):
                raise ValueError("bad facet")

        logger.info.assert_called_once_with("mesh_load_started", path="a.stl")
        failed = logger.error.call_args
        assert failed.args == ("mesh_load_failed",)
        assert failed.kwargs["error"] == "bad facet"
        assert failed.kwargs["error_type"] == "ValueError"
        assert failed.kwargs["path"] == "a.stl"

    def test_duration_before_enter_is_zero(self):
        assert StructuredLogger(MagicMock(), "noop").duration_ms == 0.0
