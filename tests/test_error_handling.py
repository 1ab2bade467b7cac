"""Tests for error recording and logging configuration."""

import io
import json
import logging
import sys

import pytest

from dataprivacy.core.validation import NotFoundError, ValidationError
from dataprivacy.utils.error_handler import ErrorCategory, ErrorSeverity, ExportErrorHandler
from dataprivacy.utils.logging_config import DataPrivacyFormatter, LoggingConfig, setup_logging


class TestExportErrorHandler:
    """Test the batch export error handler."""

    @pytest.fixture
    def error_handler(self):
        return ExportErrorHandler()

    def test_initial_state(self, error_handler):
        assert error_handler.error_records == []
        assert not error_handler.has_errors

    def test_recoverable_errors(self, error_handler):
        assert error_handler.is_recoverable(NotFoundError("user", 1))
        assert error_handler.is_recoverable(ValidationError("bad"))
        assert not error_handler.is_recoverable(RuntimeError("boom"))

    def test_not_found_record(self, error_handler):
        record = error_handler.handle_export_error(NotFoundError("user", 7), request_id=3)

        assert record.category == ErrorCategory.NOT_FOUND_ERROR
        assert record.severity == ErrorSeverity.MEDIUM
        assert record.context.user_id == 7
        assert record.context.request_id == 3
        assert record.exception_type == "NotFoundError"

    def test_validation_record(self, error_handler):
        record = error_handler.handle_export_error(ValidationError("bad status", field="status"), 4)

        assert record.category == ErrorCategory.VALIDATION_ERROR
        assert record.severity == ErrorSeverity.LOW
        assert "bad status" in record.message

    def test_unrecoverable_error_is_refused(self, error_handler):
        with pytest.raises(TypeError, match="RuntimeError"):
            error_handler.handle_export_error(RuntimeError("boom"), 5)

        assert not error_handler.has_errors

    def test_error_summary(self, error_handler):
        error_handler.handle_export_error(NotFoundError("user", 1), 10)
        error_handler.handle_export_error(NotFoundError("user", 2), 11)
        error_handler.handle_export_error(ValidationError("bad"), 12)

        summary = error_handler.get_error_summary()

        assert summary["total_errors"] == 3
        assert summary["errors_by_category"] == {"not_found_error": 2, "validation_error": 1}
        assert summary["failed_request_ids"] == [10, 11, 12]
        assert summary["recent_errors"][0]["request_id"] == 10

    def test_record_limit(self):
        error_handler = ExportErrorHandler(max_records=10)

        for request_id in range(11):
            error_handler.handle_export_error(ValidationError("bad"), request_id)

        assert len(error_handler.error_records) == 5
        assert error_handler.error_records[-1].context.request_id == 10

    def test_clear(self, error_handler):
        error_handler.handle_export_error(ValidationError("bad"), 1)
        error_handler.clear()

        assert not error_handler.has_errors


class TestLoggingConfig:
    """Test logging configuration."""

    def test_structured_output(self):
        stream = io.StringIO()
        LoggingConfig(log_level="DEBUG", stream=stream)

        logging.getLogger("dataprivacy.exporters").info(
            "Exported request", extra={"request_id": 5, "user_id": 1}
        )

        entry = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert entry["message"] == "Exported request"
        assert entry["level"] == "INFO"
        assert entry["request_id"] == 5
        assert entry["user_id"] == 1

    def test_plain_output(self):
        stream = io.StringIO()
        LoggingConfig(stream=stream, structured_logging=False)

        logging.getLogger("dataprivacy.cli").warning("plain message")

        assert " - WARNING - plain message" in stream.getvalue()

    def test_level_filters_debug(self):
        stream = io.StringIO()
        LoggingConfig(log_level="WARNING", stream=stream)

        logging.getLogger("dataprivacy.cli").info("hidden")

        assert stream.getvalue() == ""

    def test_file_logging(self, tmp_path):
        LoggingConfig(log_dir=str(tmp_path), enable_console=False, enable_file=True)

        logging.getLogger("dataprivacy.cli").error("written to disk")
        logging.getLogger("dataprivacy.cli").info("routine")
        for handler in logging.getLogger("dataprivacy").handlers:
            handler.flush()

        assert "routine" in (tmp_path / "dataprivacy.log").read_text()
        errors = (tmp_path / "errors.log").read_text()
        assert "written to disk" in errors
        assert "routine" not in errors

    def test_setup_logging_replaces_handlers(self):
        first, second = io.StringIO(), io.StringIO()
        setup_logging({"stream": first})
        config = setup_logging({"log_level": "ERROR", "stream": second})

        logging.getLogger("dataprivacy.cli").error("only once")

        assert config.log_level == logging.ERROR
        assert len(logging.getLogger("dataprivacy").handlers) == 1
        assert first.getvalue() == ""
        assert "only once" in second.getvalue()

    def test_formatter_includes_exception(self):
        formatter = DataPrivacyFormatter()
        try:
            raise ValueError("broken")
        except ValueError:
            record = logging.LogRecord("dataprivacy", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        entry = json.loads(formatter.format(record))

        assert "ValueError: broken" in entry["exception"]
