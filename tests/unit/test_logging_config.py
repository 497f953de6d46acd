from __future__ import annotations

import io
import json
import logging
import sys

import pytest

from src.app.logging_config import JSONFormatter, configure_logging, structured_properties


def _record(msg: str = "Test message", level: int = logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test_logger",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_outputs_valid_json(self) -> None:
        parsed = json.loads(JSONFormatter().format(_record()))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test_logger"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed
        assert "properties" not in parsed

    def test_includes_structured_properties(self) -> None:
        record = _record(forecast={"temperature_c": 12, "summary": "Cool"}, max_temp=44)

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["properties"] == {
            "forecast": {"temperature_c": 12, "summary": "Cool"},
            "max_temp": 44,
        }

    def test_non_json_values_are_stringified(self) -> None:
        from datetime import date

        record = _record(forecast={"date": date(2024, 1, 2)})

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["properties"]["forecast"]["date"] == "2024-01-02"

    def test_includes_exception_traceback(self) -> None:
        try:
            raise ValueError("Test error")
        except ValueError:
            record = _record("Error occurred", logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(JSONFormatter().format(record))

        assert "ValueError: Test error" in parsed["exception"]


class TestStructuredProperties:
    def test_ignores_standard_attributes(self) -> None:
        assert structured_properties(_record()) == {}

    def test_returns_extra_attributes(self) -> None:
        assert structured_properties(_record(count=5)) == {"count": 5}


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_output(self) -> None:
        stream = io.StringIO()
        configure_logging("INFO", "json", stream=stream)

        logging.getLogger("src.app.test").info("Retrieving %d weather forecasts", 5, extra={"forecast_count": 5})

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["message"] == "Retrieving 5 weather forecasts"
        assert parsed["properties"] == {"forecast_count": 5}

    def test_text_output_respects_level(self) -> None:
        stream = io.StringIO()
        configure_logging("warning", "text", stream=stream)

        logger = logging.getLogger("src.app.test")
        logger.info("hidden")
        logger.warning("High temperature detected")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "WARNING [src.app.test] High temperature detected" in output

    def test_unknown_level_defaults_to_debug(self) -> None:
        configure_logging("LOUD", "text", stream=io.StringIO())

        assert logging.getLogger().level == logging.DEBUG

    def test_framework_loggers_are_quieted(self) -> None:
        configure_logging("DEBUG", "text", stream=io.StringIO())

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("uvicorn.access").level == logging.INFO
