from __future__ import annotations

import logging
import random
import pytest
from datetime import date, timedelta
from typing import Sequence

from src.app.domain.errors import InvalidOperationError
from src.app.domain.models import SUMMARIES
from src.app.services.forecast_service import (
    SIMULATED_ERROR_MESSAGE,
    SIMULATED_ERROR_RESPONSE,
    ForecastService,
)

LOGGER_NAME = "src.app.services.forecast_service"
TODAY = date(2024, 1, 30)


class RandomStub:
    def __init__(self, temperatures: Sequence[int], summary_index: int = 0) -> None:
        self._temperatures = list(temperatures)
        self.summary_index = summary_index
        self.randint_calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        return self._temperatures.pop(0)

    def choice(self, seq: Sequence[str]) -> str:
        return seq[self.summary_index]


class FailingRandomStub:
    def randint(self, a: int, b: int) -> int:
        raise RuntimeError("entropy exhausted")

    def choice(self, seq: Sequence[str]) -> str:
        return seq[0]


def _service(rng) -> ForecastService:
    return ForecastService(rng=rng, today=lambda: TODAY)


def _records(caplog: pytest.LogCaptureFixture, level: int) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == LOGGER_NAME and r.levelno == level]


class TestGetForecasts:
    def test_returns_five_forecasts_by_default(self) -> None:
        forecasts = _service(RandomStub([10, 20, 30, 0, -5])).get_forecasts()

        assert len(forecasts) == 5
        assert [f.temperature_c for f in forecasts] == [10, 20, 30, 0, -5]

    def test_dates_start_tomorrow_and_ascend(self) -> None:
        forecasts = _service(RandomStub([1, 2, 3, 4, 5])).get_forecasts()

        assert [f.date for f in forecasts] == [TODAY + timedelta(days=i) for i in range(1, 6)]

    def test_temperature_range_passed_to_rng(self) -> None:
        rng = RandomStub([1, 2, 3])

        _service(rng).get_forecasts(count=3)

        assert rng.randint_calls == [(-20, 54)] * 3

    def test_summary_comes_from_vocabulary(self) -> None:
        forecasts = _service(RandomStub([5] * 5, summary_index=9)).get_forecasts()

        assert {f.summary for f in forecasts} == {"Scorching"}

    @pytest.mark.parametrize("seed", range(25))
    def test_random_forecasts_respect_bounds(self, seed: int) -> None:
        today = date.today()
        service = ForecastService(rng=random.Random(seed))

        forecasts = service.get_forecasts(5)

        assert len(forecasts) == 5
        assert len({f.date for f in forecasts}) == 5
        for forecast in forecasts:
            assert forecast.date > today
            assert -20 <= forecast.temperature_c <= 54
            assert forecast.summary in SUMMARIES

    def test_custom_count(self) -> None:
        forecasts = _service(RandomStub([0] * 7)).get_forecasts(count=7)

        assert len(forecasts) == 7


class TestGetForecastsLogging:
    def test_emits_debug_and_info_events(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)

        _service(RandomStub([10, 11, 12, 13, 14])).get_forecasts()

        debug = _records(caplog, logging.DEBUG)
        info = _records(caplog, logging.INFO)
        assert len(debug) == 1
        assert debug[0].getMessage().startswith("Weather forecast request received at")

        assert info[0].getMessage() == "Retrieving 5 weather forecasts"
        assert info[0].forecast_count == 5

        generated = [r for r in info if r.getMessage().startswith("Generated forecast:")]
        assert len(generated) == 5
        assert generated[0].forecast == {
            "date": (TODAY + timedelta(days=1)).isoformat(),
            "temperatureC": 10,
            "temperatureF": 50,
            "summary": "Freezing",
        }

        assert info[-1].getMessage() == "Successfully retrieved 5 weather forecasts"
        assert info[-1].count == 5

    def test_no_warning_at_or_below_threshold(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)

        _service(RandomStub([40, 40, -20, 0, 39])).get_forecasts()

        assert _records(caplog, logging.WARNING) == []

    def test_single_warning_with_max_temperature(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)

        _service(RandomStub([41, 54, 10, 45, 0])).get_forecasts()

        warnings = _records(caplog, logging.WARNING)
        assert len(warnings) == 1
        assert warnings[0].max_temp == 54
        assert "54" in warnings[0].getMessage()

    def test_failure_is_logged_and_reraised(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)

        with pytest.raises(RuntimeError, match="entropy exhausted"):
            _service(FailingRandomStub()).get_forecasts()

        errors = _records(caplog, logging.ERROR)
        assert len(errors) == 1
        assert errors[0].getMessage() == "Error occurred while retrieving weather forecasts"
        assert errors[0].exc_info is not None
        assert isinstance(errors[0].exc_info[1], RuntimeError)


class TestSimulateError:
    def test_returns_fixed_message(self) -> None:
        assert ForecastService().simulate_error() == SIMULATED_ERROR_RESPONSE

    def test_logs_the_contained_fault(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)

        ForecastService().simulate_error()

        info = _records(caplog, logging.INFO)
        errors = _records(caplog, logging.ERROR)
        assert info[0].getMessage() == "Simulating an error for testing"
        assert len(errors) == 1
        assert errors[0].getMessage() == f"Caught simulated exception: {SIMULATED_ERROR_MESSAGE}"
        assert isinstance(errors[0].exc_info[1], InvalidOperationError)
        assert errors[0].error_message == SIMULATED_ERROR_MESSAGE
