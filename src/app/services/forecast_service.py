# src/app/services/forecast_service.py
"""
Weather forecast demo service.
Generates randomized forecasts and shows the logging levels used across the API.
"""
from __future__ import annotations

import logging
import random
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional

from src.app.domain.errors import InvalidOperationError
from src.app.domain.models import SUMMARIES, WeatherForecast

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_COUNT = 5
MIN_TEMPERATURE_C = -20
MAX_TEMPERATURE_C = 54
HIGH_TEMPERATURE_THRESHOLD_C = 40

SIMULATED_ERROR_MESSAGE = "This is a test exception to demonstrate error logging"
SIMULATED_ERROR_RESPONSE = "Error simulation successful! Check the logs for details."


class ForecastService:
    """
    Produces forecasts for the next few days.

    Responsibilities:
    - Generate one forecast per day starting tomorrow
    - Log every generated record as structured data
    - Warn when the forecast contains a high temperature
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self._rng = rng or random.Random()
        self._today = today or date.today

    def get_forecasts(self, count: int = DEFAULT_FORECAST_COUNT) -> list[WeatherForecast]:
        """
        Generate `count` forecasts dated today + 1 .. today + count.

        Raises:
            Exception: Any failure during generation is logged and re-raised unchanged
        """
        logger.debug(
            "Weather forecast request received at %s",
            datetime.now(timezone.utc).isoformat(),
        )

        try:
            logger.info(
                "Retrieving %d weather forecasts",
                count,
                extra={"forecast_count": count},
            )

            start = self._today()
            forecasts = [self._generate_one(start, index) for index in range(1, count + 1)]

            logger.info(
                "Successfully retrieved %d weather forecasts",
                len(forecasts),
                extra={"count": len(forecasts)},
            )

            hot = [f.temperature_c for f in forecasts if f.temperature_c > HIGH_TEMPERATURE_THRESHOLD_C]
            if hot:
                max_temp = max(hot)
                logger.warning(
                    "High temperature detected in forecast: %d°C",
                    max_temp,
                    extra={"max_temp": max_temp},
                )

            return forecasts

        except Exception:
            logger.exception("Error occurred while retrieving weather forecasts")
            raise

    def _generate_one(self, start: date, index: int) -> WeatherForecast:
        forecast = WeatherForecast(
            date=start + timedelta(days=index),
            temperature_c=self._rng.randint(MIN_TEMPERATURE_C, MAX_TEMPERATURE_C),
            summary=self._rng.choice(SUMMARIES),
        )
        logger.info("Generated forecast: %s", forecast, extra={"forecast": forecast.to_dict()})
        return forecast

    def simulate_error(self) -> str:
        """
        Raise and contain a fault so it shows up in the logs.

        Returns:
            The fixed text sent back with the 500 response
        """
        try:
            logger.info("Simulating an error for testing")
            raise InvalidOperationError(SIMULATED_ERROR_MESSAGE)
        except Exception as exc:
            logger.error(
                "Caught simulated exception: %s",
                exc,
                exc_info=True,
                extra={"error_message": str(exc)},
            )
            return SIMULATED_ERROR_RESPONSE
