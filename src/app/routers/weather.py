# src/app/routers/weather.py
"""
Weather forecast demo routes.
The list route lets faults reach the host; the error route contains its own.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from src.app.deps import get_forecast_service
from src.app.schemas.weather import WeatherForecastResponse
from src.app.services.forecast_service import ForecastService

router = APIRouter(prefix="/weatherforecast", tags=["WeatherForecast"])


@router.get("", response_model=list[WeatherForecastResponse], name="GetWeatherForecast")
def get_weather_forecast(
    service: ForecastService = Depends(get_forecast_service),
) -> list[WeatherForecastResponse]:
    forecasts = service.get_forecasts()
    return [WeatherForecastResponse(**forecast.to_dict()) for forecast in forecasts]


@router.get("/error", response_class=PlainTextResponse)
def simulate_error(
    service: ForecastService = Depends(get_forecast_service),
) -> PlainTextResponse:
    message = service.simulate_error()
    return PlainTextResponse(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
