from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class WeatherForecastResponse(BaseModel):
    date: dt.date
    temperatureC: int = Field(..., description="Temperature in Celsius")
    temperatureF: int = Field(..., description="Temperature in Fahrenheit, derived from temperatureC")
    summary: Optional[str] = None
