"""Upstream weather data sources."""

from .google_weather_client import build_forecast_params, fetch_daily_forecast

__all__ = [
    "build_forecast_params",
    "fetch_daily_forecast",
]
