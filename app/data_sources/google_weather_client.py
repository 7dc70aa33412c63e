"""Client for the Google Weather API daily forecast lookup."""
from __future__ import annotations

from typing import Any, Dict

import requests

from app.config import GOOGLE_WEATHER_DAYS_LOOKUP_URL
from app.exceptions import GoogleWeatherApiError
from utils.logging_utils import get_tagged_logger, mask_secret_url
logger = get_tagged_logger(__name__, tag="google_weather_client")

# Connection pooling only; no caching or retries are layered on top.
session = requests.Session()

FORECAST_DAYS = 1
UNITS_SYSTEM = "IMPERIAL"  # Fahrenheit, mph, inches, miles


def build_forecast_params(api_key: str, latitude: Any, longitude: Any) -> Dict[str, Any]:
    """Query parameters for a one-day imperial forecast at the given point."""
    return {
        "key": api_key,
        "location.latitude": latitude,
        "location.longitude": longitude,
        "days": FORECAST_DAYS,
        "unitsSystem": UNITS_SYSTEM,
    }


def fetch_daily_forecast(
    latitude: Any,
    longitude: Any,
    *,
    api_key: str,
    url: str = GOOGLE_WEATHER_DAYS_LOOKUP_URL,
    timeout: float = 10.0,
) -> Any:
    """
    Fetch today's forecast and return the decoded JSON body.

    Raises GoogleWeatherApiError for non-2xx answers, carrying the provider's
    decoded error body. Transport failures (connection errors, timeouts) and
    undecodable bodies propagate unchanged.
    """
    params = build_forecast_params(api_key, latitude, longitude)
    resp = session.get(url, params=params, timeout=timeout)
    logger.debug("Google Weather request sent", extra={"url": mask_secret_url(getattr(resp, "url", "") or url)})

    if not resp.ok:
        details = resp.json()
        logger.error(
            "Google Weather API error: HTTP %s %s",
            resp.status_code,
            details,
        )
        raise GoogleWeatherApiError(resp.status_code, details)

    return resp.json()
