"""Framework-independent request handling for the voice weather endpoint.

`WeatherHandler.handle` takes an HTTP method and its parameter source (query
mapping for GET, decoded JSON body for POST) and returns a HandlerResult that
any web framework can render. Configuration is injected at construction so
tests never need to touch the process environment.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.config import Settings
from app.data_sources import google_weather_client
from app.exceptions import GoogleWeatherApiError
from app.forecast_service import NormalizedConditions, normalize_forecast_day
from app.provider_models import ProviderForecast
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/weather_handler")

ALLOW_ORIGIN = "*"
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": ALLOW_ORIGIN,
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

ERROR_METHOD_NOT_ALLOWED = "Method not allowed"
ERROR_MISSING_COORDS = "Missing lat or lng"
ERROR_MISSING_COORDS_DETAILS = "Both latitude and longitude are required"
ERROR_NO_API_KEY = "No Weather API key configured"
ERROR_PROVIDER = "GOOGLE_WEATHER_API_ERROR"
ERROR_NO_FORECAST = "NO_FORECAST_DATA"
ERROR_NO_FORECAST_MESSAGE = "No weather data available for this location"
ERROR_FETCH_FAILED = "WEATHER_FETCH_FAILED"


@dataclass
class HandlerResult:
    """Status, JSON body (None means an empty body) and headers for one response."""
    status_code: int
    body: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=lambda: {"Access-Control-Allow-Origin": ALLOW_ORIGIN})


class WeatherQuery(BaseModel):
    """Coordinates and optional label pulled from the query string or JSON body."""
    model_config = ConfigDict(extra="ignore")

    lat: Any = None
    lng: Any = None
    address: Any = None

    @classmethod
    def from_source(cls, source: Any) -> "WeatherQuery":
        if not isinstance(source, Mapping):
            return cls()
        return cls(lat=source.get("lat"), lng=source.get("lng"), address=source.get("address"))

    def has_coordinates(self) -> bool:
        return bool(self.lat) and bool(self.lng)


class WeatherResponse(BaseModel):
    """Successful response body: normalized conditions plus request echo."""
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    address: Any = None
    condition: str
    condition_code: Any
    temperature: Optional[int] = None
    feels_like: Optional[int] = None
    high: Optional[int] = None
    low: Optional[int] = None
    daypart: str
    sunrise_local: Optional[str] = None
    sunset_local: Optional[str] = None
    wind_mph: int
    wind_direction: Any
    wind_gust_mph: Optional[int] = None
    precip_prob_pct: int
    precip_type: Optional[str] = None
    precip_amount_in: float
    snow_accum_in: float
    visibility_miles: int
    humidity_pct: Optional[int] = None
    uv_index: Any
    air_quality_index: Any = None
    advisory: Optional[str] = None
    speakable_summary: str
    raw: Any = Field(default=None, alias="_raw")

    @classmethod
    def build(cls, conditions: NormalizedConditions, *, address: Any, raw: Any = None) -> "WeatherResponse":
        return cls(address=address or None, raw=raw, **conditions.to_dict())

    def to_body(self) -> Dict[str, Any]:
        body = self.model_dump(by_alias=True)
        if body.get("_raw") is None:
            body.pop("_raw", None)
        return body


def _error(status_code: int, error: str, **extra: Any) -> HandlerResult:
    return HandlerResult(status_code=status_code, body={"ok": False, "error": error, **extra})


class WeatherHandler:
    """Gate, fetch, normalize and summarize one weather request."""

    def __init__(
        self,
        settings: Settings,
        *,
        fetch_forecast: Callable[..., Any] = google_weather_client.fetch_daily_forecast,
        clock: Callable[[], dt.datetime] = lambda: dt.datetime.now(dt.timezone.utc),
    ) -> None:
        self.settings = settings
        self._fetch_forecast = fetch_forecast
        self._clock = clock

    def handle(self, method: str, params: Any = None) -> HandlerResult:
        """Answer one request; never raises."""
        method = (method or "").upper()
        if method == "OPTIONS":
            return HandlerResult(status_code=200, body=None, headers=dict(PREFLIGHT_HEADERS))

        try:
            return self._handle(method, params)
        except Exception as exc:
            logger.exception("Weather request failed")
            return _error(500, ERROR_FETCH_FAILED, message=str(exc) or "Unknown error")

    def _handle(self, method: str, params: Any) -> HandlerResult:
        if method not in ("GET", "POST"):
            logger.info("Rejected %s request", method)
            return _error(405, ERROR_METHOD_NOT_ALLOWED)

        query = WeatherQuery.from_source(params)
        if not query.has_coordinates():
            logger.info("Rejected request without coordinates")
            return _error(400, ERROR_MISSING_COORDS, details=ERROR_MISSING_COORDS_DETAILS)

        api_key = self.settings.google_maps_api_key
        if not api_key:
            logger.error("GOOGLE_MAPS_API_KEY is not configured")
            return _error(500, ERROR_NO_API_KEY)

        try:
            payload = self._fetch_forecast(
                query.lat,
                query.lng,
                api_key=api_key,
                url=self.settings.weather_api_url,
                timeout=self.settings.weather_timeout_seconds,
            )
        except GoogleWeatherApiError as exc:
            return _error(exc.status_code, ERROR_PROVIDER, status=exc.status_code, details=exc.details)

        forecast = ProviderForecast.from_payload(payload)
        if not forecast.forecast_days:
            logger.warning("No forecast days returned", extra={"lat": query.lat, "lng": query.lng})
            return HandlerResult(
                status_code=200,
                body={"ok": False, "error": ERROR_NO_FORECAST, "message": ERROR_NO_FORECAST_MESSAGE},
            )

        conditions = normalize_forecast_day(
            forecast.forecast_days[0],
            alerts=forecast.alerts,
            now=self._clock(),
            tz=self.settings.tzinfo,
        )
        response = WeatherResponse.build(
            conditions,
            address=query.address,
            raw=payload if self.settings.is_development else None,
        )
        logger.info("Weather lookup ok", extra={"daypart": conditions.daypart, "condition": conditions.condition})
        return HandlerResult(status_code=200, body=response.to_body())
