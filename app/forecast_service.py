"""Flatten a Google Weather forecast day into voice-friendly current conditions."""
from __future__ import annotations

import datetime as dt
import math
from dataclasses import asdict, dataclass
from typing import Any, List, Optional, Union
from zoneinfo import ZoneInfo

from app.provider_models import (
    ForecastDay,
    ForecastRecord,
    Measurement,
    Precipitation,
    WeatherAlert,
    WeatherCondition,
    Wind,
)
from app.speakable_summary import SummaryInputs, build_speakable_summary
from utils.logging_utils import get_tagged_logger
from utils.time_utils import format_local_time, parse_timestamp
logger = get_tagged_logger(__name__, tag="app/forecast_service")

DAY = "day"
NIGHT = "night"

DEFAULT_CONDITION = "Unknown"
DEFAULT_CONDITION_CODE = 0
DEFAULT_WIND_DIRECTION = "Variable"
DEFAULT_VISIBILITY_MILES = 10
ADVISORY_SEPARATOR = "; "


@dataclass
class NormalizedConditions:
    """Flat current-day conditions, already rounded for display and speech."""
    condition: str
    condition_code: Union[int, str]
    temperature: Optional[int]
    feels_like: Optional[int]
    high: Optional[int]
    low: Optional[int]
    daypart: str
    sunrise_local: Optional[str]
    sunset_local: Optional[str]
    wind_mph: int
    wind_direction: Any
    wind_gust_mph: Optional[int]
    precip_prob_pct: int
    precip_type: Optional[str]
    precip_amount_in: float
    snow_accum_in: float
    visibility_miles: int
    humidity_pct: Optional[int]
    uv_index: Union[int, float]
    air_quality_index: Optional[Union[int, float]]
    advisory: Optional[str]
    speakable_summary: str

    def to_dict(self) -> dict:
        return asdict(self)


def round_half_up(value: float, ndigits: int = 0) -> Union[int, float]:
    """Round halves toward +infinity (2.5 -> 3, -2.5 -> -2); ints for ndigits=0."""
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def _round_opt(value: Optional[float]) -> Optional[int]:
    return None if value is None else round_half_up(value)


def _measure(m: Optional[Measurement]) -> Optional[float]:
    return m.value if m is not None else None


def _first(*values):
    """First value that is not None."""
    for v in values:
        if v is not None:
            return v
    return None


def resolve_daypart(sunrise: Optional[dt.datetime], sunset: Optional[dt.datetime], now: dt.datetime) -> str:
    """'day' when sunrise <= now < sunset; 'night' otherwise; 'day' if either bound is missing."""
    if sunrise is None or sunset is None:
        return DAY
    return DAY if sunrise <= now < sunset else NIGHT


def build_advisory(alerts: Optional[List[WeatherAlert]]) -> Optional[str]:
    """Join alert headlines (or event names) into one advisory string."""
    if not alerts:
        return None
    return ADVISORY_SEPARATOR.join(alert.label() or "" for alert in alerts)


def normalize_forecast_day(
    day: ForecastDay,
    *,
    alerts: Optional[List[WeatherAlert]] = None,
    now: Optional[dt.datetime] = None,
    tz: Optional[ZoneInfo] = None,
) -> NormalizedConditions:
    """
    Reduce one provider forecast day to NormalizedConditions.

    Each attribute is taken from `currentConditions` first, then from the
    forecast half that matches the daypart (daytime or overnight), then from a
    fixed default. Only missing values fall through; zero is a real reading.
    """
    now = now or dt.datetime.now(dt.timezone.utc)
    current = day.current_conditions or ForecastRecord()
    daytime = day.daytime_forecast or ForecastRecord()
    overnight = day.overnight_forecast or ForecastRecord()

    sunrise = parse_timestamp(day.sunrise)
    sunset = parse_timestamp(day.sunset)
    daypart = resolve_daypart(sunrise, sunset, now)
    active = daytime if daypart == DAY else overnight

    condition_obj = current.weather_condition or active.weather_condition or WeatherCondition()
    condition = condition_obj.display_text() or DEFAULT_CONDITION
    condition_code = _first(condition_obj.code, DEFAULT_CONDITION_CODE)

    temperature = _first(_measure(current.temperature), _measure(active.temperature))
    feels_like = _first(_measure(current.apparent_temperature), _measure(active.apparent_temperature))
    high = _measure(daytime.max_temperature)
    low = _measure(overnight.min_temperature)

    wind = current.wind or active.wind or Wind()
    wind_speed = _first(_measure(wind.speed), 0)
    wind_direction = _first(wind.direction, DEFAULT_WIND_DIRECTION)
    wind_gust = _measure(wind.gust)

    precip = active.precipitation or Precipitation()
    precip_prob = _first(precip.probability, 0)
    precip_amount = _first(_measure(precip.amount), 0)
    precip_type = precip.type

    snow_accum = _first(_measure(active.snow_accumulation), 0)
    visibility = _first(_measure(current.visibility), _measure(active.visibility), DEFAULT_VISIBILITY_MILES)
    humidity = _first(current.relative_humidity, active.relative_humidity)
    uv_index = _first(daytime.uv_index, 0)
    air_quality = current.air_quality_index

    advisory = build_advisory(alerts)

    rounded_temperature = _round_opt(temperature)
    rounded_feels_like = _round_opt(feels_like)
    wind_mph = round_half_up(wind_speed)
    precip_prob_pct = round_half_up(precip_prob * 100)
    snow_accum_in = round_half_up(snow_accum, 1)

    summary = build_speakable_summary(
        SummaryInputs(
            condition=condition,
            daypart=daypart,
            temperature=rounded_temperature,
            feels_like=rounded_feels_like,
            precip_prob_pct=precip_prob_pct,
            precip_type=precip_type,
            snow_accum_in=snow_accum_in,
            wind_mph=wind_mph,
            advisory=advisory,
        )
    )

    logger.debug(
        "Normalized forecast day",
        extra={"daypart": daypart, "condition": condition, "has_current": day.current_conditions is not None},
    )

    return NormalizedConditions(
        condition=condition,
        condition_code=condition_code,
        temperature=rounded_temperature,
        feels_like=rounded_feels_like,
        high=_round_opt(high),
        low=_round_opt(low),
        daypart=daypart,
        sunrise_local=format_local_time(sunrise, tz) if sunrise else None,
        sunset_local=format_local_time(sunset, tz) if sunset else None,
        wind_mph=wind_mph,
        wind_direction=wind_direction,
        wind_gust_mph=_round_opt(wind_gust),
        precip_prob_pct=precip_prob_pct,
        precip_type=precip_type,
        precip_amount_in=round_half_up(precip_amount, 2),
        snow_accum_in=snow_accum_in,
        visibility_miles=round_half_up(visibility),
        humidity_pct=_round_opt(humidity * 100) if humidity is not None else None,
        uv_index=uv_index,
        air_quality_index=air_quality,
        advisory=advisory,
        speakable_summary=summary,
    )
