"""Typed view of the Google Weather `forecast/days:lookup` response.

Every field at every depth is optional: the provider omits whatever it has no
data for, and the normalizer decides the fallback. Unknown fields are ignored
so that additions on the provider side never break parsing, and a field whose
value has an unexpected shape is read as missing rather than failing the
whole payload.
"""

from typing import Annotated, Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, ValidatorFunctionWrapHandler, WrapValidator
from pydantic.alias_generators import to_camel

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="app/provider_models")


def _none_on_error(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError as exc:
        logger.debug("Discarding unreadable provider field: %s", exc.errors(include_url=False))
        return None


def lenient(tp: Any) -> Any:
    """Optional `tp` that validates to None when the provider sends something else."""
    return Annotated[Optional[tp], WrapValidator(_none_on_error)]


class _ProviderModel(BaseModel):
    """Base model mapping snake_case attributes onto the provider's camelCase keys."""

    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class Measurement(_ProviderModel):
    """A `{value: ...}` wrapper, used for temperatures, speeds and lengths."""
    value: lenient(float) = None


class ConditionDescription(_ProviderModel):
    text: lenient(str) = None


class WeatherCondition(_ProviderModel):
    description: lenient(ConditionDescription) = None
    text: lenient(str) = None
    code: lenient(Union[int, str]) = None

    def display_text(self) -> Optional[str]:
        """Description text wins over the bare `text` field."""
        if self.description and self.description.text:
            return self.description.text
        return self.text or None


class Wind(_ProviderModel):
    speed: lenient(Measurement) = None
    direction: lenient(Union[str, dict]) = None
    gust: lenient(Measurement) = None


class Precipitation(_ProviderModel):
    probability: lenient(float) = None  # fraction, 0..1
    amount: lenient(Measurement) = None
    type: lenient(str) = None


class ForecastRecord(_ProviderModel):
    """Shared shape of `currentConditions`, `daytimeForecast` and `overnightForecast`."""
    weather_condition: lenient(WeatherCondition) = None
    temperature: lenient(Measurement) = None
    apparent_temperature: lenient(Measurement) = None
    max_temperature: lenient(Measurement) = None
    min_temperature: lenient(Measurement) = None
    wind: lenient(Wind) = None
    precipitation: lenient(Precipitation) = None
    snow_accumulation: lenient(Measurement) = None
    visibility: lenient(Measurement) = None
    relative_humidity: lenient(float) = None
    uv_index: lenient(Union[int, float]) = None
    air_quality_index: lenient(Union[int, float]) = None


class ForecastDay(_ProviderModel):
    current_conditions: lenient(ForecastRecord) = None
    daytime_forecast: lenient(ForecastRecord) = None
    overnight_forecast: lenient(ForecastRecord) = None
    sunrise: lenient(str) = None
    sunset: lenient(str) = None


class WeatherAlert(_ProviderModel):
    headline: lenient(str) = None
    event: lenient(str) = None

    def label(self) -> Optional[str]:
        return self.headline or self.event


class ProviderForecast(_ProviderModel):
    """Top-level forecast payload; a non-list `forecastDays` is still malformed."""
    forecast_days: Optional[List[ForecastDay]] = None
    alerts: lenient(List[WeatherAlert]) = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ProviderForecast":
        """Validate a decoded JSON body; a JSON `null` counts as an empty forecast."""
        return cls.model_validate(payload or {})
