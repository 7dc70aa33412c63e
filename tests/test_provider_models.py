from app.provider_models import ProviderForecast, WeatherAlert, WeatherCondition


def test_empty_and_null_payloads_parse():
    assert ProviderForecast.from_payload({}).forecast_days is None
    assert ProviderForecast.from_payload(None).alerts is None


def test_camel_case_keys_and_unknown_fields():
    forecast = ProviderForecast.from_payload(
        {
            "forecastDays": [
                {
                    "currentConditions": {"relativeHumidity": 0.4, "uvIndex": 3, "somethingNew": True},
                    "daytimeForecast": {"maxTemperature": {"value": 80, "unit": "FAHRENHEIT"}},
                    "sunrise": "2024-06-01T09:25:00Z",
                }
            ],
            "timeZone": {"id": "America/New_York"},
        }
    )
    day = forecast.forecast_days[0]
    assert day.current_conditions.relative_humidity == 0.4
    assert day.current_conditions.uv_index == 3
    assert day.daytime_forecast.max_temperature.value == 80
    assert day.overnight_forecast is None
    assert day.sunrise == "2024-06-01T09:25:00Z"


def test_condition_text_preference():
    assert WeatherCondition.model_validate({"description": {"text": "Rain"}, "text": "R"}).display_text() == "Rain"
    assert WeatherCondition.model_validate({"description": {}, "text": "Fog"}).display_text() == "Fog"
    assert WeatherCondition().display_text() is None


def test_alert_label_prefers_headline():
    assert WeatherAlert(headline="Heat Advisory", event="Heat").label() == "Heat Advisory"
    assert WeatherAlert(event="Heat").label() == "Heat"


def test_mistyped_leaf_reads_as_missing():
    forecast = ProviderForecast.from_payload(
        {
            "forecastDays": [
                {
                    "currentConditions": {
                        "temperature": {"value": "warm"},
                        "wind": "breezy",
                        "relativeHumidity": 0.5,
                    },
                    "daytimeForecast": {"precipitation": {"probability": {"percent": 40}, "type": "rain"}},
                }
            ],
            "alerts": "none",
        }
    )
    day = forecast.forecast_days[0]
    assert day.current_conditions.temperature.value is None
    assert day.current_conditions.wind is None
    assert day.current_conditions.relative_humidity == 0.5
    assert day.daytime_forecast.precipitation.probability is None
    assert day.daytime_forecast.precipitation.type == "rain"
    assert forecast.alerts is None
