from app.speakable_summary import (
    SUMMARY_RULES,
    SummaryInputs,
    SummaryRule,
    build_speakable_summary,
    headline,
    summary_clauses,
)


def _inputs(**overrides) -> SummaryInputs:
    base = dict(condition="Sunny", daypart="day")
    base.update(overrides)
    return SummaryInputs(**base)


def test_condition_only_gets_trailing_period():
    assert build_speakable_summary(_inputs()) == "Sunny."


def test_night_rewrites_sunny_and_clear():
    assert headline(_inputs(condition="Sunny", daypart="night")) == "Clear night"
    assert headline(_inputs(condition="Mostly clear", daypart="night")) == "Clear night"
    assert headline(_inputs(condition="Partly Cloudy", daypart="night")) == "Partly cloudy night"
    assert headline(_inputs(condition="Light rain", daypart="night")) == "Light rain"


def test_day_keeps_condition_text():
    assert headline(_inputs(condition="Sunny", daypart="day")) == "Sunny"


def test_feels_like_only_mentioned_past_five_degrees():
    wide = summary_clauses(_inputs(temperature=72, feels_like=78))
    narrow = summary_clauses(_inputs(temperature=72, feels_like=75))
    exactly_five = summary_clauses(_inputs(temperature=72, feels_like=77))
    assert wide[1] == "72 degrees, feels like 78"
    assert narrow[1] == "72 degrees"
    assert exactly_five[1] == "72 degrees"


def test_zero_degrees_is_still_spoken():
    assert summary_clauses(_inputs(temperature=0))[1] == "0 degrees"


def test_precipitation_clause_selection():
    snow_accum = summary_clauses(_inputs(precip_prob_pct=45, snow_accum_in=0.8))
    rain = summary_clauses(_inputs(precip_prob_pct=45, precip_type="rain", snow_accum_in=0))
    snow = summary_clauses(_inputs(precip_prob_pct=45, precip_type="snow"))
    other = summary_clauses(_inputs(precip_prob_pct=45, precip_type="sleet"))
    assert snow_accum[-1] == "45% chance of snow, expecting 0.8 inches"
    assert rain[-1] == "45% chance of rain"
    assert snow[-1] == "45% chance of snow"
    assert other[-1] == "45% chance of precipitation"


def test_low_precipitation_is_not_mentioned():
    assert summary_clauses(_inputs(precip_prob_pct=20, precip_type="rain")) == ["Sunny"]
    assert summary_clauses(_inputs(precip_prob_pct=30, precip_type="rain")) == ["Sunny"]


def test_whole_inch_snow_reads_without_decimal():
    clauses = summary_clauses(_inputs(precip_prob_pct=80, snow_accum_in=2.0))
    assert clauses[-1] == "80% chance of snow, expecting 2 inches"


def test_full_sentence_order():
    text = build_speakable_summary(
        _inputs(
            condition="Snow showers",
            daypart="night",
            temperature=28,
            feels_like=18,
            precip_prob_pct=70,
            snow_accum_in=1.5,
            wind_mph=22,
            advisory="Winter Storm Warning",
        )
    )
    assert text == (
        "Snow showers. 28 degrees, feels like 18. 70% chance of snow, expecting 1.5 inches. "
        "Winds 22 mph. Advisory: Winter Storm Warning."
    )


def test_summary_is_deterministic():
    data = _inputs(temperature=61, precip_prob_pct=55, precip_type="rain", wind_mph=16)
    assert {build_speakable_summary(data) for _ in range(5)} == {"Sunny. 61 degrees. 55% chance of rain. Winds 16 mph."}


def test_rules_are_evaluated_in_given_order():
    names = [rule.name for rule in SUMMARY_RULES]
    assert names == ["headline", "temperature", "precipitation", "wind", "advisory"]

    custom = [
        SummaryRule("wind", lambda d: True, lambda d: "windy"),
        SummaryRule("headline", lambda d: True, lambda d: d.condition),
    ]
    assert build_speakable_summary(_inputs(), rules=custom) == "windy. Sunny."
