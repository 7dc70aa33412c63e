"""Deterministic one-sentence weather summaries for text-to-speech.

The sentence is built from an ordered list of rules. Each rule looks at the
normalized conditions and contributes at most one clause; the rule order is the
clause order. Nothing here does I/O or looks at the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

PRECIP_MENTION_THRESHOLD_PCT = 30
SNOW_MENTION_THRESHOLD_IN = 0.5
WIND_MENTION_THRESHOLD_MPH = 15
FEELS_LIKE_MENTION_DELTA = 5


@dataclass(frozen=True)
class SummaryInputs:
    """The normalized values the summary reads (already rounded)."""
    condition: str
    daypart: str
    temperature: Optional[int] = None
    feels_like: Optional[int] = None
    precip_prob_pct: int = 0
    precip_type: Optional[str] = None
    snow_accum_in: float = 0
    wind_mph: int = 0
    advisory: Optional[str] = None


@dataclass(frozen=True)
class SummaryRule:
    """A named predicate/template pair; `render` runs only when `applies` is true."""
    name: str
    applies: Callable[[SummaryInputs], bool]
    render: Callable[[SummaryInputs], str]


def _num(value: float) -> str:
    """Format numbers the way they are spoken: 1.0 -> "1", 0.8 -> "0.8"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def headline(data: SummaryInputs) -> str:
    """Condition text, reworded for the night when it mentions the sun."""
    condition = data.condition
    if data.daypart != "night":
        return condition
    lowered = condition.lower()
    if "sunny" in lowered or "clear" in lowered:
        return "Clear night"
    if "partly cloudy" in lowered:
        return "Partly cloudy night"
    return condition


def temperature_clause(data: SummaryInputs) -> str:
    text = f"{_num(data.temperature)} degrees"
    if data.feels_like is not None and abs(data.temperature - data.feels_like) > FEELS_LIKE_MENTION_DELTA:
        return f"{text}, feels like {_num(data.feels_like)}"
    return text


def precipitation_clause(data: SummaryInputs) -> str:
    pct = _num(data.precip_prob_pct)
    if data.snow_accum_in > SNOW_MENTION_THRESHOLD_IN:
        return f"{pct}% chance of snow, expecting {_num(data.snow_accum_in)} inches"
    if data.precip_type == "snow":
        return f"{pct}% chance of snow"
    if data.precip_type == "rain":
        return f"{pct}% chance of rain"
    return f"{pct}% chance of precipitation"


SUMMARY_RULES: tuple[SummaryRule, ...] = (
    SummaryRule("headline", lambda d: True, headline),
    SummaryRule("temperature", lambda d: d.temperature is not None, temperature_clause),
    SummaryRule(
        "precipitation",
        lambda d: d.precip_prob_pct > PRECIP_MENTION_THRESHOLD_PCT,
        precipitation_clause,
    ),
    SummaryRule(
        "wind",
        lambda d: d.wind_mph > WIND_MENTION_THRESHOLD_MPH,
        lambda d: f"Winds {_num(d.wind_mph)} mph",
    ),
    SummaryRule("advisory", lambda d: bool(d.advisory), lambda d: f"Advisory: {d.advisory}"),
)


def summary_clauses(data: SummaryInputs, rules: Sequence[SummaryRule] = SUMMARY_RULES) -> list[str]:
    """Evaluate `rules` in order and collect the clauses they produce."""
    return [rule.render(data) for rule in rules if rule.applies(data)]


def build_speakable_summary(data: SummaryInputs, rules: Sequence[SummaryRule] = SUMMARY_RULES) -> str:
    """Join the clauses with ". " and end the sentence with a single period."""
    return ". ".join(summary_clauses(data, rules)) + "."
