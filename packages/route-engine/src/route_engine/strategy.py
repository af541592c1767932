from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from route_engine.models import RouteStrategy

TRAFFIC_HIGH = 0.6
TRAFFIC_MODERATE = 0.3
WEATHER_BAD = 0.6
WEATHER_MODERATE = 0.3
SEVERITY_CRITICAL = 9.0
SEVERITY_HIGH = 7.0


@dataclass(frozen=True)
class RouteConditions:
    high_traffic: bool
    moderate_traffic: bool
    bad_weather: bool
    moderate_weather: bool
    critical: bool
    high_severity: bool


@dataclass(frozen=True)
class RouteRule:
    name: str
    applies: Callable[[RouteConditions], bool]
    strategy: RouteStrategy


def evaluate_conditions(weather_impact: float, traffic_congestion: float, severity: float) -> RouteConditions:
    return RouteConditions(
        high_traffic=traffic_congestion >= TRAFFIC_HIGH,
        moderate_traffic=traffic_congestion >= TRAFFIC_MODERATE,
        bad_weather=weather_impact >= WEATHER_BAD,
        moderate_weather=weather_impact >= WEATHER_MODERATE,
        critical=severity >= SEVERITY_CRITICAL,
        high_severity=severity >= SEVERITY_HIGH,
    )


# Conditions overlap; evaluation order is the priority order.
ROUTE_RULES: tuple[RouteRule, ...] = (
    RouteRule(
        name="critical_gridlock",
        applies=lambda c: c.critical and c.high_traffic,
        strategy=RouteStrategy(
            route_name="Emergency Lane Clear-Path Protocol via arterial roads",
            reasoning=(
                "Gridlock conditions detected. Activating emergency vehicle priority lanes "
                "on primary arterials to bypass congestion."
            ),
            urgency="critical",
        ),
    ),
    RouteRule(
        name="critical_severe_weather",
        applies=lambda c: c.critical and c.bad_weather,
        strategy=RouteStrategy(
            route_name="Sheltered Arterial Route avoiding exposed highways",
            reasoning=(
                "Severe weather detected. Routing through covered/sheltered urban arterials "
                "to maintain safe transport speed."
            ),
            urgency="critical",
        ),
    ),
    RouteRule(
        name="critical_clear",
        applies=lambda c: c.critical,
        strategy=RouteStrategy(
            route_name="Highway Express via I-5 Direct Route",
            reasoning=(
                "Conditions are favorable for fastest highway route. "
                "Using I-5 corridor for maximum speed."
            ),
            urgency="critical",
        ),
    ),
    RouteRule(
        name="high_heavy_traffic",
        applies=lambda c: c.high_severity and c.high_traffic,
        strategy=RouteStrategy(
            route_name="Highway Bypass via I-5 / SR-99 alternate",
            reasoning=(
                "Heavy traffic on primary route. Rerouting to alternate highway corridor "
                "to reduce delivery time."
            ),
            urgency="high",
        ),
    ),
    RouteRule(
        name="high_congested_bad_weather",
        applies=lambda c: c.high_severity and c.moderate_traffic and c.bad_weather,
        strategy=RouteStrategy(
            route_name="Sheltered Alternate via secondary arterials",
            reasoning=(
                "Moderate congestion combined with adverse weather. Using secondary arterial "
                "roads that offer better shelter and less traffic."
            ),
            urgency="high",
        ),
    ),
    RouteRule(
        name="high_manageable",
        applies=lambda c: c.high_severity,
        strategy=RouteStrategy(
            route_name="Primary Road Direct Route",
            reasoning=(
                "Conditions are manageable. Taking the most direct primary road route "
                "for timely delivery."
            ),
            urgency="high",
        ),
    ),
    RouteRule(
        name="heavy_traffic",
        applies=lambda c: c.high_traffic,
        strategy=RouteStrategy(
            route_name="Congestion Avoidance via side streets and arterials",
            reasoning=(
                "High traffic detected on main corridors. Diverting to parallel arterial "
                "roads to maintain reasonable delivery time."
            ),
            urgency="moderate",
        ),
    ),
    RouteRule(
        name="bad_weather",
        applies=lambda c: c.bad_weather,
        strategy=RouteStrategy(
            route_name="Weather-Safe Route via lower-speed urban roads",
            reasoning="Adverse weather conditions warrant reduced-speed urban routing for safe cargo delivery.",
            urgency="moderate",
        ),
    ),
    RouteRule(
        name="moderate_conditions",
        applies=lambda c: c.moderate_traffic or c.moderate_weather,
        strategy=RouteStrategy(
            route_name="Standard Road Route with active monitoring",
            reasoning=(
                "Conditions are moderate. Using standard road route with real-time "
                "monitoring for any changes."
            ),
            urgency="moderate",
        ),
    ),
    RouteRule(
        name="all_clear",
        applies=lambda c: True,
        strategy=RouteStrategy(
            route_name="Direct Standard Route via primary roads",
            reasoning="All conditions clear. Taking the most efficient direct road route.",
            urgency="moderate",
        ),
    ),
)


def match_route_rule(weather_impact: float, traffic_congestion: float, severity: float) -> RouteRule:
    conditions = evaluate_conditions(weather_impact, traffic_congestion, severity)
    for rule in ROUTE_RULES:
        if rule.applies(conditions):
            return rule
    raise AssertionError("route rule table must end with a catch-all rule")


def classify_route(weather_impact: float, traffic_congestion: float, severity: float) -> RouteStrategy:
    return match_route_rule(weather_impact, traffic_congestion, severity).strategy
