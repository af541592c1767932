from __future__ import annotations

from route_engine.models import LifeCostResult

HIGH_RISK_THRESHOLD = 15.0


def calculate_life_cost(
    est_arrival_minutes: float,
    weather_impact: float,
    traffic_congestion: float,
    severity: float,
) -> float:
    return est_arrival_minutes * weather_impact * (1 + traffic_congestion) + severity


def score_life_cost(
    est_arrival_minutes: float,
    weather_impact: float,
    traffic_congestion: float,
    severity: float,
) -> LifeCostResult:
    score = calculate_life_cost(est_arrival_minutes, weather_impact, traffic_congestion, severity)
    return LifeCostResult(score=score, is_high_risk=score > HIGH_RISK_THRESHOLD)


def describe_life_cost_formula(
    est_arrival_minutes: float,
    weather_impact: float,
    traffic_congestion: float,
    severity: float,
) -> str:
    """Render the formula with live values substituted, as shown on the dispatch card."""
    return (
        f"LC = ({est_arrival_minutes:g} × {weather_impact:.1f} × (1 + {traffic_congestion:.2f}))"
        f" + {severity:g}"
    )
