from __future__ import annotations

from dataclasses import dataclass

from route_engine.models import FeatureContribution, ImpactKind, ImpactSummary

PEAK_WINDOWS: tuple[tuple[int, int], ...] = ((7, 9), (16, 19))


@dataclass(frozen=True)
class ImpactConstants:
    severity_high_threshold: float = 7.0
    severity_high_base: float = 2.0
    severity_high_slope: float = 0.7
    severity_low_base: float = 0.5
    severity_low_slope: float = 0.1
    distance_impact: float = 2.1
    distance_label: str = "4.2 km"
    traffic_weight: float = 5.0
    weather_weight: float = 3.5
    peak_base_delay: float = 0.5
    peak_traffic_weight: float = 1.0
    off_peak_delay: float = 0.2
    capacity_impact: float = 1.2
    capacity_label: str = "25 beds"


DEFAULT_CONSTANTS = ImpactConstants()

_VERDICTS: tuple[tuple[float, str, str], ...] = (
    (2.0, "strong positive", "prioritize fastest route"),
    (0.0, "mild positive", "standard routing recommended"),
    (-2.0, "mild negative", "consider alternate routes"),
)
_FLOOR_VERDICT = ("strong negative", "reroute to avoid delays")


def is_peak_hour(hour: int) -> bool:
    return any(start <= hour <= end for start, end in PEAK_WINDOWS)


def severity_impact(severity: float, constants: ImpactConstants = DEFAULT_CONSTANTS) -> float:
    if severity >= constants.severity_high_threshold:
        return constants.severity_high_base + (severity - constants.severity_high_threshold) * constants.severity_high_slope
    return constants.severity_low_base + severity * constants.severity_low_slope


def time_of_day_impact(
    hour: int,
    traffic_congestion: float,
    constants: ImpactConstants = DEFAULT_CONSTANTS,
) -> float:
    if is_peak_hour(hour):
        return -(constants.peak_base_delay + traffic_congestion * constants.peak_traffic_weight)
    return -constants.off_peak_delay


def estimate_impacts(
    weather_impact: float,
    traffic_congestion: float,
    severity: float,
    current_hour: int,
    constants: ImpactConstants = DEFAULT_CONSTANTS,
) -> list[FeatureContribution]:
    """Decompose the routing inputs into signed per-feature contributions.

    Positive values speed a dispatch up, negative values delay it. The order is
    fixed because each entry carries the running total of the entries before it.
    """
    peak_label = "Peak" if is_peak_hour(current_hour) else "Off-Peak"
    raw: list[tuple[str, float, ImpactKind, str]] = [
        ("Medical Severity", severity_impact(severity, constants), "time-saving", f"{severity:.1f}/10"),
        ("Geospatial Distance", constants.distance_impact, "time-saving", constants.distance_label),
        (
            "Traffic Congestion",
            -(traffic_congestion * constants.traffic_weight),
            "delay",
            f"{traffic_congestion * 100:.0f}%",
        ),
        (
            "Weather Conditions",
            -(weather_impact * constants.weather_weight),
            "delay",
            f"{weather_impact * 100:.0f}% impact",
        ),
        (
            f"Time of Day ({peak_label})",
            time_of_day_impact(current_hour, traffic_congestion, constants),
            "delay",
            f"{current_hour}:00",
        ),
        ("Hospital Capacity", constants.capacity_impact, "time-saving", constants.capacity_label),
    ]

    contributions: list[FeatureContribution] = []
    cumulative = 0.0
    for name, value, kind, label in raw:
        rounded = round(value, 2)
        cumulative += rounded
        contributions.append(
            FeatureContribution(name=name, value=rounded, kind=kind, live_label=label, cumulative=cumulative)
        )
    return contributions


def classify_net_score(net_score: float) -> tuple[str, str]:
    for threshold, verdict, recommendation in _VERDICTS:
        if net_score > threshold:
            return verdict, recommendation
    return _FLOOR_VERDICT


def summarize_impacts(contributions: list[FeatureContribution]) -> ImpactSummary:
    net_score = contributions[-1].cumulative if contributions else 0.0
    verdict, recommendation = classify_net_score(net_score)
    return ImpactSummary(net_score=net_score, verdict=verdict, recommendation=recommendation)
