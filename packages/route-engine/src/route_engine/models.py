from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

Urgency = Literal["critical", "high", "moderate"]
CargoPriority = Literal["critical", "high", "medium"]
LeafPriority = Literal["high", "medium", "low"]
ImpactKind = Literal["time-saving", "delay"]


@dataclass(frozen=True)
class EnvironmentalSnapshot:
    weather_impact: float
    traffic_congestion: float


@dataclass(frozen=True)
class ShipmentContext:
    severity: float
    est_arrival_minutes: int
    cargo_description: str
    priority: CargoPriority
    origin: str
    destination: str
    vehicle_type: str


@dataclass(frozen=True)
class RouteStrategy:
    route_name: str
    reasoning: str
    urgency: Urgency


@dataclass(frozen=True)
class LifeCostResult:
    score: float
    is_high_risk: bool


@dataclass(frozen=True)
class FeatureContribution:
    name: str
    value: float
    kind: ImpactKind
    live_label: str
    cumulative: float

    @property
    def start(self) -> float:
        """Running total before this feature was applied."""
        return self.cumulative - self.value


@dataclass(frozen=True)
class ImpactSummary:
    net_score: float
    verdict: str
    recommendation: str


@dataclass(frozen=True)
class DecisionLeaf:
    outcome: str
    priority: LeafPriority
    is_active_path: bool = False


@dataclass(frozen=True)
class DecisionBranch:
    question: str
    threshold: float
    live_value: str
    condition_met: bool
    is_active_path: bool
    yes: DecisionNode
    no: DecisionNode


DecisionNode = Union[DecisionBranch, DecisionLeaf]
