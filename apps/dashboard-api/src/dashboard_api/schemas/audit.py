from typing import Any

from pydantic import BaseModel


class AuditInputs(BaseModel):
    severity: float
    weather_impact: float
    traffic_congestion: float
    hour: int


class ContributionView(BaseModel):
    name: str
    value: float
    kind: str
    live_label: str
    start: float
    cumulative: float


class ImpactSummaryView(BaseModel):
    net_score: float
    verdict: str
    recommendation: str


class AuditView(BaseModel):
    inputs: AuditInputs
    contributions: list[ContributionView]
    summary: ImpactSummaryView
    decision_tree: dict[str, Any]
    active_path: list[str]
    recommended_route: str
