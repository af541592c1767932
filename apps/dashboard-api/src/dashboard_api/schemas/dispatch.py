from pydantic import BaseModel

from dashboard_api.schemas.conditions import ConditionsView
from dashboard_api.schemas.registry import FleetSummaryView, ShipmentView


class RouteStrategyView(BaseModel):
    route_name: str
    reasoning: str
    urgency: str


class LifeCostView(BaseModel):
    score: float
    is_high_risk: bool
    formula: str


class DispatchView(BaseModel):
    shipment: ShipmentView
    conditions: ConditionsView
    life_cost: LifeCostView
    route_strategy: RouteStrategyView
    fleet: FleetSummaryView
