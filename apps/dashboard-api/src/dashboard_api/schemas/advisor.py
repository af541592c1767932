from typing import Literal

from pydantic import BaseModel

from dashboard_api.schemas.dispatch import RouteStrategyView


class AdvisorView(BaseModel):
    shipment_id: str
    route_strategy: RouteStrategyView
    explanation: str
    source: Literal["llm", "template"]
