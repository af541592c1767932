from __future__ import annotations

import logging

from conditions_feed.monitor import ConditionsMonitor
from fleet_registry.registry import FleetRegistry
from route_engine.life_cost import describe_life_cost_formula, score_life_cost
from route_engine.models import RouteStrategy
from route_engine.strategy import classify_route

from dashboard_api.schemas.dispatch import DispatchView, LifeCostView, RouteStrategyView
from dashboard_api.services.conditions_service import conditions_view
from dashboard_api.services.registry_service import RegistryService, fleet_summary_view, shipment_view

logger = logging.getLogger(__name__)


def route_strategy_view(strategy: RouteStrategy) -> RouteStrategyView:
    return RouteStrategyView(
        route_name=strategy.route_name,
        reasoning=strategy.reasoning,
        urgency=strategy.urgency,
    )


def life_cost_view(
    est_arrival_minutes: float,
    weather_impact: float,
    traffic_congestion: float,
    severity: float,
) -> LifeCostView:
    result = score_life_cost(est_arrival_minutes, weather_impact, traffic_congestion, severity)
    return LifeCostView(
        score=round(result.score, 2),
        is_high_risk=result.is_high_risk,
        formula=describe_life_cost_formula(est_arrival_minutes, weather_impact, traffic_congestion, severity),
    )


class DispatchService:
    def __init__(self, monitor: ConditionsMonitor, registry: FleetRegistry) -> None:
        self._monitor = monitor
        self._registry = registry
        self._shipments = RegistryService(registry)

    async def dispatch(self, shipment_id: str | None = None) -> DispatchView:
        shipment = self._shipments.resolve_shipment(shipment_id)
        report = await self._monitor.current()
        snapshot = report.snapshot
        strategy = classify_route(snapshot.weather_impact, snapshot.traffic_congestion, shipment.severity)
        logger.info(
            "dispatch_evaluated",
            extra={
                "shipment_id": shipment.id,
                "route_name": strategy.route_name,
                "urgency": strategy.urgency,
            },
        )
        return DispatchView(
            shipment=shipment_view(shipment),
            conditions=conditions_view(report),
            life_cost=life_cost_view(
                shipment.est_arrival_minutes,
                snapshot.weather_impact,
                snapshot.traffic_congestion,
                shipment.severity,
            ),
            route_strategy=route_strategy_view(strategy),
            fleet=fleet_summary_view(self._registry.summary()),
        )

    async def route_strategy(
        self,
        weather_impact: float,
        traffic_congestion: float,
        severity: float,
    ) -> RouteStrategyView:
        return route_strategy_view(classify_route(weather_impact, traffic_congestion, severity))

    async def life_cost(
        self,
        est_arrival_minutes: float,
        weather_impact: float,
        traffic_congestion: float,
        severity: float,
    ) -> LifeCostView:
        return life_cost_view(est_arrival_minutes, weather_impact, traffic_congestion, severity)
