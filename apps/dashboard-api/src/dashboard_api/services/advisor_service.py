from __future__ import annotations

import asyncio
import logging
import time

from conditions_feed.core.models import ConditionsReport
from conditions_feed.weather_codes import describe_weather
from fleet_registry.models import Shipment
from route_engine.models import RouteStrategy, ShipmentContext
from route_engine.strategy import classify_route

from dashboard_api.cache import AdvisorCache
from dashboard_api.circuit_breaker import CircuitBreaker, CircuitOpenError
from dashboard_api.clients.chat_completion_client import ChatCompletionClient
from dashboard_api.errors import ApiError
from dashboard_api.schemas.advisor import AdvisorView
from dashboard_api.services.dispatch_service import route_strategy_view

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """You are an emergency medical logistics AI advisor specializing in ROAD-BASED routing only. \
You must NEVER suggest helicopters, drones, boats, or any non-road transportation. \
Only recommend alternate ROAD routes (highways, arterials, side streets, etc.).

SHIPMENT DETAILS:
- Medical cargo: {cargo}
- Severity: {severity:g}/10
- Priority: {priority}
- Route: {origin} → {destination}
- Vehicle: Ambulance (road transport)
- ETA: {eta}

LIVE CONDITIONS:
- Weather: {weather_desc} (impact: {weather_pct})
- Traffic congestion: {traffic_pct}

RECOMMENDED STRATEGY: {route_name}
REASONING: {reasoning}

Based on these LIVE conditions, provide a 2-3 sentence explanation for a dispatcher. \
Explain WHY this specific road route was chosen over alternatives, referencing the actual weather and traffic numbers. \
Be concise and professional. Only mention road-based routing options."""


def percent(ratio: float) -> str:
    return f"{ratio * 100:.0f}%"


def describe_weather_condition(weather_impact: float) -> str:
    if weather_impact > 0.6:
        return "adverse weather"
    if weather_impact > 0.3:
        return "moderate weather"
    return "clear conditions"


def describe_traffic_condition(traffic_congestion: float) -> str:
    if traffic_congestion > 0.6:
        return "heavy traffic"
    if traffic_congestion > 0.3:
        return "moderate traffic"
    return "light traffic"


def weather_phrase(report: ConditionsReport) -> str:
    if report.weather.source == "live":
        label = describe_weather(report.weather.weather_code)
        if label != "Unknown":
            return label.lower()
    return describe_weather_condition(report.snapshot.weather_impact)


def template_explanation(
    context: ShipmentContext,
    strategy: RouteStrategy,
    weather_impact: float,
    traffic_congestion: float,
    weather_desc: str,
    eta: str,
) -> str:
    return (
        f"ROUTE: {strategy.route_name}. {strategy.reasoning} "
        f"Current conditions: {weather_desc} ({percent(weather_impact)} impact) and "
        f"{describe_traffic_condition(traffic_congestion)} ({percent(traffic_congestion)} congestion) "
        f"on the {context.origin} → {context.destination} corridor. ETA: {eta}."
    )


def build_prompt(
    context: ShipmentContext,
    strategy: RouteStrategy,
    weather_impact: float,
    traffic_congestion: float,
    weather_desc: str,
    eta: str,
) -> str:
    return PROMPT_TEMPLATE.format(
        cargo=context.cargo_description,
        severity=context.severity,
        priority=context.priority,
        origin=context.origin,
        destination=context.destination,
        eta=eta,
        weather_desc=weather_desc,
        weather_pct=percent(weather_impact),
        traffic_pct=percent(traffic_congestion),
        route_name=strategy.route_name,
        reasoning=strategy.reasoning,
    )


class AdvisorService:
    """Dispatcher-facing explanation of the recommended road route.

    Uses the chat model when one is configured and healthy; every other path
    produces the deterministic template text, so the endpoint always answers.
    """

    def __init__(
        self,
        cache: AdvisorCache,
        circuit_breaker: CircuitBreaker,
        client: ChatCompletionClient | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._cache = cache
        self._circuit_breaker = circuit_breaker
        self._client = client
        self._timeout_seconds = timeout_seconds

    @property
    def llm_enabled(self) -> bool:
        return self._client is not None

    async def explain(self, shipment: Shipment, report: ConditionsReport) -> AdvisorView:
        snapshot = report.snapshot
        cache_key = AdvisorCache.key_for(shipment.id, snapshot.weather_impact, snapshot.traffic_congestion)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return AdvisorView.model_validate(cached)

        context = shipment.to_context()
        strategy = classify_route(snapshot.weather_impact, snapshot.traffic_congestion, context.severity)
        args = (
            context,
            strategy,
            snapshot.weather_impact,
            snapshot.traffic_congestion,
            weather_phrase(report),
            shipment.est_arrival,
        )
        explanation = await self._ask_model(shipment.id, build_prompt(*args))
        source = "llm"
        if explanation is None:
            explanation = template_explanation(*args)
            source = "template"

        view = AdvisorView(
            shipment_id=shipment.id,
            route_strategy=route_strategy_view(strategy),
            explanation=explanation,
            source=source,
        )
        await self._cache.set(cache_key, view.model_dump())
        return view

    async def _ask_model(self, shipment_id: str, prompt: str) -> str | None:
        if self._client is None:
            return None
        client = self._client
        try:
            return await asyncio.wait_for(
                self._circuit_breaker.call(lambda: client.complete(prompt), now_seconds=time.time()),
                timeout=self._timeout_seconds,
            )
        except (ApiError, CircuitOpenError, TimeoutError) as exc:
            logger.warning(
                "advisor_llm_failed",
                extra={"shipment_id": shipment_id, "error": type(exc).__name__},
            )
            return None
