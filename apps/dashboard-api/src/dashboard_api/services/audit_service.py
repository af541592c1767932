from __future__ import annotations

from collections.abc import Callable
from typing import Any

from conditions_feed.monitor import ConditionsMonitor
from devkit.timezone import current_hour
from route_engine.decision_tree import active_leaf, active_path, build_decision_tree
from route_engine.feature_impact import estimate_impacts, summarize_impacts
from route_engine.models import DecisionBranch, DecisionNode

from dashboard_api.schemas.audit import AuditInputs, AuditView, ContributionView, ImpactSummaryView

DEFAULT_AUDIT_SEVERITY = 8.5


def decision_node_to_dict(node: DecisionNode) -> dict[str, Any]:
    if isinstance(node, DecisionBranch):
        return {
            "type": "branch",
            "question": node.question,
            "threshold": node.threshold,
            "live_value": node.live_value,
            "condition_met": node.condition_met,
            "is_active_path": node.is_active_path,
            "yes": decision_node_to_dict(node.yes),
            "no": decision_node_to_dict(node.no),
        }
    return {
        "type": "leaf",
        "outcome": node.outcome,
        "priority": node.priority,
        "is_active_path": node.is_active_path,
    }


def _path_label(node: DecisionNode) -> str:
    if isinstance(node, DecisionBranch):
        return f"{node.question} {'yes' if node.condition_met else 'no'}"
    return node.outcome


class AuditService:
    """Feature-impact waterfall and decision path for one set of inputs."""

    def __init__(
        self,
        monitor: ConditionsMonitor,
        hour_provider: Callable[[], int] = current_hour,
    ) -> None:
        self._monitor = monitor
        self._hour_provider = hour_provider

    async def audit(
        self,
        severity: float | None = None,
        weather_impact: float | None = None,
        traffic_congestion: float | None = None,
        hour: int | None = None,
    ) -> AuditView:
        if weather_impact is None or traffic_congestion is None:
            snapshot = (await self._monitor.current()).snapshot
            weather_impact = snapshot.weather_impact if weather_impact is None else weather_impact
            traffic_congestion = snapshot.traffic_congestion if traffic_congestion is None else traffic_congestion
        inputs = AuditInputs(
            severity=DEFAULT_AUDIT_SEVERITY if severity is None else severity,
            weather_impact=weather_impact,
            traffic_congestion=traffic_congestion,
            hour=self._hour_provider() if hour is None else hour,
        )

        contributions = estimate_impacts(
            inputs.weather_impact,
            inputs.traffic_congestion,
            inputs.severity,
            inputs.hour,
        )
        summary = summarize_impacts(contributions)
        tree = build_decision_tree(inputs.weather_impact, inputs.traffic_congestion, inputs.severity)
        return AuditView(
            inputs=inputs,
            contributions=[
                ContributionView(
                    name=item.name,
                    value=item.value,
                    kind=item.kind,
                    live_label=item.live_label,
                    start=round(item.start, 2),
                    cumulative=item.cumulative,
                )
                for item in contributions
            ],
            summary=ImpactSummaryView(
                net_score=summary.net_score,
                verdict=summary.verdict,
                recommendation=summary.recommendation,
            ),
            decision_tree=decision_node_to_dict(tree),
            active_path=[_path_label(node) for node in active_path(tree)],
            recommended_route=active_leaf(tree).outcome,
        )
