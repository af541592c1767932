from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Union

from route_engine.models import DecisionBranch, DecisionLeaf, DecisionNode, LeafPriority

Feature = Literal["severity", "traffic", "weather"]

_COMPARATORS: dict[str, Callable[[float, float], bool]] = {
    ">=": operator.ge,
    "<": operator.lt,
}


@dataclass(frozen=True)
class RuleLeaf:
    outcome: str
    priority: LeafPriority


@dataclass(frozen=True)
class RuleBranch:
    question: str
    feature: Feature
    comparator: str
    threshold: float
    yes: RuleTemplate
    no: RuleTemplate


RuleTemplate = Union[RuleBranch, RuleLeaf]


def _severity_gate(yes: RuleTemplate, no: RuleTemplate) -> RuleBranch:
    return RuleBranch("Medical Severity ≥ 7?", "severity", ">=", 7.0, yes, no)


def _light_traffic(yes: RuleTemplate, no: RuleTemplate) -> RuleBranch:
    return RuleBranch("Traffic Congestion < 40%?", "traffic", "<", 0.4, yes, no)


def _mild_weather(yes: RuleTemplate, no: RuleTemplate) -> RuleBranch:
    return RuleBranch("Weather Impact < 50%?", "weather", "<", 0.5, yes, no)


ROUTING_TEMPLATE: RuleTemplate = _severity_gate(
    yes=_light_traffic(
        yes=_mild_weather(
            yes=RuleLeaf("Highway Express — I-5 Direct Route", "high"),
            no=RuleLeaf("Sheltered Arterial Route", "high"),
        ),
        no=RuleBranch(
            "Traffic Congestion ≥ 70%?",
            "traffic",
            ">=",
            0.7,
            yes=RuleLeaf("Emergency Lane Clear-Path Protocol", "high"),
            no=RuleLeaf("Highway Bypass — I-5 / SR-99 Alternate", "high"),
        ),
    ),
    no=_light_traffic(
        yes=_mild_weather(
            yes=RuleLeaf("Direct Standard Route", "low"),
            no=RuleLeaf("Weather-Safe Route — Lower-Speed Urban Roads", "medium"),
        ),
        no=RuleBranch(
            "Weather Impact ≥ 70%?",
            "weather",
            ">=",
            0.7,
            yes=RuleLeaf("Sheltered Alternate via Secondary Arterials", "medium"),
            no=RuleLeaf("Congestion Avoidance via Side Streets", "medium"),
        ),
    ),
)


def _feature_reading(feature: Feature, weather_impact: float, traffic_congestion: float, severity: float) -> tuple[float, str]:
    if feature == "severity":
        return severity, f"{severity:.1f}/10"
    if feature == "traffic":
        return traffic_congestion, f"{traffic_congestion * 100:.0f}%"
    return weather_impact, f"{weather_impact * 100:.0f}%"


def _build(
    template: RuleTemplate,
    weather_impact: float,
    traffic_congestion: float,
    severity: float,
    on_path: bool,
) -> DecisionNode:
    if isinstance(template, RuleLeaf):
        return DecisionLeaf(outcome=template.outcome, priority=template.priority, is_active_path=on_path)
    value, live_value = _feature_reading(template.feature, weather_impact, traffic_congestion, severity)
    condition_met = _COMPARATORS[template.comparator](value, template.threshold)
    return DecisionBranch(
        question=template.question,
        threshold=template.threshold,
        live_value=live_value,
        condition_met=condition_met,
        is_active_path=on_path,
        yes=_build(template.yes, weather_impact, traffic_congestion, severity, on_path and condition_met),
        no=_build(template.no, weather_impact, traffic_congestion, severity, on_path and not condition_met),
    )


def build_decision_tree(
    weather_impact: float,
    traffic_congestion: float,
    severity: float,
    template: RuleTemplate = ROUTING_TEMPLATE,
) -> DecisionNode:
    return _build(template, weather_impact, traffic_congestion, severity, on_path=True)


def active_path(root: DecisionNode) -> list[DecisionNode]:
    path: list[DecisionNode] = []
    node: DecisionNode | None = root
    while node is not None and node.is_active_path:
        path.append(node)
        if isinstance(node, DecisionLeaf):
            break
        node = node.yes if node.condition_met else node.no
    return path


def active_leaf(root: DecisionNode) -> DecisionLeaf:
    leaf = active_path(root)[-1]
    if not isinstance(leaf, DecisionLeaf):
        raise ValueError("decision tree has no active leaf")
    return leaf


def iter_leaves(root: DecisionNode) -> list[DecisionLeaf]:
    if isinstance(root, DecisionLeaf):
        return [root]
    return iter_leaves(root.yes) + iter_leaves(root.no)
