"""Route engine core package."""

from route_engine.decision_tree import active_leaf, active_path, build_decision_tree, iter_leaves
from route_engine.feature_impact import ImpactConstants, classify_net_score, estimate_impacts, summarize_impacts
from route_engine.life_cost import calculate_life_cost, describe_life_cost_formula, score_life_cost
from route_engine.models import (
    DecisionBranch,
    DecisionLeaf,
    DecisionNode,
    EnvironmentalSnapshot,
    FeatureContribution,
    ImpactSummary,
    LifeCostResult,
    RouteStrategy,
    ShipmentContext,
)
from route_engine.strategy import ROUTE_RULES, classify_route, match_route_rule

__all__ = [
    "DecisionBranch",
    "DecisionLeaf",
    "DecisionNode",
    "EnvironmentalSnapshot",
    "FeatureContribution",
    "ImpactConstants",
    "ImpactSummary",
    "LifeCostResult",
    "ROUTE_RULES",
    "RouteStrategy",
    "ShipmentContext",
    "active_leaf",
    "active_path",
    "build_decision_tree",
    "calculate_life_cost",
    "classify_net_score",
    "classify_route",
    "describe_life_cost_formula",
    "estimate_impacts",
    "iter_leaves",
    "match_route_rule",
    "score_life_cost",
    "summarize_impacts",
]
