"""Static fleet and facility registry."""

from fleet_registry.catalog import ACTIVE_SHIPMENTS, HOSPITALS
from fleet_registry.distance import haversine_distance_km, route_distance_km
from fleet_registry.models import Cargo, FleetSummary, GeoPoint, Hospital, SearchResults, Shipment, parse_eta_minutes
from fleet_registry.registry import FleetRegistry, search_fleet, summarize_fleet

__all__ = [
    "ACTIVE_SHIPMENTS",
    "HOSPITALS",
    "Cargo",
    "FleetRegistry",
    "FleetSummary",
    "GeoPoint",
    "Hospital",
    "SearchResults",
    "Shipment",
    "haversine_distance_km",
    "parse_eta_minutes",
    "route_distance_km",
    "search_fleet",
    "summarize_fleet",
]
