import math

from fleet_registry.models import GeoPoint, Shipment

EARTH_RADIUS_KM = 6371.0


def haversine_distance_km(start: GeoPoint, end: GeoPoint) -> float:
    lat1, lat2 = math.radians(start.lat), math.radians(end.lat)
    half_dlat = math.radians(end.lat - start.lat) / 2
    half_dlng = math.radians(end.lng - start.lng) / 2
    h = math.sin(half_dlat) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(half_dlng) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(h)))


def route_distance_km(shipment: Shipment) -> float:
    """Great-circle distance between a shipment's hospitals, rounded for display."""
    return round(haversine_distance_km(shipment.origin.position, shipment.destination.position), 2)
