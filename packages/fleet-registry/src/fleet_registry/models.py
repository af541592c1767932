from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from route_engine.models import CargoPriority, ShipmentContext

CargoType = Literal["blood", "organs", "equipment", "medication"]
ShipmentStatus = Literal["in-transit", "delivered", "pending"]
VehicleType = Literal["ambulance", "helicopter", "drone"]

_LEADING_INT = re.compile(r"^\s*(\d+)")


def parse_eta_minutes(label: str) -> int:
    """Leading integer of an ETA label such as ``"12 min"``; 0 when there is none."""
    match = _LEADING_INT.match(label or "")
    if match is None:
        return 0
    return int(match.group(1))


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class Hospital:
    id: str
    name: str
    position: GeoPoint
    capacity: int
    specialties: tuple[str, ...]


@dataclass(frozen=True)
class Cargo:
    id: str
    type: CargoType
    description: str
    priority: CargoPriority
    quantity: int
    unit: str


@dataclass(frozen=True)
class Shipment:
    id: str
    cargo: Cargo
    origin: Hospital
    destination: Hospital
    status: ShipmentStatus
    est_arrival: str
    severity: float
    vehicle_type: VehicleType

    @property
    def est_arrival_minutes(self) -> int:
        return parse_eta_minutes(self.est_arrival)

    def to_context(self) -> ShipmentContext:
        return ShipmentContext(
            severity=self.severity,
            est_arrival_minutes=self.est_arrival_minutes,
            cargo_description=self.cargo.description,
            priority=self.cargo.priority,
            origin=self.origin.name,
            destination=self.destination.name,
            vehicle_type=self.vehicle_type,
        )


@dataclass(frozen=True)
class FleetSummary:
    in_transit: int
    pending: int
    delivered: int
    critical: int
    hospitals: int


@dataclass(frozen=True)
class SearchResults:
    hospitals: tuple[Hospital, ...]
    shipments: tuple[Shipment, ...]

    @property
    def total(self) -> int:
        return len(self.hospitals) + len(self.shipments)
