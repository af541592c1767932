from __future__ import annotations

from fleet_registry.distance import route_distance_km
from fleet_registry.models import FleetSummary, Hospital, Shipment, ShipmentStatus
from fleet_registry.registry import FleetRegistry

from dashboard_api.errors import shipment_not_found
from dashboard_api.schemas.registry import (
    CargoView,
    FleetSummaryView,
    HospitalView,
    SearchResultView,
    ShipmentView,
)


def hospital_view(hospital: Hospital) -> HospitalView:
    return HospitalView(
        id=hospital.id,
        name=hospital.name,
        lat=hospital.position.lat,
        lng=hospital.position.lng,
        capacity=hospital.capacity,
        specialties=list(hospital.specialties),
    )


def shipment_view(shipment: Shipment) -> ShipmentView:
    cargo = shipment.cargo
    return ShipmentView(
        id=shipment.id,
        cargo=CargoView(
            id=cargo.id,
            type=cargo.type,
            description=cargo.description,
            priority=cargo.priority,
            quantity=cargo.quantity,
            unit=cargo.unit,
        ),
        origin=hospital_view(shipment.origin),
        destination=hospital_view(shipment.destination),
        status=shipment.status,
        est_arrival=shipment.est_arrival,
        est_arrival_minutes=shipment.est_arrival_minutes,
        severity=shipment.severity,
        vehicle_type=shipment.vehicle_type,
        distance_km=route_distance_km(shipment),
    )


def fleet_summary_view(summary: FleetSummary) -> FleetSummaryView:
    return FleetSummaryView(
        in_transit=summary.in_transit,
        pending=summary.pending,
        delivered=summary.delivered,
        critical=summary.critical,
        hospitals=summary.hospitals,
    )


class RegistryService:
    def __init__(self, registry: FleetRegistry) -> None:
        self._registry = registry

    def resolve_shipment(self, shipment_id: str | None) -> Shipment:
        """Explicit ids must exist; without one the registry picks the focus shipment."""
        if shipment_id:
            shipment = self._registry.get_shipment(shipment_id)
        else:
            shipment = self._registry.focus_shipment()
        if shipment is None:
            raise shipment_not_found(shipment_id or "<focus>")
        return shipment

    async def list_hospitals(self) -> list[HospitalView]:
        return [hospital_view(hospital) for hospital in self._registry.list_hospitals()]

    async def list_shipments(self, status: ShipmentStatus | None = None) -> list[ShipmentView]:
        return [shipment_view(shipment) for shipment in self._registry.list_shipments(status)]

    async def get_shipment(self, shipment_id: str) -> ShipmentView:
        return shipment_view(self.resolve_shipment(shipment_id))

    async def search(self, query: str) -> SearchResultView:
        results = self._registry.search(query)
        return SearchResultView(
            query=query,
            hospitals=[hospital_view(hospital) for hospital in results.hospitals],
            shipments=[shipment_view(shipment) for shipment in results.shipments],
            total=results.total,
        )

    async def summary(self) -> FleetSummaryView:
        return fleet_summary_view(self._registry.summary())
