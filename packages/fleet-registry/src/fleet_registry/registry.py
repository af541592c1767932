from __future__ import annotations

from collections.abc import Iterable

from fleet_registry.catalog import ACTIVE_SHIPMENTS, HOSPITALS
from fleet_registry.models import FleetSummary, Hospital, SearchResults, Shipment, ShipmentStatus


class FleetRegistry:
    """Read-only lookup over a fixed set of hospitals and shipments."""

    def __init__(
        self,
        hospitals: Iterable[Hospital] = HOSPITALS,
        shipments: Iterable[Shipment] = ACTIVE_SHIPMENTS,
    ) -> None:
        self._hospitals = tuple(hospitals)
        self._shipments = tuple(shipments)
        self._hospitals_by_id = {hospital.id: hospital for hospital in self._hospitals}
        self._shipments_by_id = {shipment.id: shipment for shipment in self._shipments}

    def list_hospitals(self) -> list[Hospital]:
        return list(self._hospitals)

    def get_hospital(self, hospital_id: str) -> Hospital | None:
        return self._hospitals_by_id.get(hospital_id)

    def list_shipments(self, status: ShipmentStatus | None = None) -> list[Shipment]:
        if status is None:
            return list(self._shipments)
        return [shipment for shipment in self._shipments if shipment.status == status]

    def get_shipment(self, shipment_id: str) -> Shipment | None:
        return self._shipments_by_id.get(shipment_id)

    def focus_shipment(self, selected_id: str | None = None) -> Shipment | None:
        """The selected shipment, else the most severe shipment still on the road."""
        if selected_id:
            selected = self.get_shipment(selected_id)
            if selected is not None:
                return selected
        in_transit = self.list_shipments("in-transit")
        candidates = in_transit or list(self._shipments)
        if not candidates:
            return None
        return max(candidates, key=lambda shipment: shipment.severity)

    def search(self, query: str) -> SearchResults:
        return search_fleet(query, self._hospitals, self._shipments)

    def summary(self) -> FleetSummary:
        return summarize_fleet(self._hospitals, self._shipments)


def search_fleet(
    query: str,
    hospitals: Iterable[Hospital] = HOSPITALS,
    shipments: Iterable[Shipment] = ACTIVE_SHIPMENTS,
) -> SearchResults:
    needle = (query or "").strip().lower()
    if not needle:
        return SearchResults(hospitals=(), shipments=())
    matched_hospitals = tuple(
        hospital
        for hospital in hospitals
        if _contains(needle, hospital.name, hospital.id, *hospital.specialties)
    )
    matched_shipments = tuple(
        shipment
        for shipment in shipments
        if _contains(
            needle,
            shipment.id,
            shipment.cargo.description,
            shipment.cargo.type,
            shipment.origin.name,
            shipment.destination.name,
        )
    )
    return SearchResults(hospitals=matched_hospitals, shipments=matched_shipments)


def summarize_fleet(
    hospitals: Iterable[Hospital] = HOSPITALS,
    shipments: Iterable[Shipment] = ACTIVE_SHIPMENTS,
) -> FleetSummary:
    shipments = tuple(shipments)
    return FleetSummary(
        in_transit=sum(1 for shipment in shipments if shipment.status == "in-transit"),
        pending=sum(1 for shipment in shipments if shipment.status == "pending"),
        delivered=sum(1 for shipment in shipments if shipment.status == "delivered"),
        critical=sum(1 for shipment in shipments if shipment.cargo.priority == "critical"),
        hospitals=len(tuple(hospitals)),
    )


def _contains(needle: str, *fields: str) -> bool:
    return any(needle in field.lower() for field in fields)
