from pydantic import BaseModel


class HospitalView(BaseModel):
    id: str
    name: str
    lat: float
    lng: float
    capacity: int
    specialties: list[str]


class CargoView(BaseModel):
    id: str
    type: str
    description: str
    priority: str
    quantity: int
    unit: str


class ShipmentView(BaseModel):
    id: str
    cargo: CargoView
    origin: HospitalView
    destination: HospitalView
    status: str
    est_arrival: str
    est_arrival_minutes: int
    severity: float
    vehicle_type: str
    distance_km: float


class FleetSummaryView(BaseModel):
    in_transit: int
    pending: int
    delivered: int
    critical: int
    hospitals: int


class SearchResultView(BaseModel):
    query: str
    hospitals: list[HospitalView]
    shipments: list[ShipmentView]
    total: int
