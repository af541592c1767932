"""Seattle-area hospitals and the active shipment board."""

from fleet_registry.models import Cargo, GeoPoint, Hospital, Shipment

HARBORVIEW = Hospital(
    id="H001",
    name="Harborview Medical Center",
    position=GeoPoint(lat=47.6048, lng=-122.3206),
    capacity=25,
    specialties=("Trauma", "Emergency", "Surgery"),
)
SWEDISH = Hospital(
    id="H002",
    name="Swedish Medical Center",
    position=GeoPoint(lat=47.6232, lng=-122.3206),
    capacity=40,
    specialties=("Cardiology", "Neurology", "Oncology"),
)
UW_MEDICAL = Hospital(
    id="H003",
    name="UW Medical Center",
    position=GeoPoint(lat=47.6505, lng=-122.3055),
    capacity=35,
    specialties=("Transplant", "Pediatrics", "Research"),
)
VIRGINIA_MASON = Hospital(
    id="H004",
    name="Virginia Mason Medical Center",
    position=GeoPoint(lat=47.6113, lng=-122.3295),
    capacity=30,
    specialties=("General", "Orthopedics", "Gastroenterology"),
)
SEATTLE_CHILDRENS = Hospital(
    id="H005",
    name="Seattle Children's Hospital",
    position=GeoPoint(lat=47.6545, lng=-122.3030),
    capacity=20,
    specialties=("Pediatrics", "NICU", "Pediatric Surgery"),
)

HOSPITALS: tuple[Hospital, ...] = (HARBORVIEW, SWEDISH, UW_MEDICAL, VIRGINIA_MASON, SEATTLE_CHILDRENS)

ACTIVE_SHIPMENTS: tuple[Shipment, ...] = (
    Shipment(
        id="S001",
        cargo=Cargo(
            id="C001",
            type="blood",
            description="O-Negative Blood Units",
            priority="critical",
            quantity=6,
            unit="units",
        ),
        origin=SWEDISH,
        destination=HARBORVIEW,
        status="in-transit",
        est_arrival="12 min",
        severity=9.2,
        vehicle_type="ambulance",
    ),
    Shipment(
        id="S002",
        cargo=Cargo(
            id="C002",
            type="organs",
            description="Donor Heart for Transplant",
            priority="critical",
            quantity=1,
            unit="organ",
        ),
        origin=VIRGINIA_MASON,
        destination=UW_MEDICAL,
        status="in-transit",
        est_arrival="8 min",
        severity=10.0,
        vehicle_type="helicopter",
    ),
    Shipment(
        id="S003",
        cargo=Cargo(
            id="C003",
            type="medication",
            description="Emergency Antivenom",
            priority="high",
            quantity=3,
            unit="vials",
        ),
        origin=SWEDISH,
        destination=SEATTLE_CHILDRENS,
        status="in-transit",
        est_arrival="15 min",
        severity=7.5,
        vehicle_type="ambulance",
    ),
    Shipment(
        id="S004",
        cargo=Cargo(
            id="C004",
            type="equipment",
            description="Portable Ventilator",
            priority="high",
            quantity=1,
            unit="unit",
        ),
        origin=UW_MEDICAL,
        destination=HARBORVIEW,
        status="pending",
        est_arrival="20 min",
        severity=8.0,
        vehicle_type="ambulance",
    ),
    Shipment(
        id="S005",
        cargo=Cargo(
            id="C005",
            type="blood",
            description="AB-Positive Platelets",
            priority="medium",
            quantity=4,
            unit="units",
        ),
        origin=HARBORVIEW,
        destination=VIRGINIA_MASON,
        status="pending",
        est_arrival="25 min",
        severity=6.5,
        vehicle_type="drone",
    ),
)
