from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int


def shipment_not_found(shipment_id: str) -> ApiError:
    return ApiError("SHIPMENT_NOT_FOUND", f"Shipment {shipment_id} was not found", 404)
