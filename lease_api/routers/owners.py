from __future__ import annotations

import logging

from fastapi import APIRouter

from lease_api.domain import envelope
from lease_api.domain.schemas import CarRequest
from lease_api.domain.serializers import car_to_dict
from lease_api.services.car_service import CarService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/owners", tags=["owners"])
car_service = CarService()


@router.post("/{owner_id}/cars")
def register_car(owner_id: int, payload: CarRequest):
    """Register a new car under the given owner."""
    logger.info("[Owner] Registering car for owner ID: %s", owner_id)
    car = car_service.register(owner_id, payload.model)
    return envelope.success("Car registered successfully.", car_to_dict(car))


@router.get("/{owner_id}/cars")
def cars_by_owner(owner_id: int):
    logger.info("[Owner] Fetching all cars for owner ID: %s", owner_id)
    cars = [car_to_dict(c) for c in car_service.list_by_owner(owner_id)]
    return envelope.listing(
        cars,
        found="Owner cars fetched successfully.",
        empty="No cars found for the given owner.",
    )
