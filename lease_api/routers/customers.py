from __future__ import annotations

import logging

from fastapi import APIRouter

from lease_api.domain import envelope
from lease_api.domain.enums import CarStatus
from lease_api.domain.schemas import LeaseRequest
from lease_api.domain.serializers import car_to_dict, lease_to_dict
from lease_api.services.car_service import CarService
from lease_api.services.lease_service import LeaseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/customers", tags=["customers"])
car_service = CarService()
lease_service = LeaseService()


@router.get("/cars")
def available_cars():
    """Cars a customer can lease right now (IDLE only)."""
    logger.info("[Customer] Fetching all IDLE cars available for leasing.")
    cars = [car_to_dict(c) for c in car_service.list_by_status(CarStatus.IDLE)]
    return envelope.listing(
        cars,
        found="Cars fetched successfully",
        empty=f"No cars found with status: {CarStatus.IDLE.value}",
    )


@router.post("/{customer_id}/lease")
def start_lease(customer_id: int, payload: LeaseRequest):
    logger.info("[Customer] Starting lease for customer %s and car %s", customer_id, payload.car_id)
    lease = lease_service.start_lease(customer_id, payload.car_id)
    return envelope.success("Lease started successfully.", lease_to_dict(lease))


@router.post("/{customer_id}/lease/{lease_id}/end")
def end_lease(customer_id: int, lease_id: int):
    logger.info("[Customer] Ending lease ID %s for customer %s", lease_id, customer_id)
    lease = lease_service.end_lease(lease_id, requesting_customer_id=customer_id)
    return envelope.success("Lease ended successfully.", lease_to_dict(lease))


@router.get("/{customer_id}/leases")
def lease_history(customer_id: int):
    logger.info("[Customer] Fetching lease history for customer ID: %s", customer_id)
    leases = [lease_to_dict(lease) for lease in lease_service.leases_by_customer(customer_id)]
    return envelope.listing(
        leases,
        found="Lease history fetched successfully.",
        empty="No lease history found for the customer.",
    )
