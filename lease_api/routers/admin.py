from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, Response

from lease_api.domain import envelope
from lease_api.domain.schemas import CarRequest, LeaseRequest, UserRequest
from lease_api.domain.serializers import car_to_dict, lease_to_dict, user_to_dict
from lease_api.services.car_service import CarService
from lease_api.services.errors import AlreadyExistsError, LeaseServiceError
from lease_api.services.lease_service import LeaseService
from lease_api.services.report_service import ReportService
from lease_api.services.seed_service import SeedService
from lease_api.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])
user_service = UserService()
car_service = CarService()
lease_service = LeaseService()
report_service = ReportService()
seed_service = SeedService(user_service)


# ---------------------- users ----------------------
@router.post("/users")
def register_user(payload: UserRequest):
    logger.info("[Admin] Registering user: %s", payload.email)
    try:
        user = user_service.register(payload.name, payload.email, payload.role)
    except AlreadyExistsError as exc:
        data = user_to_dict(exc.existing) if exc.existing else None
        return envelope.failure("User already exists with this email.", data)
    return envelope.success("User registered successfully.", user_to_dict(user))


@router.post("/bootstrap-users")
def bootstrap_users():
    try:
        inserted = seed_service.bootstrap_users()
    except Exception:
        logger.exception("Failed to insert demo users")
        return JSONResponse(envelope.failure("Error inserting users."), status_code=500)
    return envelope.success(f"{inserted} demo users inserted.", {"inserted": inserted})


# ---------------------- cars ----------------------
@router.post("/owners/{owner_id}/cars")
def register_car(owner_id: int, payload: CarRequest):
    logger.info("[Admin] Registering car for owner: %s", owner_id)
    car = car_service.register(owner_id, payload.model)
    return envelope.success("Car registered successfully.", car_to_dict(car))


@router.get("/cars")
def list_cars(status: Optional[str] = Query(default=None)):
    status_value = car_service.parse_status(status)
    if status_value is None:
        cars = [car_to_dict(c) for c in car_service.list_all()]
        return envelope.listing(cars, found="All cars fetched successfully", empty="No cars found in system")
    cars = [car_to_dict(c) for c in car_service.list_by_status(status_value)]
    return envelope.listing(
        cars,
        found="Cars fetched successfully",
        empty=f"No cars found with status: {status_value.value}",
    )


# ---------------------- leases ----------------------
@router.post("/customers/{customer_id}/lease")
def start_lease(customer_id: int, payload: LeaseRequest):
    logger.info("[Admin] Starting lease for customer %s on car %s", customer_id, payload.car_id)
    lease = lease_service.start_lease(customer_id, payload.car_id)
    return envelope.success("Lease started successfully.", lease_to_dict(lease))


@router.post("/leases/{lease_id}/end")
def end_lease(lease_id: int):
    logger.info("[Admin] Ending lease: %s", lease_id)
    lease = lease_service.end_lease(lease_id)
    return envelope.success("Lease ended successfully.", lease_to_dict(lease))


@router.get("/leases")
def list_leases():
    leases = [lease_to_dict(lease) for lease in lease_service.all_leases()]
    return envelope.listing(leases, found="Lease history fetched successfully.", empty="No leases recorded.")


@router.get("/leases/by-customer/{customer_id}")
def leases_by_customer(customer_id: int):
    logger.info("[Admin] Fetching leases by customer ID: %s", customer_id)
    leases = [lease_to_dict(lease) for lease in lease_service.leases_by_customer(customer_id)]
    return envelope.listing(
        leases,
        found="Lease history fetched successfully.",
        empty="No lease history found for the customer.",
    )


@router.get("/leases/by-car/{car_id}")
def leases_by_car(car_id: int):
    logger.info("[Admin] Fetching leases by car ID: %s", car_id)
    leases = [lease_to_dict(lease) for lease in lease_service.leases_by_car(car_id)]
    return envelope.listing(
        leases,
        found="Lease history fetched successfully.",
        empty="No lease history found for this car.",
    )


@router.get("/leases/export")
def export_leases(format: str = Query(default="csv")):
    try:
        result = report_service.export(format)
    except LeaseServiceError:
        raise
    except Exception:
        logger.exception("Failed to export lease history (format=%s)", format)
        return JSONResponse(envelope.failure("Failed to export lease history."), status_code=500)
    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f"attachment; filename={result.filename}"},
    )
