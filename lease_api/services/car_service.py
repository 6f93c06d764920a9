"""Car registration and car listings."""
from __future__ import annotations

import logging

from lease_api.db.models import Car
from lease_api.domain.enums import CarStatus, UserRole, parse_enum
from lease_api.repositories.sql_repository import SQLRepository
from lease_api.services.errors import NotFoundError, RoleViolationError, ValidationError

logger = logging.getLogger(__name__)


class CarService:
    """Registers cars for owners. Car status is only changed by the lease service."""

    def __init__(self) -> None:
        self.repository = SQLRepository()

    def register(self, owner_id: int | None, model: str | None) -> Car:
        if owner_id is None:
            raise ValidationError("Owner ID must not be null.")
        model = (model or "").strip()
        if not model:
            raise ValidationError("Car model cannot be null or empty")
        logger.info("Registering new car for owner ID: %s", owner_id)

        owner = self.repository.get_user(owner_id)
        if not owner:
            raise NotFoundError(f"Owner not found with ID: {owner_id}")
        if owner.role != UserRole.OWNER:
            raise RoleViolationError("User must be an OWNER to register a car.")

        car = self.repository.create_car(owner, model)
        logger.info("Car registered successfully: %s (Owner: %s)", car.model, owner.email)
        return car

    def parse_status(self, value: CarStatus | str | None) -> CarStatus | None:
        try:
            return parse_enum(CarStatus, value)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    def list_by_status(self, status: CarStatus | str) -> list[Car]:
        status_value = self.parse_status(status)
        if status_value is None:
            raise ValidationError("Car status must be specified")
        logger.info("Fetching cars with status: %s", status_value.value)
        return self.repository.list_cars_by_status(status_value)

    def list_by_owner(self, owner_id: int) -> list[Car]:
        logger.info("Fetching cars for owner ID: %s", owner_id)
        return self.repository.list_cars_by_owner(owner_id)

    def list_all(self) -> list[Car]:
        logger.info("Fetching all cars (no status filter)")
        return self.repository.list_cars()
