"""
Lease lifecycle: start and end leases while keeping car availability in sync.

A car is ON_LEASE exactly when one lease referencing it has no end date, and a
customer never holds more than ``max_active_leases`` such leases. Both
transitions run inside a single ``transaction()`` so that the checks and the
writes commit (or roll back) together; the partial unique index on
``leases(car_id) WHERE end_date IS NULL`` backs the availability check when two
requests race for the same car.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError

from lease_api.core.config import get_settings
from lease_api.db.models import Car, Lease, User
from lease_api.db.session import transaction
from lease_api.domain.enums import CarStatus, UserRole
from lease_api.repositories.sql_repository import SQLRepository, active_lease_count
from lease_api.services.errors import (
    BusinessRuleViolationError,
    LeaseOwnershipError,
    NotFoundError,
    RoleViolationError,
    ValidationError,
)

logger = logging.getLogger(__name__)

CAR_UNAVAILABLE = "Car is not available for lease."
LEASE_ALREADY_ENDED = "Lease already ended."


class LeaseService:
    """Starts/ends leases and answers lease history queries."""

    def __init__(self) -> None:
        self.repository = SQLRepository()

    # -------------------------------------- helpers --------------------------------------
    def _today(self) -> date:
        return date.today()

    @property
    def max_active_leases(self) -> int:
        return get_settings().max_active_leases

    # -------------------------------------- transitions --------------------------------------
    def start_lease(self, customer_id: int | None, car_id: int | None) -> Lease:
        """Lease ``car_id`` to ``customer_id``.

        Checks run in a fixed order so the same inputs always surface the same
        error: customer exists, customer role, active lease count, car exists,
        car availability.
        """
        if customer_id is None or car_id is None:
            raise ValidationError("Customer ID and Car ID must not be null.")
        logger.info("Starting lease - customerId=%s, carId=%s", customer_id, car_id)

        with transaction() as session:
            customer = session.get(User, customer_id, with_for_update=True)
            if not customer:
                raise NotFoundError(f"Customer not found with ID: {customer_id}")
            if customer.role != UserRole.CUSTOMER:
                raise RoleViolationError("Only CUSTOMERS can start leases.")

            if active_lease_count(session, customer_id) >= self.max_active_leases:
                raise BusinessRuleViolationError(
                    f"Customer already has {self.max_active_leases} active leases."
                )

            car = session.get(Car, car_id, with_for_update=True)
            if not car:
                raise NotFoundError(f"Car not found with ID: {car_id}")
            if car.status != CarStatus.IDLE:
                raise BusinessRuleViolationError(CAR_UNAVAILABLE)

            car.status = CarStatus.ON_LEASE
            lease = Lease(car=car, customer=customer, start_date=self._today(), end_date=None)
            session.add(lease)
            try:
                session.flush()
            except IntegrityError as exc:
                raise BusinessRuleViolationError(CAR_UNAVAILABLE) from exc

        logger.info("Lease started successfully. Lease ID: %s", lease.id)
        return lease

    def end_lease(self, lease_id: int | None, requesting_customer_id: Optional[int] = None) -> Lease:
        """End an active lease and put its car back to IDLE.

        When ``requesting_customer_id`` is given the lease must belong to that
        customer, otherwise LeaseOwnershipError is raised. Ending a lease twice
        raises BusinessRuleViolationError on every path.
        """
        if lease_id is None:
            raise ValidationError("Lease ID must not be null.")
        if requesting_customer_id is None:
            logger.info("Ending lease with ID: %s", lease_id)
        else:
            logger.info("Attempting to end lease ID %s for customer ID %s", lease_id, requesting_customer_id)

        with transaction() as session:
            lease = session.get(Lease, lease_id, with_for_update=True)
            if not lease:
                raise NotFoundError(f"Lease not found with ID: {lease_id}")
            if requesting_customer_id is not None and lease.customer_id != requesting_customer_id:
                raise LeaseOwnershipError("You can only end your own lease.")
            if lease.end_date is not None:
                raise BusinessRuleViolationError(LEASE_ALREADY_ENDED)

            lease.end_date = self._today()
            lease.car.status = CarStatus.IDLE

        logger.info("Lease ended successfully. Lease ID: %s", lease.id)
        return lease

    # -------------------------------------- queries --------------------------------------
    def get(self, lease_id: int) -> Lease:
        lease = self.repository.get_lease(lease_id)
        if not lease:
            raise NotFoundError(f"Lease not found with ID: {lease_id}")
        return lease

    def leases_by_customer(self, customer_id: int) -> list[Lease]:
        logger.info("Fetching lease history for customer ID: %s", customer_id)
        return self.repository.list_leases_by_customer(customer_id)

    def leases_by_car(self, car_id: int) -> list[Lease]:
        logger.info("Fetching lease history for car ID: %s", car_id)
        return self.repository.list_leases_by_car(car_id)

    def all_leases(self) -> list[Lease]:
        return self.repository.list_leases()

    def count_active(self, customer_id: int) -> int:
        return self.repository.count_active_leases(customer_id)
