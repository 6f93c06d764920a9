from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from threading import Barrier

import pytest

from lease_api.core import config as core_config
from lease_api.db.models import Car, Lease
from lease_api.db.session import get_session
from lease_api.domain.enums import CarStatus, UserRole
from lease_api.services.car_service import CarService
from lease_api.services.errors import (
    BusinessRuleViolationError,
    LeaseOwnershipError,
    NotFoundError,
    RoleViolationError,
    ValidationError,
)
from lease_api.services import lease_service as lease_service_module
from lease_api.services.lease_service import LeaseService


def _car_status(repo, car_id):
    return repo.get_car(car_id).status


def _assert_car_status_matches_active_leases(repo):
    """ON_LEASE iff exactly one active lease references the car."""
    for car in repo.list_cars():
        active = [l for l in repo.list_leases_by_car(car.id) if l.end_date is None]
        assert len(active) <= 1
        assert (car.status is CarStatus.ON_LEASE) == bool(active)


@pytest.fixture()
def civic(owner):
    return CarService().register(owner.id, "Civic")


def test_start_then_end_lease_scenario(repo, civic, customer):
    svc = LeaseService()

    lease = svc.start_lease(customer.id, civic.id)
    assert lease.id is not None
    assert lease.start_date == date.today()
    assert lease.end_date is None
    assert lease.car.model == "Civic"
    assert lease.customer.email == "raj@x.com"
    assert _car_status(repo, civic.id) is CarStatus.ON_LEASE
    _assert_car_status_matches_active_leases(repo)

    ended = svc.end_lease(lease.id)
    assert ended.end_date == date.today()
    assert _car_status(repo, civic.id) is CarStatus.IDLE
    _assert_car_status_matches_active_leases(repo)


def test_car_cycles_between_leases(repo, civic, customer):
    svc = LeaseService()
    first = svc.start_lease(customer.id, civic.id)
    svc.end_lease(first.id)
    second = svc.start_lease(customer.id, civic.id)

    assert second.id != first.id
    assert _car_status(repo, civic.id) is CarStatus.ON_LEASE
    assert len(repo.list_leases_by_car(civic.id)) == 2
    _assert_car_status_matches_active_leases(repo)


def test_car_on_lease_is_unavailable(repo, civic, customer):
    svc = LeaseService()
    svc.start_lease(customer.id, civic.id)
    other = repo.create_user("Emily", "emily@x.com", UserRole.CUSTOMER)

    with pytest.raises(BusinessRuleViolationError) as exc:
        svc.start_lease(other.id, civic.id)
    assert exc.value.message == "Car is not available for lease."
    assert repo.list_leases_by_customer(other.id) == []


def test_non_customer_cannot_start_lease(owner, civic):
    with pytest.raises(RoleViolationError) as exc:
        LeaseService().start_lease(owner.id, civic.id)
    assert exc.value.message == "Only CUSTOMERS can start leases."


def test_unknown_customer_and_car(repo, civic, customer):
    svc = LeaseService()
    with pytest.raises(NotFoundError) as exc:
        svc.start_lease(999, civic.id)
    assert exc.value.message == "Customer not found with ID: 999"

    with pytest.raises(NotFoundError) as exc:
        svc.start_lease(customer.id, 999)
    assert exc.value.message == "Car not found with ID: 999"


def test_missing_ids_are_rejected(db_env):
    svc = LeaseService()
    with pytest.raises(ValidationError):
        svc.start_lease(None, 1)
    with pytest.raises(ValidationError):
        svc.end_lease(None)


def test_third_active_lease_is_rejected_without_side_effects(repo, owner, customer):
    cars = CarService()
    a = cars.register(owner.id, "A")
    b = cars.register(owner.id, "B")
    c = cars.register(owner.id, "C")
    svc = LeaseService()
    svc.start_lease(customer.id, a.id)
    svc.start_lease(customer.id, b.id)

    with pytest.raises(BusinessRuleViolationError) as exc:
        svc.start_lease(customer.id, c.id)

    assert exc.value.message == "Customer already has 2 active leases."
    assert repo.count_active_leases(customer.id) == 2
    assert len(repo.list_leases()) == 2
    assert _car_status(repo, c.id) is CarStatus.IDLE
    _assert_car_status_matches_active_leases(repo)


def test_ending_a_lease_frees_a_slot(repo, owner, customer):
    cars = CarService()
    a, b, c = (cars.register(owner.id, m) for m in ("A", "B", "C"))
    svc = LeaseService()
    first = svc.start_lease(customer.id, a.id)
    svc.start_lease(customer.id, b.id)
    svc.end_lease(first.id)

    svc.start_lease(customer.id, c.id)
    assert repo.count_active_leases(customer.id) == 2


def test_check_order_role_before_capacity_before_availability(repo, owner, customer, civic):
    svc = LeaseService()
    cars = CarService()
    x = cars.register(owner.id, "X")
    y = cars.register(owner.id, "Y")
    svc.start_lease(customer.id, x.id)
    svc.start_lease(customer.id, y.id)

    # capacity wins over an unavailable car
    with pytest.raises(BusinessRuleViolationError) as exc:
        svc.start_lease(customer.id, x.id)
    assert "active leases" in exc.value.message

    # capacity wins over an unknown car
    with pytest.raises(BusinessRuleViolationError):
        svc.start_lease(customer.id, 999)

    # role wins over everything else
    with pytest.raises(RoleViolationError):
        svc.start_lease(owner.id, x.id)


def test_capacity_follows_settings(repo, owner, customer, monkeypatch):
    monkeypatch.setenv("MAX_ACTIVE_LEASES", "1")
    core_config.get_settings.cache_clear()
    cars = CarService()
    a = cars.register(owner.id, "A")
    b = cars.register(owner.id, "B")
    svc = LeaseService()
    svc.start_lease(customer.id, a.id)

    with pytest.raises(BusinessRuleViolationError) as exc:
        svc.start_lease(customer.id, b.id)
    assert exc.value.message == "Customer already has 1 active leases."


def test_end_lease_twice_fails(repo, civic, customer):
    svc = LeaseService()
    lease = svc.start_lease(customer.id, civic.id)
    svc.end_lease(lease.id)

    with pytest.raises(BusinessRuleViolationError) as exc:
        svc.end_lease(lease.id)
    assert exc.value.message == "Lease already ended."
    assert _car_status(repo, civic.id) is CarStatus.IDLE


def test_end_unknown_lease(db_env):
    with pytest.raises(NotFoundError) as exc:
        LeaseService().end_lease(999)
    assert exc.value.message == "Lease not found with ID: 999"


def test_customer_can_end_own_lease(repo, civic, customer):
    svc = LeaseService()
    lease = svc.start_lease(customer.id, civic.id)

    ended = svc.end_lease(lease.id, requesting_customer_id=customer.id)
    assert ended.end_date == date.today()
    assert _car_status(repo, civic.id) is CarStatus.IDLE


def test_customer_cannot_end_someone_elses_lease(repo, civic, customer):
    svc = LeaseService()
    lease = svc.start_lease(customer.id, civic.id)
    other = repo.create_user("Ali", "ali@x.com", UserRole.CUSTOMER)

    with pytest.raises(LeaseOwnershipError) as exc:
        svc.end_lease(lease.id, requesting_customer_id=other.id)

    assert exc.value.message == "You can only end your own lease."
    assert repo.get_lease(lease.id).end_date is None
    assert _car_status(repo, civic.id) is CarStatus.ON_LEASE


def test_customer_path_also_rejects_already_ended(repo, civic, customer):
    svc = LeaseService()
    lease = svc.start_lease(customer.id, civic.id)
    svc.end_lease(lease.id, requesting_customer_id=customer.id)

    with pytest.raises(BusinessRuleViolationError):
        svc.end_lease(lease.id, requesting_customer_id=customer.id)


def test_end_date_uses_clock(repo, civic, customer, monkeypatch):
    svc = LeaseService()
    lease = svc.start_lease(customer.id, civic.id)
    later = date.today() + timedelta(days=3)
    monkeypatch.setattr(svc, "_today", lambda: later)

    ended = svc.end_lease(lease.id)
    assert ended.end_date == later
    assert repo.get_lease(lease.id).end_date == later


def test_stale_idle_status_is_backed_by_unique_index(repo, civic, customer):
    """If the car row says IDLE while an active lease exists, the index still blocks a second lease."""
    svc = LeaseService()
    svc.start_lease(customer.id, civic.id)
    with get_session() as session:
        session.get(Car, civic.id).status = CarStatus.IDLE
        session.commit()
    other = repo.create_user("Emily", "emily@x.com", UserRole.CUSTOMER)

    with pytest.raises(BusinessRuleViolationError) as exc:
        svc.start_lease(other.id, civic.id)
    assert exc.value.message == "Car is not available for lease."
    with get_session() as session:
        assert session.query(Lease).filter(Lease.customer_id == other.id).count() == 0


def test_history_queries(repo, owner, customer, civic):
    svc = LeaseService()
    other_car = CarService().register(owner.id, "Creta")
    first = svc.start_lease(customer.id, civic.id)
    svc.end_lease(first.id)
    svc.start_lease(customer.id, other_car.id)

    assert [l.car.model for l in svc.leases_by_customer(customer.id)] == ["Civic", "Creta"]
    assert len(svc.leases_by_car(civic.id)) == 1
    assert len(svc.all_leases()) == 2
    assert svc.count_active(customer.id) == 1
    assert svc.get(first.id).end_date == date.today()
    with pytest.raises(NotFoundError):
        svc.get(12345)


def _slow_down_capacity_check(monkeypatch, delay=0.3):
    """Hold every start_lease between its capacity check and its writes."""
    real_count = lease_service_module.active_lease_count

    def slow_count(session, customer_id):
        count = real_count(session, customer_id)
        time.sleep(delay)
        return count

    monkeypatch.setattr(lease_service_module, "active_lease_count", slow_count)


def _start_concurrently(requests):
    """Run start_lease for each (customer_id, car_id) at once; return leases or raised errors."""
    barrier = Barrier(len(requests), timeout=10)

    def attempt(customer_id, car_id):
        barrier.wait()
        try:
            return LeaseService().start_lease(customer_id, car_id)
        except BusinessRuleViolationError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=len(requests)) as executor:
        futures = [executor.submit(attempt, customer_id, car_id) for customer_id, car_id in requests]
        return [future.result(timeout=30) for future in futures]


def test_concurrent_leases_on_same_car_admit_one(repo, civic, customer, monkeypatch):
    other = repo.create_user("Emily", "emily@x.com", UserRole.CUSTOMER)
    _slow_down_capacity_check(monkeypatch)

    results = _start_concurrently([(customer.id, civic.id), (other.id, civic.id)])

    leases = [r for r in results if isinstance(r, Lease)]
    errors = [r for r in results if isinstance(r, BusinessRuleViolationError)]
    assert len(leases) == 1
    assert [e.message for e in errors] == ["Car is not available for lease."]
    assert len(repo.list_leases_by_car(civic.id)) == 1
    _assert_car_status_matches_active_leases(repo)


def test_concurrent_third_leases_keep_customer_within_capacity(repo, owner, customer, monkeypatch):
    cars = CarService()
    a = cars.register(owner.id, "A")
    b = cars.register(owner.id, "B")
    c = cars.register(owner.id, "C")
    LeaseService().start_lease(customer.id, a.id)
    _slow_down_capacity_check(monkeypatch)

    results = _start_concurrently([(customer.id, b.id), (customer.id, c.id)])

    errors = [r for r in results if isinstance(r, BusinessRuleViolationError)]
    assert sum(isinstance(r, Lease) for r in results) == 1
    assert [e.message for e in errors] == ["Customer already has 2 active leases."]
    assert repo.count_active_leases(customer.id) == 2
    _assert_car_status_matches_active_leases(repo)
