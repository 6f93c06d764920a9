"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from lease_api.db.models import Car, Lease, User
from lease_api.db.session import get_session
from lease_api.domain.enums import CarStatus, UserRole


def active_lease_count(session: Session, customer_id: int) -> int:
    """Number of leases without an end date held by ``customer_id``."""
    stmt = (
        select(func.count(Lease.id))
        .where(Lease.customer_id == customer_id)
        .where(Lease.end_date.is_(None))
    )
    return int(session.execute(stmt).scalar_one())


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user(self, user_id: int) -> Optional[User]:
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def create_user(self, name: str, email: str, role: UserRole) -> User:
        entity = User(name=name, email=email, role=role)
        with get_session() as session:
            session.add(entity)
            session.commit()
            return entity

    def list_users(self) -> list[User]:
        with get_session() as session:
            return session.execute(select(User).order_by(User.id)).scalars().all()

    # -------------------------- cars --------------------------
    def get_car(self, car_id: int) -> Optional[Car]:
        with get_session() as session:
            return session.get(Car, car_id)

    def create_car(self, owner: User, model: str) -> Car:
        entity = Car(model=model, status=CarStatus.IDLE, owner_id=owner.id)
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            return entity

    def list_cars(self) -> list[Car]:
        with get_session() as session:
            return session.execute(select(Car).order_by(Car.id)).scalars().all()

    def list_cars_by_status(self, status: CarStatus) -> list[Car]:
        with get_session() as session:
            stmt = select(Car).where(Car.status == status).order_by(Car.id)
            return session.execute(stmt).scalars().all()

    def list_cars_by_owner(self, owner_id: int) -> list[Car]:
        with get_session() as session:
            stmt = select(Car).where(Car.owner_id == owner_id).order_by(Car.id)
            return session.execute(stmt).scalars().all()

    # -------------------------- leases --------------------------
    def get_lease(self, lease_id: int) -> Optional[Lease]:
        with get_session() as session:
            return session.get(Lease, lease_id)

    def list_leases(self) -> list[Lease]:
        with get_session() as session:
            return session.execute(select(Lease).order_by(Lease.id)).scalars().all()

    def list_leases_by_customer(self, customer_id: int) -> list[Lease]:
        with get_session() as session:
            stmt = select(Lease).where(Lease.customer_id == customer_id).order_by(Lease.id)
            return session.execute(stmt).scalars().all()

    def list_leases_by_car(self, car_id: int) -> list[Lease]:
        with get_session() as session:
            stmt = select(Lease).where(Lease.car_id == car_id).order_by(Lease.id)
            return session.execute(stmt).scalars().all()

    def count_active_leases(self, customer_id: int) -> int:
        with get_session() as session:
            return active_lease_count(session, customer_id)
