"""SQLAlchemy models for users, cars and leases."""
from __future__ import annotations

from sqlalchemy import (
    Column,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import relationship

from lease_api.domain.enums import CarStatus, UserRole

from .session import Base


class User(Base):
    __tablename__ = "app_user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    role = Column(Enum(UserRole, native_enum=False, length=16), nullable=False, default=UserRole.CUSTOMER)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r}, role={self.role!r})"


class Car(Base):
    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, autoincrement=True)
    model = Column(String(255), nullable=False)
    status = Column(Enum(CarStatus, native_enum=False, length=16), nullable=False, default=CarStatus.IDLE)
    owner_id = Column(Integer, ForeignKey("app_user.id"), nullable=False, index=True)

    owner = relationship("User", lazy="joined", innerjoin=True)

    def __repr__(self) -> str:
        return f"Car(id={self.id!r}, model={self.model!r}, status={self.status!r})"


class Lease(Base):
    __tablename__ = "leases"
    __table_args__ = (
        # at most one active (end_date IS NULL) lease per car
        Index(
            "uq_leases_active_car",
            "car_id",
            unique=True,
            sqlite_where=text("end_date IS NULL"),
            postgresql_where=text("end_date IS NULL"),
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    car_id = Column(Integer, ForeignKey("cars.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("app_user.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)

    car = relationship("Car", lazy="joined", innerjoin=True)
    customer = relationship("User", lazy="joined", innerjoin=True)

    @property
    def is_active(self) -> bool:
        return self.end_date is None

    def __repr__(self) -> str:
        return f"Lease(id={self.id!r}, car_id={self.car_id!r}, customer_id={self.customer_id!r}, end_date={self.end_date!r})"
