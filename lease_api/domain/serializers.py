"""
Serialization boundary: ORM entities -> JSON-safe response dicts.
"""
from __future__ import annotations

from lease_api.db.models import Car, Lease, User


def _iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def user_to_dict(entity: User) -> dict:
    return {
        "id": entity.id,
        "name": entity.name,
        "email": entity.email,
        "role": entity.role.value,
    }


def car_to_dict(entity: Car) -> dict:
    return {
        "id": entity.id,
        "model": entity.model,
        "status": entity.status.value,
        "ownerEmail": entity.owner.email if entity.owner else None,
    }


def lease_to_dict(entity: Lease) -> dict:
    return {
        "leaseId": entity.id,
        "carModel": entity.car.model,
        "customerEmail": entity.customer.email,
        "startDate": _iso(entity.start_date),
        "endDate": _iso(entity.end_date),
    }
