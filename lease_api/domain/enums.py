"""Role and availability enums shared by models, services and routers."""
from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    OWNER = "OWNER"
    CUSTOMER = "CUSTOMER"


class CarStatus(str, enum.Enum):
    IDLE = "IDLE"
    ON_LEASE = "ON_LEASE"


def parse_enum(enum_cls, value):
    """Return the member of ``enum_cls`` named by ``value`` (case-insensitive).

    Returns None for blank input and raises ValueError for unknown names.
    """
    if value is None or isinstance(value, enum_cls):
        return value
    candidate = str(value).strip().upper()
    if not candidate:
        return None
    try:
        return enum_cls[candidate]
    except KeyError:
        raise ValueError(f"Unknown {enum_cls.__name__}: {value}") from None
