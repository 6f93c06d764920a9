"""Create the users, cars and leases tables (including the active-lease index)."""
from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers User/Car/Lease on Base.metadata


def create_all() -> None:
    Base.metadata.create_all(bind=get_engine())


if __name__ == "__main__":
    try:
        create_all()
        print("Lease schema ready: " + ", ".join(sorted(Base.metadata.tables)))
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not create the lease schema: {exc}") from exc
