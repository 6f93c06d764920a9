"""Idempotent demo data seeding."""
from __future__ import annotations

import logging

from lease_api.domain.enums import UserRole
from lease_api.services.user_service import UserService

logger = logging.getLogger(__name__)

DEMO_USERS: tuple[tuple[str, str, UserRole], ...] = (
    ("Admin1", "admin@trimblecars.com", UserRole.ADMIN),
    ("Carlos", "carlos@trimblecars.com", UserRole.OWNER),
    ("Ayesha", "ayesha@trimblecars.com", UserRole.OWNER),
    ("Daniel", "daniel@trimblecars.com", UserRole.OWNER),
    ("Ravi", "ravi@trimblecars.com", UserRole.OWNER),
    ("Sofia", "sofia@trimblecars.com", UserRole.OWNER),
    ("Rajesh", "rajesh@trimblecars.com", UserRole.CUSTOMER),
    ("Emily", "emily@trimblecars.com", UserRole.CUSTOMER),
    ("Ali", "ali@trimblecars.com", UserRole.CUSTOMER),
    ("Lina", "lina@trimblecars.com", UserRole.CUSTOMER),
    ("Sundar", "sundar@trimblecars.com", UserRole.CUSTOMER),
)


class SeedService:
    def __init__(self, users: UserService | None = None) -> None:
        self.users = users or UserService()

    def bootstrap_users(self, entries=DEMO_USERS) -> int:
        """Insert the demo users that are not registered yet; return how many were inserted."""
        pending = [(name, email, role) for name, email, role in entries if not self.users.find_by_email(email)]
        if not pending:
            logger.info("Demo users already present; nothing to seed")
            return 0
        self.users.register_many(pending)
        logger.info("Seeded %d demo users", len(pending))
        return len(pending)
