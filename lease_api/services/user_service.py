"""
User registration and lookups.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError

from lease_api.db.models import User
from lease_api.domain.enums import UserRole, parse_enum
from lease_api.repositories.sql_repository import SQLRepository
from lease_api.services.errors import AlreadyExistsError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self) -> None:
        self.repository = SQLRepository()

    def normalize(self, value: str | None) -> str:
        return (value or "").strip()

    def register(self, name: str | None, email: str | None, role: UserRole | str | None = None) -> User:
        """Create a user; the email is the unique business key and the role never changes afterwards."""
        name = self.normalize(name)
        email = self.normalize(email)
        if not email:
            raise ValidationError("Email cannot be null or empty")
        if not name:
            raise ValidationError("Name cannot be null or empty")
        try:
            role_value = parse_enum(UserRole, role)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if role_value is None:
            logger.info("No role provided for %s. Defaulting to CUSTOMER", email)
            role_value = UserRole.CUSTOMER

        logger.info("Attempting to register user: %s", email)
        existing = self.repository.get_user_by_email(email)
        if existing:
            logger.warning("User already exists with email: %s", email)
            raise AlreadyExistsError(f"User with this email already exists: {email}", existing=existing)
        try:
            saved = self.repository.create_user(name, email, role_value)
        except IntegrityError as exc:
            # a concurrent registration won the unique constraint
            existing = self.repository.get_user_by_email(email)
            raise AlreadyExistsError(f"User with this email already exists: {email}", existing=existing) from exc
        logger.info("User registered successfully: %s", saved.email)
        return saved

    def register_many(self, users: Iterable[tuple[str, str, UserRole | str | None]]) -> list[User]:
        entries = list(users or [])
        if not entries:
            raise ValidationError("User list cannot be null or empty")
        return [self.register(name, email, role) for name, email, role in entries]

    def get_by_id(self, user_id: int | None) -> User:
        if user_id is None:
            raise ValidationError("User ID must not be null.")
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError(f"User not found with ID: {user_id}")
        return user

    def find_by_email(self, email: str | None) -> Optional[User]:
        email = self.normalize(email)
        if not email:
            return None
        return self.repository.get_user_by_email(email)

    def list_all(self) -> list[User]:
        return self.repository.list_users()
