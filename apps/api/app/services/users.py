"""User and admin profile services."""

from __future__ import annotations

import logging

from app.adapters.records import RecordQuery
from app.core.logging_safety import safe_log_identifier
from app.schemas.user import CreateUserRequest, Profile, User
from app.services.records import RecordService

logger = logging.getLogger(__name__)


class UserService(RecordService):
    table = "users"
    key = "dni"

    def create_user(self, payload: CreateUserRequest) -> User:
        return User.model_validate(self._insert(payload.model_dump()))

    def find_user(self, *, dni: str, email: str) -> User | None:
        records = self._select(RecordQuery(filters={"dni": dni, "email": email}, limit=1))
        return User.model_validate(records[0]) if records else None

    def find_or_create_user(
        self,
        *,
        dni: str | None,
        email: str | None,
        first_name: str | None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> tuple[User | None, bool]:
        """Return the user matching DNI and email, creating it when absent.

        Returns ``(None, False)`` when either DNI or email is missing, since the
        pair is the user's natural key.
        """
        if not dni or not email:
            return None, False

        existing = self.find_user(dni=dni, email=email)
        if existing is not None:
            return existing, False

        name = " ".join(part for part in (first_name, last_name) if part).strip() or None
        record = self._insert({"dni": dni, "email": email, "name": name, "phone": phone})
        logger.info("user.created dni=%s", safe_log_identifier(dni, prefix="dni"))
        return User.model_validate(record), True


class ProfileService(RecordService):
    table = "admin_profiles"
    key = "user_id"

    def get_profile(self, user_id: str) -> Profile | None:
        record = self._run("get", lambda: self._store.get(self.table, self.key, user_id))
        if record is None:
            return None
        return Profile.model_validate(record)
