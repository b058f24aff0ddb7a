from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_max_length, require_min_length, require_non_empty
from ..core.constants import EMAIL_MAX_LENGTH, MIN_PASSWORD_LENGTH, NAME_MAX_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@namira.sch.id"
DEFAULT_TEACHER_EMAIL = "teacher@namira.sch.id"


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    email: str
    name: str
    role: Role
    teacher_id: Optional[int]

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "teacherId": self.teacher_id,
        }


def normalize_email(email: Any) -> str:
    return require_non_empty(email, "Email").lower()


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: Any, password: Any) -> SessionUser:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self._users.get_by_email(normalize_email(email))
        if not user:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, str(password))
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.warning("Failed login for %s", user.email)
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            role=user.role,
            teacher_id=user.teacher_id,
        )


class UserService:
    """Use case: manage login accounts."""

    def __init__(self, users: UserRepository, *, admin_password: str, teacher_password: str):
        self._users = users
        self._admin_password = admin_password
        self._teacher_password = teacher_password

    def create_account(
        self,
        *,
        email: Any,
        password: Any,
        role: Role,
        name: Any,
        teacher_id: Optional[int] = None,
    ) -> User:
        email = require_max_length(normalize_email(email), "Email", EMAIL_MAX_LENGTH)
        name = require_non_empty(name, "Name", max_len=NAME_MAX_LENGTH)
        if not isinstance(password, str):
            raise ValidationError("Password is required")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError(f"A user with email {email} already exists")

        user_id = self._users.create_user(
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            name=name,
            teacher_id=teacher_id,
        )
        logger.info("Created %s account %s", role.value, email)
        return self._users.get_by_id(user_id)

    def init_default_users(self) -> list[User]:
        """Seed the admin and teacher accounts; no-op once any user exists.

        Returns the accounts that were created.
        """

        if self._users.count() > 0:
            return []
        return [
            self.create_account(
                email=DEFAULT_ADMIN_EMAIL,
                password=self._admin_password,
                role=Role.ADMIN,
                name="Administrator",
            ),
            self.create_account(
                email=DEFAULT_TEACHER_EMAIL,
                password=self._teacher_password,
                role=Role.TEACHER,
                name="Guru Mata Pelajaran",
            ),
        ]
