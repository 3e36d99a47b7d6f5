from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_enum, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    username: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Kullanıcı adı veya şifre hatalı")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # Placeholder or corrupted hashes in legacy rows.
            ok = False

        if not ok:
            logger.info("Failed login for %s", user.username)
            raise AuthenticationError("Kullanıcı adı veya şifre hatalı")

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            username=user.username,
            role=user.role,
        )


class UserService:
    """Use case: manage office accounts (admin only)."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Bu işlem için yetkiniz yok")

    def list_users(self, *, current_role: Role) -> Sequence[User]:
        self._require_admin(current_role)
        return self._users.list_all()

    def create_account(
        self,
        *,
        current_role: Role,
        full_name: str,
        username: str,
        password: str,
        role: object = Role.STAFF,
    ) -> User:
        self._require_admin(current_role)
        full_name = require_non_empty(full_name, "Ad soyad")
        username = require_non_empty(username, "Kullanıcı adı")
        require_min_length(password, "Şifre", MIN_PASSWORD_LENGTH)
        role = require_enum(role, Role, "rol")

        if self._users.get_by_username(username):
            raise ValidationError("Bu kullanıcı adı zaten kullanılıyor")

        user_id = self._users.create_user(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
        )
        created = self._users.get_by_id(user_id)
        if not created:
            raise NotFoundError("Kullanıcı bulunamadı")
        return created

    def delete_user(self, *, current_role: Role, user_id: int) -> None:
        self._require_admin(current_role)

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Kullanıcı bulunamadı")
        if user.role == Role.ADMIN:
            raise ValidationError("Yönetici hesabı silinemez")

        if not self._users.delete_by_id(user_id):
            raise NotFoundError("Kullanıcı bulunamadı")
