"""Pipeboard — Mock Auth Service.

Static roster lookup with per-user password override kept in the record
store. This is a demo identity layer, not a security boundary: passwords are
stored in plain text under ``password:{user_id}``.
"""

import secrets
from typing import Dict, List, Optional

from app.config import settings
from app.core.errors import InvalidCredentialsError, UserNotFoundError, ValidationError
from app.core.roster import find_member_by_email
from app.models.sales_models import TeamMember, User
from app.services.record_store import RecordStore, password_key
from app.core.logging import get_logger

logger = get_logger("auth")


class AuthService:
    """Resolves logins against the admin identity and the team roster."""

    def __init__(self, store: RecordStore, roster: List[TeamMember]):
        self.store = store
        self.roster = roster

    def _admin_user(self) -> User:
        return User(
            id=settings.admin_user_id,
            email=settings.admin_email,
            name=settings.admin_name,
            is_admin=True,
        )

    def _check_password(self, user_id: str, password: str, default: str) -> bool:
        stored = self.store.get(password_key(user_id))
        expected = stored if stored else default
        return secrets.compare_digest(expected.encode(), (password or "").encode())

    def login(self, email: str, password: str) -> User:
        """Return the matching user or raise an AuthenticationError."""
        if (email or "").strip().lower() == settings.admin_email.lower():
            admin = self._admin_user()
            if not self._check_password(admin.id, password, settings.admin_password):
                logger.warning("Admin login rejected", extra={"user_id": admin.id})
                raise InvalidCredentialsError("Senha incorreta.")
            logger.info("Admin logged in", extra={"user_id": admin.id})
            return admin

        member = find_member_by_email(self.roster, email)
        if member is None:
            logger.warning(f"Login for unknown email {email!r}")
            raise UserNotFoundError("Usuário não encontrado na equipe.")

        if not self._check_password(member.id, password, settings.default_member_password):
            logger.warning("Login rejected", extra={"user_id": member.id})
            raise InvalidCredentialsError("Senha incorreta.")

        logger.info("User logged in", extra={"user_id": member.id})
        return User(id=member.id, email=member.email, name=member.name, is_admin=False)

    def update_password(self, user_id: str, new_password: str) -> bool:
        ok = self.store.set(password_key(user_id), new_password)
        logger.info("Password updated", extra={"user_id": user_id})
        return ok

    def change_password(self, user_id: str, new_password: str, confirm_password: str) -> bool:
        """Validate the password form, then store the override."""
        if new_password != confirm_password:
            raise ValidationError("As senhas não coincidem!")
        if len(new_password or "") < settings.min_password_length:
            raise ValidationError(
                f"A senha deve ter pelo menos {settings.min_password_length} caracteres."
            )
        return self.update_password(user_id, new_password)


class SessionRegistry:
    """In-memory bearer token → User map."""

    def __init__(self):
        self._sessions: Dict[str, User] = {}

    def open(self, user: User) -> str:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = user
        return token

    def resolve(self, token: str) -> Optional[User]:
        return self._sessions.get(token)

    def close(self, token: str) -> None:
        self._sessions.pop(token, None)
