"""Authentication service handling registration, login and cookie sessions."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from messageboard.core.db import transaction
from messageboard.core.security import (
    build_password_context,
    get_password_hash,
    new_token,
    token_expiry,
    utcnow,
    verify_password,
)
from messageboard.repositories.auth_token_repository import AuthTokenRepository
from messageboard.repositories.user_repository import UserRepository
from messageboard.schemas.auth import Credentials, SessionUser

LOGGER = logging.getLogger(__name__)


class UsernameTakenError(Exception):
    """Raised when registration hits the unique username index."""


class InvalidCredentialsError(Exception):
    """Raised for an unknown username or a wrong password, without saying which."""


@dataclass
class IssuedSession:
    user: SessionUser
    token: str


class AuthService:
    def __init__(
        self,
        user_repository: UserRepository,
        token_repository: AuthTokenRepository,
        session_ttl_minutes: int,
        pwd_context: CryptContext | None = None,
    ) -> None:
        self.user_repository = user_repository
        self.token_repository = token_repository
        self.session_ttl_minutes = session_ttl_minutes
        self.pwd_context = pwd_context or build_password_context()

    def register_user(self, db: Session, credentials: Credentials) -> IssuedSession:
        """Create the user and its first session token as one unit of work."""
        password_hash = get_password_hash(credentials.password, self.pwd_context)
        token = new_token()
        try:
            with transaction(db):
                user = self.user_repository.add_user(db, credentials.username, password_hash)
                self.token_repository.add_token(db, token, user.id, token_expiry(self.session_ttl_minutes))
        except IntegrityError as exc:
            LOGGER.info("Registration rejected, username taken: %s", credentials.username)
            raise UsernameTakenError(credentials.username) from exc
        LOGGER.info("Registered user=%s id=%s", user.username, user.id)
        return IssuedSession(user=SessionUser.model_validate(user), token=token)

    def authenticate_user(self, db: Session, username: str, password: str):
        user = self.user_repository.get_by_username(db, username)
        if user is None:
            # Burn a hash so unknown usernames take as long as wrong passwords.
            self.pwd_context.dummy_verify()
            return None
        if verify_password(password, user.password_hash, self.pwd_context):
            return user
        return None

    def login(self, db: Session, credentials: Credentials) -> IssuedSession:
        user = self.authenticate_user(db, credentials.username, credentials.password)
        if not user:
            LOGGER.info("Failed login for username=%s", credentials.username)
            raise InvalidCredentialsError()
        token = self.issue_session_token(db, user.id)
        LOGGER.info("Login user=%s id=%s", user.username, user.id)
        return IssuedSession(user=SessionUser.model_validate(user), token=token)

    def issue_session_token(self, db: Session, user_id: int) -> str:
        token = new_token()
        with transaction(db):
            self.token_repository.add_token(db, token, user_id, token_expiry(self.session_ttl_minutes))
        return token

    def logout(self, db: Session, token: str) -> bool:
        """Delete only the presented token; other sessions of the user stay valid."""
        deleted = self.token_repository.delete_token(db, token)
        LOGGER.info("Logout removed %s token(s)", deleted)
        return bool(deleted)

    def resolve_session(self, db: Session, token: str | None) -> SessionUser | None:
        """Map a cookie value to its user, or None when anything is missing or expired."""
        if not token:
            return None
        record = self.token_repository.get_by_token(db, token)
        if record is None:
            return None
        if record.expires_at <= utcnow():
            LOGGER.info("Expired session token for user id=%s", record.user_id)
            self.token_repository.delete_token(db, token)
            return None
        user = self.user_repository.get_by_id(db, record.user_id)
        if user is None:
            return None
        return SessionUser.model_validate(user)

    def purge_expired_tokens(self, db: Session) -> int:
        deleted = self.token_repository.delete_expired(db, utcnow())
        if deleted:
            LOGGER.info("Purged %s expired session token(s)", deleted)
        return deleted
