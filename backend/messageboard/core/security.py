"""Password hashing and session token generation."""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext

DEFAULT_BCRYPT_ROUNDS = 10


def build_password_context(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


pwd_context = build_password_context()


def get_password_hash(password: str, context: CryptContext | None = None) -> str:
    return (context or pwd_context).hash(password)


def verify_password(plain_password: str, hashed_password: str, context: CryptContext | None = None) -> bool:
    return (context or pwd_context).verify(plain_password, hashed_password)


def new_token() -> str:
    """Opaque 128-bit random session identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # Naive UTC, since SQLite drops tzinfo on the way back out.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def token_expiry(ttl_minutes: int, now: datetime | None = None) -> datetime:
    return (now or utcnow()) + timedelta(minutes=ttl_minutes)
