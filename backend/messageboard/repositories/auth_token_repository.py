"""Repository for session token storage."""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from messageboard.models.auth_token import AuthToken

LOGGER = logging.getLogger(__name__)


class AuthTokenRepository:
    def add_token(self, db: Session, token: str, user_id: int, expires_at: datetime) -> AuthToken:
        record = AuthToken(token=token, user_id=user_id, expires_at=expires_at)
        db.add(record)
        db.flush()
        return record

    def get_by_token(self, db: Session, token: str) -> AuthToken | None:
        return db.get(AuthToken, token)

    def delete_token(self, db: Session, token: str) -> int:
        try:
            deleted = db.query(AuthToken).filter(AuthToken.token == token).delete()
            db.commit()
            return deleted
        except Exception as exc:  # noqa: BLE001
            db.rollback()
            LOGGER.error("Token delete failed: %s", exc)
            raise

    def delete_expired(self, db: Session, now: datetime) -> int:
        try:
            deleted = db.query(AuthToken).filter(AuthToken.expires_at <= now).delete()
            db.commit()
            return deleted
        except Exception as exc:  # noqa: BLE001
            db.rollback()
            LOGGER.error("Expired token purge failed: %s", exc)
            raise
