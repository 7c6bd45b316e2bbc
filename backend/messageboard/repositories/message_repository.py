"""Repository for board messages."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from messageboard.models.message import Message
from messageboard.models.user import User

LOGGER = logging.getLogger(__name__)


class MessageRepository:
    def create_message(self, db: Session, text: str, author_id: int | None) -> Message:
        try:
            record = Message(message=text, author_id=author_id)
            db.add(record)
            db.commit()
            db.refresh(record)
            return record
        except Exception as exc:  # noqa: BLE001
            db.rollback()
            LOGGER.error("Message insert failed for author=%s (len=%s): %s", author_id, len(text), exc)
            raise

    def list_with_authors(self, db: Session) -> list[tuple[int, str, str | None]]:
        """All messages in insertion order as (id, message, author username) rows."""
        rows = (
            db.query(Message.id, Message.message, User.username)
            .outerjoin(User, Message.author_id == User.id)
            .order_by(Message.id.asc())
            .all()
        )
        return [(row.id, row.message, row.username) for row in rows]
