"""Domain service for posting to and reading the shared feed."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from messageboard.repositories.message_repository import MessageRepository
from messageboard.schemas.message import MessageOut

LOGGER = logging.getLogger(__name__)


class MessageService:
    def __init__(self, repo: MessageRepository) -> None:
        self.repo = repo

    def post_message(self, db: Session, text: str, author_id: int | None) -> MessageOut:
        record = self.repo.create_message(db, text, author_id)
        LOGGER.info("Message id=%s posted by author=%s", record.id, author_id)
        return MessageOut(id=record.id, message=record.message, author=None)

    def list_messages(self, db: Session) -> list[MessageOut]:
        return [
            MessageOut(id=msg_id, message=text, author=author)
            for msg_id, text, author in self.repo.list_with_authors(db)
        ]
