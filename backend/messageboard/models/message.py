"""SQLAlchemy model for posted messages."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, func

from messageboard.core.db import Base


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    message = Column(Text, nullable=False, default="")
    # Null when posted without a session.
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
