"""SQLAlchemy model for cookie-bound session tokens."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from messageboard.core.db import Base


class AuthToken(Base):
    __tablename__ = "auth_tokens"

    token = Column(String(36), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime, nullable=False, index=True)
