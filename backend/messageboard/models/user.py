"""SQLAlchemy model for board users."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, String, func

from messageboard.core.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(64), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
