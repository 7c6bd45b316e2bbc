"""Repository for user persistence and retrieval."""
from __future__ import annotations

from sqlalchemy.orm import Session

from messageboard.models.user import User


class UserRepository:
    def add_user(self, db: Session, username: str, password_hash: str) -> User:
        """Stage a new user and flush so its id is assigned; the caller commits."""
        user = User(username=username, password_hash=password_hash)
        db.add(user)
        db.flush()
        return user

    def get_by_id(self, db: Session, user_id: int) -> User | None:
        return db.get(User, user_id)

    def get_by_username(self, db: Session, username: str) -> User | None:
        return db.query(User).filter(User.username == username).first()
