"""Schemas for the message feed."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class MessageOut(BaseModel):
    id: int
    message: str
    author: Optional[str] = None
