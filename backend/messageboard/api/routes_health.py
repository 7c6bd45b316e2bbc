"""Liveness probe that also checks the store answers."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from messageboard.core.db import get_db
from messageboard.schemas.common import HealthStatus

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthStatus)
def health(response: Response, db: Session = Depends(get_db)) -> HealthStatus:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        LOGGER.error("Health check could not reach the database: %s", exc)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthStatus(status="unavailable", database=False)
    return HealthStatus(status="ok", database=True)
