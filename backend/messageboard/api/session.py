"""Cookie session resolution middleware."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from messageboard.schemas.auth import SessionUser
from messageboard.services.auth_service import AuthService

LOGGER = logging.getLogger(__name__)


def _lookup_session_user(request: Request, token: str) -> Optional[SessionUser]:
    auth_service: AuthService = request.app.state.auth_service
    db = request.app.state.session_factory()
    try:
        return auth_service.resolve_session(db, token)
    except SQLAlchemyError as exc:
        LOGGER.warning("Session lookup failed, continuing anonymous: %s", exc)
        return None
    finally:
        db.close()


async def resolve_session(request: Request, call_next):
    """Attach the cookie's user to request.state.user; anonymous on any miss."""
    request.state.user = None
    token = request.cookies.get(request.app.state.settings.BOARD_SESSION_COOKIE_NAME)
    if token:
        request.state.user = await run_in_threadpool(_lookup_session_user, request, token)
    return await call_next(request)


def get_current_user(request: Request) -> Optional[SessionUser]:
    return getattr(request.state, "user", None)


def get_session_token(request: Request) -> Optional[str]:
    return request.cookies.get(request.app.state.settings.BOARD_SESSION_COOKIE_NAME)
