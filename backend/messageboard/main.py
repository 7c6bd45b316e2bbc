"""FastAPI application factory wiring routes, services, and shared state."""
from __future__ import annotations

import logging
import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from messageboard.api import routes_auth, routes_health, routes_messages
from messageboard.api.session import resolve_session
from messageboard.api.templating import build_templates
from messageboard.core.config import Settings, get_settings
from messageboard.core.db import build_engine, build_session_factory, init_db
from messageboard.core.security import build_password_context
from messageboard.repositories.auth_token_repository import AuthTokenRepository
from messageboard.repositories.message_repository import MessageRepository
from messageboard.repositories.user_repository import UserRepository
from messageboard.services.auth_service import AuthService
from messageboard.services.message_service import MessageService


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.BOARD_LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    app = FastAPI(title="Message Board", version="0.1.0")

    # Initialize persistence and services
    engine = build_engine(settings)
    init_db(engine)
    session_factory = build_session_factory(engine)

    auth_service = AuthService(
        UserRepository(),
        AuthTokenRepository(),
        session_ttl_minutes=settings.BOARD_SESSION_TTL_MINUTES,
        pwd_context=build_password_context(settings.BOARD_BCRYPT_ROUNDS),
    )
    message_service = MessageService(MessageRepository())

    with session_factory() as db:
        auth_service.purge_expired_tokens(db)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.auth_service = auth_service
    app.state.message_service = message_service
    app.state.templates = build_templates(settings.BOARD_TEMPLATES_DIR)

    app.mount("/public", StaticFiles(directory=str(settings.BOARD_STATIC_DIR)), name="public")
    app.include_router(routes_messages.router)
    app.include_router(routes_auth.router)
    app.include_router(routes_health.router)

    app.middleware("http")(resolve_session)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        logging.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed)
        return response

    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "messageboard.main:create_app",
        factory=True,
        host=settings.BOARD_HOST,
        port=settings.BOARD_PORT,
    )


if __name__ == "__main__":
    run()
