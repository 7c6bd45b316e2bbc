from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from messageboard.core.config import Settings
from messageboard.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        BOARD_DATABASE_URL=f"sqlite:///{tmp_path / 'board.db'}",
        BOARD_BCRYPT_ROUNDS=4,
        BOARD_SESSION_TTL_MINUTES=60,
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_client(app):
    """Factory for extra independent browsers sharing one app."""
    return lambda: TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def auth_service(app):
    return app.state.auth_service


def count_rows(app, model) -> int:
    with app.state.session_factory() as session:
        return session.query(model).count()


def register(client: TestClient, username: str, password: str):
    return client.post("/register", data={"username": username, "password": password})


def login(client: TestClient, username: str, password: str):
    return client.post("/login", data={"username": username, "password": password})


def current_username(response) -> str | None:
    marker = '<span class="current-user">'
    body = response.text
    if marker not in body:
        return None
    start = body.index(marker) + len(marker)
    return body[start:body.index("</span>", start)]
