from __future__ import annotations

from datetime import timedelta

from conftest import count_rows, current_username, login, register
from sqlalchemy.exc import OperationalError

from messageboard.core.security import utcnow
from messageboard.models.auth_token import AuthToken
from messageboard.models.user import User


def test_register_authenticates_caller(app, client):
    response = register(client, "alice", "pw1")

    assert response.status_code == 200
    assert current_username(response) == "alice"
    assert current_username(client.get("/")) == "alice"
    assert count_rows(app, User) == 1
    assert count_rows(app, AuthToken) == 1


def test_register_sets_http_only_cookie(client):
    response = client.post(
        "/register", data={"username": "alice", "password": "pw1"}, follow_redirects=False
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    cookie = response.headers["set-cookie"]
    assert cookie.startswith("authToken=")
    assert "HttpOnly" in cookie
    assert "Max-Age=3600" in cookie


def test_duplicate_username_is_rejected(app, client, make_client):
    register(client, "alice", "pw1")

    response = register(make_client(), "alice", "other")

    assert "Username taken" in response.text
    assert current_username(response) is None
    assert count_rows(app, User) == 1


def test_register_with_missing_fields(app, client):
    response = client.post("/register", data={"username": "alice"})

    assert response.status_code == 200
    assert "Invalid parameters" in response.text
    assert count_rows(app, User) == 0


def test_register_rejects_password_over_bcrypt_limit(app, client):
    response = register(client, "alice", "x" * 73)

    assert "Invalid parameters" in response.text
    assert count_rows(app, User) == 0


def test_login_round_trip(client, make_client):
    register(client, "alice", "pw1")

    other = make_client()
    response = login(other, "alice", "pw1")

    assert current_username(response) == "alice"


def test_login_failure_does_not_say_which_part_was_wrong(client, make_client):
    register(client, "alice", "pw1")

    wrong_password = login(make_client(), "alice", "wrong")
    unknown_user = login(make_client(), "bob", "pw1")

    for response in (wrong_password, unknown_user):
        assert response.status_code == 200
        assert "Username or password is incorrect" in response.text
        assert current_username(response) is None


def test_login_with_empty_password(client):
    response = login(client, "alice", "")

    assert "Invalid parameters" in response.text


def test_forms_redirect_when_authenticated(client):
    register(client, "alice", "pw1")

    for path in ("/register", "/login"):
        response = client.get(path, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/"


def test_forms_render_for_anonymous(client):
    assert "<h1>Register</h1>" in client.get("/register").text
    assert "<h1>Login</h1>" in client.get("/login").text


def test_session_survives_across_requests(client):
    register(client, "alice", "pw1")

    for _ in range(3):
        assert current_username(client.get("/")) == "alice"


def test_logout_only_invalidates_presented_token(app, client, make_client):
    register(client, "alice", "pw1")
    second = make_client()
    login(second, "alice", "pw1")
    assert count_rows(app, AuthToken) == 2

    response = client.get("/logout")

    assert current_username(response) is None
    assert current_username(client.get("/")) is None
    assert current_username(second.get("/")) == "alice"
    assert count_rows(app, AuthToken) == 1


def test_logout_when_anonymous_just_redirects(client):
    response = client.get("/logout", follow_redirects=False)

    assert response.status_code == 303
    assert "set-cookie" not in response.headers


def test_unknown_cookie_falls_back_to_anonymous(client):
    response = client.get("/", headers={"Cookie": "authToken=not-a-real-token"})

    assert response.status_code == 200
    assert current_username(response) is None


def test_expired_token_is_anonymous_and_removed(app, client):
    register(client, "alice", "pw1")
    with app.state.session_factory() as session:
        token = session.query(AuthToken).one()
        token.expires_at = utcnow() - timedelta(minutes=1)
        session.commit()

    response = client.get("/")

    assert current_username(response) is None
    assert count_rows(app, AuthToken) == 0


def _raise_store_error(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is gone"))


def test_session_lookup_failure_falls_back_to_anonymous(app, client, monkeypatch):
    register(client, "alice", "pw1")
    monkeypatch.setattr(app.state.auth_service.token_repository, "get_by_token", _raise_store_error)

    response = client.get("/")

    assert response.status_code == 200
    assert current_username(response) is None


def test_login_renders_generic_error_on_store_failure(app, client, make_client, monkeypatch):
    register(client, "alice", "pw1")
    monkeypatch.setattr(app.state.auth_service.user_repository, "get_by_username", _raise_store_error)

    response = login(make_client(), "alice", "pw1")

    assert response.status_code == 200
    assert "Something went wrong" in response.text
    assert current_username(response) is None


def test_logout_renders_generic_error_on_store_failure(app, client, monkeypatch):
    register(client, "alice", "pw1")
    monkeypatch.setattr(app.state.auth_service.token_repository, "delete_token", _raise_store_error)

    response = client.get("/logout")

    assert response.status_code == 200
    assert "Something went wrong" in response.text
    assert count_rows(app, AuthToken) == 1


def test_register_rejects_username_over_column_width(app, client, make_client):
    too_long = register(client, "a" * 65, "pw1")
    widest = register(make_client(), "a" * 64, "pw1")

    assert "Invalid parameters" in too_long.text
    assert current_username(widest) == "a" * 64
    assert count_rows(app, User) == 1
