"""Registration, login and logout pages."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import Response
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from messageboard.api.session import get_current_user, get_session_token
from messageboard.api.templating import redirect_home, render
from messageboard.core.db import get_db
from messageboard.schemas.auth import Credentials, SessionUser
from messageboard.services.auth_service import (
    AuthService,
    InvalidCredentialsError,
    UsernameTakenError,
)

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

INVALID_PARAMETERS = "Invalid parameters"
USERNAME_TAKEN = "Username taken"
INCORRECT_CREDENTIALS = "Username or password is incorrect"
GENERIC_ERROR = "Something went wrong"


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def set_session_cookie(request: Request, response: Response, token: str) -> None:
    settings = request.app.state.settings
    response.set_cookie(
        key=settings.BOARD_SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.BOARD_SESSION_COOKIE_SECURE,
    )


@router.get("/register")
def register_form(request: Request, current_user: Optional[SessionUser] = Depends(get_current_user)):
    if current_user:
        return redirect_home()
    return render(request, "register.html")


@router.post("/register")
def register(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        credentials = Credentials(username=username, password=password)
    except ValidationError:
        return render(request, "register.html", error=INVALID_PARAMETERS)
    try:
        issued = auth_service.register_user(db, credentials)
    except UsernameTakenError:
        return render(request, "register.html", error=USERNAME_TAKEN)
    except SQLAlchemyError:
        LOGGER.exception("register route")
        return render(request, "register.html", error=GENERIC_ERROR)
    response = redirect_home()
    set_session_cookie(request, response, issued.token)
    return response


@router.get("/login")
def login_form(request: Request, current_user: Optional[SessionUser] = Depends(get_current_user)):
    if current_user:
        return redirect_home()
    return render(request, "login.html")


@router.post("/login")
def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        credentials = Credentials(username=username, password=password)
    except ValidationError:
        return render(request, "login.html", error=INVALID_PARAMETERS)
    try:
        issued = auth_service.login(db, credentials)
    except InvalidCredentialsError:
        return render(request, "login.html", error=INCORRECT_CREDENTIALS)
    except SQLAlchemyError:
        LOGGER.exception("login route")
        return render(request, "login.html", error=GENERIC_ERROR)
    response = redirect_home()
    set_session_cookie(request, response, issued.token)
    return response


@router.get("/logout")
def logout(
    request: Request,
    db: Session = Depends(get_db),
    current_user: Optional[SessionUser] = Depends(get_current_user),
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    if not current_user or not token:
        return redirect_home()
    try:
        auth_service.logout(db, token)
    except SQLAlchemyError:
        LOGGER.exception("logout route")
        return render(request, "home.html", messages=[], error=GENERIC_ERROR)
    response = redirect_home()
    response.delete_cookie(request.app.state.settings.BOARD_SESSION_COOKIE_NAME)
    return response
