"""Home feed and message posting."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from messageboard.api.session import get_current_user
from messageboard.api.templating import redirect_home, render
from messageboard.core.db import get_db
from messageboard.schemas.auth import SessionUser
from messageboard.services.message_service import MessageService

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])

GENERIC_ERROR = "Something went wrong"


def get_message_service(request: Request) -> MessageService:
    return request.app.state.message_service


@router.get("/")
def home(
    request: Request,
    db: Session = Depends(get_db),
    message_service: MessageService = Depends(get_message_service),
):
    try:
        messages = message_service.list_messages(db)
    except SQLAlchemyError:
        LOGGER.exception("home route")
        return render(request, "home.html", messages=[], error=GENERIC_ERROR)
    return render(request, "home.html", messages=messages)


@router.post("/message")
def post_message(
    request: Request,
    message: str = Form(""),
    db: Session = Depends(get_db),
    current_user: Optional[SessionUser] = Depends(get_current_user),
    message_service: MessageService = Depends(get_message_service),
):
    author_id = current_user.id if current_user else None
    try:
        message_service.post_message(db, message, author_id)
    except SQLAlchemyError:
        LOGGER.exception("message route")
        return render(request, "home.html", messages=[], error=GENERIC_ERROR)
    return redirect_home()
