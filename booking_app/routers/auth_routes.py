# booking_app/routers/auth_routes.py

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlmodel import Session

from booking_app import config
from booking_app.db import get_session
from booking_app.errors import AppError
from booking_app.models import User
from booking_app.schemas import LoginRequest, MessageResponse, UserCreate, UserResponse, UserSessionResponse
from booking_app.auth import (
    clear_session_cookie,
    get_current_user,
    is_secure_request,
    issue_session_token,
    resolve_session_user,
    revoke_sessions,
    set_session_cookie,
)
from booking_app.users import authenticate, register_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/register", status_code=201, response_model=UserSessionResponse)
def register(
    data: UserCreate,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
):
    user = register_user(session, data)

    # registering also signs the user in
    set_session_cookie(response, issue_session_token(user), is_secure_request(request))
    return {"success": True, "message": "User registered successfully", "user": user}


@router.post("/login", response_model=UserSessionResponse)
def login(
    data: LoginRequest,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
):
    user = authenticate(session, data.email, data.password)

    set_session_cookie(response, issue_session_token(user), is_secure_request(request))
    logger.info(f"User {user.id} logged in")
    return {"success": True, "message": "Login successful", "user": user}


@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
):
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    if token:
        try:
            user = resolve_session_user(session, token)
        except AppError:
            # stale or foreign cookie: nothing to revoke, still clear it
            user = None
        if user is not None:
            revoke_sessions(session, user)

    clear_session_cookie(response, is_secure_request(request))
    return {"success": True, "message": "Logout successful"}


@router.get("/me", response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return {"success": True, "user": current_user}
