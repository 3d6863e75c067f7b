# booking_app/auth.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from fastapi import Depends, Request, Response
from jose import jwt, JWTError
from passlib.context import CryptContext
from sqlmodel import Session

from . import config
from .db import get_session
from .errors import InvalidSession, NotFoundError, Unauthenticated
from .models import User, utcnow

logger = logging.getLogger(__name__)

_pwd_contexts = {}


def _pwd_context() -> CryptContext:
    # keyed on rounds so tests can lower the cost
    rounds = config.BCRYPT_ROUNDS
    if rounds not in _pwd_contexts:
        _pwd_contexts[rounds] = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
    return _pwd_contexts[rounds]


def hash_password(password: str) -> str:
    return _pwd_context().hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return _pwd_context().verify(plain, hashed)


def session_ttl() -> timedelta:
    return timedelta(days=config.SESSION_TTL_DAYS)


def create_access_token(data: dict, expires: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode["iat"] = now
    to_encode["exp"] = now + (expires if expires is not None else session_ttl())
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def issue_session_token(user: User) -> str:
    return create_access_token({"sub": str(user.id), "ver": user.session_version})


def decode_session_token(token: Optional[str]) -> Tuple[int, int]:
    """
    Check a session token and return the (user id, session version) it carries.

    Raises Unauthenticated when there is no token and InvalidSession when the
    signature, claims or expiry don't hold up.
    """
    if not token:
        raise Unauthenticated()
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        raise InvalidSession()

    try:
        user_id = int(payload["sub"])
        version = int(payload.get("ver", 0))
    except (KeyError, TypeError, ValueError):
        raise InvalidSession()
    return user_id, version


def is_secure_request(request: Request) -> bool:
    return config.COOKIE_SECURE or request.url.scheme == "https"


def set_session_cookie(response: Response, token: str, secure: bool):
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=secure,
        samesite="strict",
        max_age=int(session_ttl().total_seconds()),
        path="/",
    )


def clear_session_cookie(response: Response, secure: bool):
    # attributes must match the ones the cookie was set with
    response.delete_cookie(
        key=config.SESSION_COOKIE_NAME,
        httponly=True,
        secure=secure,
        samesite="strict",
        path="/",
    )


def revoke_sessions(session: Session, user: User):
    user.session_version += 1
    user.updated_at = utcnow()
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info(f"Revoked sessions for user {user.id}")


def resolve_session_user(session: Session, token: Optional[str]) -> User:
    user_id, version = decode_session_token(token)

    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.session_version != version:
        raise InvalidSession()
    return user


def get_current_user(
    request: Request,
    session: Session = Depends(get_session),
) -> User:
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    return resolve_session_user(session, token)
