# booking_app/users.py

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .auth import hash_password, verify_password
from .errors import DuplicateEmail, InvalidCredentials
from .models import User
from .schemas import UserCreate

logger = logging.getLogger(__name__)


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(
        select(User).where(User.email == email)
    ).first()


def list_users(session: Session) -> List[User]:
    return list(session.exec(select(User).order_by(User.id)).all())


def register_user(session: Session, data: UserCreate) -> User:
    # 1) Check if email already exists
    if get_user_by_email(session, data.email) is not None:
        raise DuplicateEmail()

    # 2) Create user in DB, only the hash is stored
    db_user = User(
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role.value,
    )

    session.add(db_user)
    try:
        session.commit()
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        session.rollback()
        raise DuplicateEmail()

    session.refresh(db_user)  # fills db_user.id
    logger.info(f"Registered user {db_user.id} ({db_user.role})")
    return db_user


def authenticate(session: Session, email: str, password: str) -> User:
    user = get_user_by_email(session, email)

    # same error for unknown email and wrong password
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt")
        raise InvalidCredentials()

    return user
