# booking_app/businesses.py

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .errors import AlreadyOwned
from .models import Business, User
from .schemas import BusinessCreate

logger = logging.getLogger(__name__)


def get_business(session: Session, business_id: int) -> Optional[Business]:
    return session.get(Business, business_id)


def get_owned(session: Session, owner_id: int) -> Optional[Business]:
    return session.exec(
        select(Business).where(Business.owner_id == owner_id)
    ).first()


def list_all(session: Session) -> List[Business]:
    return list(session.exec(select(Business).order_by(Business.id)).all())


def create_business(session: Session, owner: User, data: BusinessCreate) -> Business:
    if get_owned(session, owner.id) is not None:
        raise AlreadyOwned()

    db_business = Business(
        owner_id=owner.id,
        name=data.name,
        description=data.description,
        operating_hours=data.operating_hours,
        category=data.category.value,
    )

    session.add(db_business)
    try:
        session.commit()
    except IntegrityError:
        # the unique owner_id constraint caught a concurrent create
        session.rollback()
        raise AlreadyOwned()

    session.refresh(db_business)
    logger.info(f"User {owner.id} created business {db_business.id}")
    return db_business
