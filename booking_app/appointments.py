# booking_app/appointments.py

import logging
from datetime import date as Date
from typing import Dict, FrozenSet, List, Optional

from sqlmodel import Session, col, select

from . import config
from .businesses import get_business
from .core import check_booking_time, normalize_time
from .errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .models import Appointment, Business, User, utcnow
from .schemas import AppointmentStatus

logger = logging.getLogger(__name__)

PENDING = AppointmentStatus.pending
CONFIRMED = AppointmentStatus.confirmed
CANCELLED = AppointmentStatus.cancelled

# every status change goes through this table
TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    PENDING: frozenset({CONFIRMED, CANCELLED}),
    CONFIRMED: frozenset({CANCELLED}),
    CANCELLED: frozenset(),
}


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    return target in TRANSITIONS[current]


def create_appointment(
    session: Session,
    user: User,
    date: Date,
    time: str,
    business_id: Optional[int] = None,
) -> Appointment:
    try:
        time = normalize_time(time)
    except ValueError as e:
        raise ValidationError.for_field("time", str(e))

    if business_id is None:
        if not config.ALLOW_UNLINKED_APPOINTMENTS:
            raise ValidationError.for_field("business_id", "A business is required")
    else:
        business = get_business(session, business_id)
        if business is None:
            raise NotFoundError("Business not found")
        # server-side check, whatever the client already validated
        check_booking_time(time, business.operating_hours)

    db_appt = Appointment(
        user_id=user.id,
        business_id=business_id,
        date=date,
        time=time,
        status=PENDING.value,
    )

    session.add(db_appt)
    session.commit()
    session.refresh(db_appt)
    logger.info(f"User {user.id} booked appointment {db_appt.id} (business={business_id}, {date} {time})")
    return db_appt


def _status_filter(stmt, status: Optional[AppointmentStatus]):
    if status is not None:
        stmt = stmt.where(Appointment.status == status.value)
    return stmt


def list_for_user(
    session: Session, user_id: int, status: Optional[AppointmentStatus] = None
) -> List[Appointment]:
    # newest activity first
    stmt = select(Appointment).where(Appointment.user_id == user_id)
    stmt = _status_filter(stmt, status)
    stmt = stmt.order_by(col(Appointment.created_at).desc(), col(Appointment.id).desc())
    return list(session.exec(stmt).all())


def list_for_business(
    session: Session, business_id: int, status: Optional[AppointmentStatus] = None
) -> List[Appointment]:
    # the queue is worked in chronological order
    stmt = select(Appointment).where(Appointment.business_id == business_id)
    stmt = _status_filter(stmt, status)
    stmt = stmt.order_by(Appointment.date, Appointment.time, Appointment.id)
    return list(session.exec(stmt).all())


def _business_owner_id(session: Session, appointment: Appointment) -> Optional[int]:
    if appointment.business_id is None:
        return None
    business = get_business(session, appointment.business_id)
    return business.owner_id if business is not None else None


def _load_for_caller(session: Session, appointment_id: int, caller: User, allow_customer: bool) -> Appointment:
    appointment = session.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFoundError("Appointment not found")

    is_customer = appointment.user_id == caller.id
    is_owner = _business_owner_id(session, appointment) == caller.id
    if not (is_owner or (allow_customer and is_customer)):
        logger.warning(f"User {caller.id} refused access to appointment {appointment_id}")
        raise AuthorizationError()
    return appointment


def change_status(
    session: Session, appointment_id: int, caller: User, target: AppointmentStatus
) -> Appointment:
    # only the business confirms; either side may cancel
    appointment = _load_for_caller(
        session, appointment_id, caller, allow_customer=(target == CANCELLED)
    )

    current = AppointmentStatus(appointment.status)
    if not can_transition(current, target):
        raise ConflictError(f"Cannot change appointment from {current.value} to {target.value}")

    appointment.status = target.value
    appointment.updated_at = utcnow()
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    logger.info(f"Appointment {appointment_id}: {current.value} -> {target.value} by user {caller.id}")
    return appointment


def delete_appointment(session: Session, appointment_id: int, caller: User):
    appointment = _load_for_caller(session, appointment_id, caller, allow_customer=True)
    session.delete(appointment)
    session.commit()
    logger.info(f"Appointment {appointment_id} deleted by user {caller.id}")


def to_public(
    appointment: Appointment,
    business: Optional[Business] = None,
    customer: Optional[User] = None,
) -> dict:
    data = {
        "id": appointment.id,
        "user_id": appointment.user_id,
        "business_id": appointment.business_id,
        "date": appointment.date,
        "time": appointment.time,
        "status": appointment.status,
        "created_at": appointment.created_at,
        "updated_at": appointment.updated_at,
        "business_name": business.name if business is not None else None,
        "customer": None,
    }
    if customer is not None:
        data["customer"] = {"id": customer.id, "name": customer.name, "email": customer.email}
    return data


def with_business_names(session: Session, appointments: List[Appointment]) -> List[dict]:
    ids = {a.business_id for a in appointments if a.business_id is not None}
    businesses = {}
    if ids:
        businesses = {
            b.id: b for b in session.exec(select(Business).where(col(Business.id).in_(ids))).all()
        }
    return [to_public(a, business=businesses.get(a.business_id)) for a in appointments]


def with_customers(session: Session, appointments: List[Appointment]) -> List[dict]:
    ids = {a.user_id for a in appointments}
    customers = {}
    if ids:
        customers = {u.id: u for u in session.exec(select(User).where(col(User.id).in_(ids))).all()}
    return [to_public(a, customer=customers.get(a.user_id)) for a in appointments]
