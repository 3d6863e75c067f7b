# booking_app/routers/business_routes.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from booking_app.db import get_session
from booking_app.errors import NotFoundError
from booking_app.models import User
from booking_app.schemas import (
    AppointmentListResponse,
    BusinessCreate,
    BusinessCreatedResponse,
    BusinessListResponse,
    BusinessResponse,
    StatusFilter,
    UserRole,
    status_or_none,
)
from booking_app.auth import get_current_user
from booking_app.deps import require_role
from booking_app import appointments, businesses

router = APIRouter(
    prefix="/business",
    tags=["business"],
)


@router.post("", status_code=201, response_model=BusinessCreatedResponse)
def create_business(
    data: BusinessCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    require_role(current_user, UserRole.business_owner.value, UserRole.admin.value)
    business = businesses.create_business(session, current_user, data)
    return {"success": True, "message": "Business created successfully", "business": business}


@router.get("", response_model=BusinessListResponse)
def list_businesses(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    return {"success": True, "businesses": businesses.list_all(session)}


@router.get("/mine", response_model=BusinessResponse)
def get_my_business(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    # no business yet is a normal answer, not a 404
    return {"success": True, "business": businesses.get_owned(session, current_user.id)}


@router.get("/appointments", response_model=AppointmentListResponse)
def get_business_appointments(
    status: Optional[StatusFilter] = StatusFilter.all,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    business = businesses.get_owned(session, current_user.id)
    if business is None:
        raise NotFoundError("Business not found")

    queue = appointments.list_for_business(session, business.id, status_or_none(status))
    return {"success": True, "appointments": appointments.with_customers(session, queue)}
