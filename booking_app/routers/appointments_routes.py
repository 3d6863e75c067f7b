# booking_app/routers/appointments_routes.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from booking_app.db import get_session
from booking_app.models import User
from booking_app.schemas import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentStatus,
    MessageResponse,
    StatusFilter,
    status_or_none,
)
from booking_app.auth import get_current_user
from booking_app import appointments

router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


@router.post("", response_model=AppointmentResponse, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    db_appt = appointments.create_appointment(
        session,
        current_user,
        date=appt.date,
        time=appt.time,
        business_id=appt.business_id,
    )
    return {
        "success": True,
        "message": "Appointment booked successfully",
        "appointment": appointments.with_business_names(session, [db_appt])[0],
    }


@router.get("/mine", response_model=AppointmentListResponse)
def list_my_appointments(
    status: Optional[StatusFilter] = StatusFilter.all,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    appts = appointments.list_for_user(session, current_user.id, status_or_none(status))
    return {"success": True, "appointments": appointments.with_business_names(session, appts)}


@router.patch("/{appt_id}/confirm", response_model=AppointmentResponse)
def confirm_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    target = appointments.change_status(session, appt_id, current_user, AppointmentStatus.confirmed)
    return {
        "success": True,
        "message": "Appointment confirmed",
        "appointment": appointments.with_business_names(session, [target])[0],
    }


@router.patch("/{appt_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    target = appointments.change_status(session, appt_id, current_user, AppointmentStatus.cancelled)
    return {
        "success": True,
        "message": "Appointment cancelled",
        "appointment": appointments.with_business_names(session, [target])[0],
    }


@router.delete("/{appt_id}", response_model=MessageResponse)
def delete_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    appointments.delete_appointment(session, appt_id, current_user)
    return {"success": True, "message": "Appointment deleted"}
