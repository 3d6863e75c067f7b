# booking_app/routers/users_routes.py

from fastapi import APIRouter, Depends
from sqlmodel import Session

from booking_app.db import get_session
from booking_app.models import User
from booking_app.schemas import UserListResponse, UserRole
from booking_app.auth import get_current_user
from booking_app.deps import require_role
from booking_app.users import list_users

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.get("", response_model=UserListResponse)
def get_users(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    require_role(current_user, UserRole.admin.value)
    return {"success": True, "users": list_users(session)}
