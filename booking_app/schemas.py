# booking_app/schemas.py

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, validate_email
from enum import Enum
from datetime import datetime, date
from typing import Annotated, List, Optional

from .core import normalize_time


class UserRole(str, Enum):
    customer = "customer"
    business_owner = "business-owner"
    admin = "admin"


class BusinessCategory(str, Enum):
    barber = "barber"
    restaurant = "restaurant"
    shows = "shows"
    other = "other"


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"


class StatusFilter(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    all = "all"


def status_or_none(status: Optional[StatusFilter]) -> Optional[AppointmentStatus]:
    if status is None or status == StatusFilter.all:
        return None
    return AppointmentStatus(status.value)


def checked_email(value: str) -> str:
    # validate the address but keep it exactly as submitted
    validate_email(value)
    return value


Email = Annotated[str, AfterValidator(checked_email)]


# ---- users / auth ----

class UserCreate(BaseModel):
    name: str = Field(min_length=2)
    email: Email
    password: str = Field(min_length=8, max_length=72)
    role: UserRole = UserRole.customer

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not any(c.isdigit() for c in value):
            raise ValueError("Password must contain at least one number")
        if not any(c.isupper() for c in value):
            raise ValueError("Password must contain at least one uppercase letter")
        return value

    @field_validator("role")
    @classmethod
    def no_self_made_admins(cls, value: UserRole) -> UserRole:
        if value == UserRole.admin:
            raise ValueError("Role must be 'customer' or 'business-owner'")
        return value


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=8)


class UserPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime


class UserResponse(BaseModel):
    success: bool = True
    user: UserPublic


class UserSessionResponse(UserResponse):
    message: str


class UserListResponse(BaseModel):
    success: bool = True
    users: List[UserPublic]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# ---- businesses ----

class BusinessCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    operating_hours: str = Field(min_length=1)
    category: BusinessCategory = BusinessCategory.other

    @field_validator("name", "description", "operating_hours", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("category", mode="before")
    @classmethod
    def default_category(cls, value):
        return BusinessCategory.other if value is None else value


class BusinessPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    description: Optional[str] = None
    operating_hours: str
    category: BusinessCategory
    created_at: datetime
    updated_at: datetime


class BusinessListing(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    category: BusinessCategory
    operating_hours: str
    owner_id: int


class BusinessResponse(BaseModel):
    success: bool = True
    business: Optional[BusinessPublic]


class BusinessCreatedResponse(BusinessResponse):
    message: str


class BusinessListResponse(BaseModel):
    success: bool = True
    businesses: List[BusinessListing]


# ---- appointments ----

class AppointmentCreate(BaseModel):
    date: date
    time: str
    business_id: Optional[int] = None

    @field_validator("time")
    @classmethod
    def zero_padded_time(cls, value: str) -> str:
        return normalize_time(value)


class CustomerSummary(BaseModel):
    id: int
    name: str
    email: str


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    business_id: Optional[int] = None
    date: date
    time: str
    status: AppointmentStatus
    created_at: datetime
    updated_at: datetime
    business_name: Optional[str] = None
    customer: Optional[CustomerSummary] = None


class AppointmentResponse(BaseModel):
    success: bool = True
    message: str
    appointment: AppointmentPublic


class AppointmentListResponse(BaseModel):
    success: bool = True
    appointments: List[AppointmentPublic]
