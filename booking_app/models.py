# booking_app/models.py

from typing import Optional
from datetime import datetime, date as Date, timezone

from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    password_hash: str
    role: str = "customer"  # customer, business-owner or admin
    # bumped on logout; tokens carrying an older value are rejected
    session_version: int = 0
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Business(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # unique: a user owns at most one business
    owner_id: int = Field(foreign_key="user.id", unique=True, index=True)
    name: str
    description: Optional[str] = None
    operating_hours: str
    category: str = "other"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Appointment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="user.id", index=True)
    business_id: Optional[int] = Field(default=None, foreign_key="business.id", index=True)
    date: Date
    time: str  # zero-padded HH:MM
    status: str = "pending"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
