"""User model — login credentials plus lifecycle timestamps."""

import uuid
from datetime import datetime
from enum import StrEnum

from pydantic import EmailStr
from sqlmodel import Field, SQLModel

from keepy.models.base import new_uuid, utcnow


class UserRole(StrEnum):
    BASIC = "basic"
    MANAGER = "manager"
    ADMIN = "admin"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    name: str = Field(max_length=50, unique=True, nullable=False, index=True)

    # Salted hash only — the plaintext never reaches the database
    password: str = Field(nullable=False)

    email: str = Field(max_length=320, unique=True, nullable=False, index=True)
    role: UserRole = Field(default=UserRole.BASIC)
    date_created: datetime = Field(default_factory=utcnow, nullable=False)
    date_activated: datetime | None = Field(default=None)
    date_last_login: datetime | None = Field(default=None)


# ── Pydantic schemas ─────────────────────────────────────────

class UserCreate(SQLModel):
    name: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=8, max_length=128)
    email: EmailStr
    role: UserRole = UserRole.BASIC


class UserUpdate(SQLModel):
    """Partial update — omitted fields keep their stored value."""
    name: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    date_activated: datetime | None = None
    date_last_login: datetime | None = None


class UserPasswordChange(SQLModel):
    password: str = Field(min_length=8, max_length=128)


class UserSession(SQLModel):
    """Credentials presented at login."""
    email: EmailStr
    password: str


class UserRead(SQLModel):
    """Returned to callers — never includes the password hash."""
    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    date_created: datetime
    date_activated: datetime | None
    date_last_login: datetime | None
