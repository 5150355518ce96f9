"""Import all models so SQLModel.metadata picks them up."""

from keepy.models.group import Group
from keepy.models.keeper import Keeper
from keepy.models.permit import Permit, PermitCreate, PermitRead
from keepy.models.user import (
    User,
    UserCreate,
    UserPasswordChange,
    UserRead,
    UserRole,
    UserSession,
    UserUpdate,
)

__all__ = [
    "Group",
    "Keeper",
    "Permit",
    "PermitCreate",
    "PermitRead",
    "User",
    "UserCreate",
    "UserPasswordChange",
    "UserRead",
    "UserRole",
    "UserSession",
    "UserUpdate",
]
