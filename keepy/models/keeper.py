"""Keeper model — a stored file that permits grant access to."""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from keepy.models.base import new_uuid, utcnow


class Keeper(SQLModel, table=True):
    __tablename__ = "keepers"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    filename: str = Field(nullable=False)
    date_uploaded: datetime = Field(default_factory=utcnow, nullable=False)
    user_posted: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL"
    )
