"""Group model — a named collection of users."""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from keepy.models.base import new_uuid, utcnow


class Group(SQLModel, table=True):
    __tablename__ = "groups"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    name: str = Field(max_length=50, unique=True, nullable=False)
    date_created: datetime = Field(default_factory=utcnow, nullable=False)
