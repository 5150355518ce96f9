"""Permit model — grants a user or a group access to one keeper."""

import uuid

from pydantic import model_validator
from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from keepy.models.base import new_uuid


class Permit(SQLModel, table=True):
    __tablename__ = "permits"
    __table_args__ = (
        CheckConstraint(
            "user_id IS NULL OR group_id IS NULL",
            name="ck_permits_single_scope",
        ),
    )

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    keeper_id: uuid.UUID = Field(
        foreign_key="keepers.id", ondelete="CASCADE", nullable=False, index=True
    )
    user_id: uuid.UUID | None = Field(
        default=None, foreign_key="users.id", ondelete="CASCADE", index=True
    )
    group_id: uuid.UUID | None = Field(
        default=None, foreign_key="groups.id", ondelete="CASCADE", index=True
    )


# ── Pydantic schemas ─────────────────────────────────────────

class PermitCreate(SQLModel):
    keeper_id: uuid.UUID
    user_id: uuid.UUID | None = None
    group_id: uuid.UUID | None = None

    @model_validator(mode="after")
    def _single_scope(self) -> "PermitCreate":
        if self.user_id is not None and self.group_id is not None:
            raise ValueError("A permit is scoped to a user or a group, not both")
        return self


class PermitRead(SQLModel):
    id: uuid.UUID
    keeper_id: uuid.UUID
    user_id: uuid.UUID | None
    group_id: uuid.UUID | None
