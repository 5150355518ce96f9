"""Permit store — access grants linking a keeper to a user or a group.

Grants are immutable: revoke (delete) and create again instead of updating.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from keepy.core.exceptions import ConstraintViolation
from keepy.models.permit import Permit
from keepy.stores.base import translate_errors

logger = logging.getLogger(__name__)


class PermitStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        keeper_id: uuid.UUID,
        user_id: uuid.UUID | None = None,
        group_id: uuid.UUID | None = None,
    ) -> uuid.UUID:
        if user_id is not None and group_id is not None:
            raise ConstraintViolation("A permit is scoped to a user or a group, not both")

        permit = Permit(keeper_id=keeper_id, user_id=user_id, group_id=group_id)
        async with translate_errors(self.session, "permit create"):
            self.session.add(permit)
            await self.session.commit()
        logger.info("Granted permit %s on keeper %s", permit.id, keeper_id)
        return permit.id

    async def read_by_id(self, permit_id: uuid.UUID) -> Permit | None:
        async with translate_errors(self.session, "permit read"):
            return await self.session.get(Permit, permit_id)

    async def read_by_keeper_id(self, keeper_id: uuid.UUID) -> list[Permit]:
        return await self._read_where(Permit.keeper_id == keeper_id)

    async def read_by_user_id(self, user_id: uuid.UUID) -> list[Permit]:
        return await self._read_where(Permit.user_id == user_id)

    async def read_by_group_id(self, group_id: uuid.UUID) -> list[Permit]:
        return await self._read_where(Permit.group_id == group_id)

    async def delete_by_id(self, permit_id: uuid.UUID) -> bool:
        async with translate_errors(self.session, "permit delete"):
            permit = await self.session.get(Permit, permit_id)
            if permit is None:
                return False
            await self.session.delete(permit)
            await self.session.commit()
        logger.info("Revoked permit %s", permit_id)
        return True

    async def _read_where(self, condition) -> list[Permit]:
        stmt = select(Permit).where(condition)
        async with translate_errors(self.session, "permit read"):
            result = await self.session.execute(stmt)
        return list(result.scalars().all())
