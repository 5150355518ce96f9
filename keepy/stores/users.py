"""User store — persistence for user records.

Passwords are hashed here, before anything reaches the database, so the
storage engine never sees plaintext. Name and email uniqueness is left to
the database's unique constraints.
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from keepy.core.security import PasswordHasher
from keepy.models.base import as_utc, utcnow
from keepy.models.user import User, UserRole
from keepy.stores.base import translate_errors

logger = logging.getLogger(__name__)

# Columns count_by_field may filter on. Anything else is refused outright.
COUNTABLE_FIELDS = {
    "name": User.name,
    "email": User.email,
    "role": User.role,
}


class UserStore:
    def __init__(self, session: AsyncSession, hasher: PasswordHasher) -> None:
        self.session = session
        self.hasher = hasher

    async def create(
        self,
        name: str,
        password: str,
        email: str,
        date_created: datetime | None = None,
        role: UserRole = UserRole.BASIC,
    ) -> uuid.UUID:
        """Insert a user, hashing ``password``. Raises ConstraintViolation on duplicates."""
        user = User(
            name=name,
            password=self.hasher.hash(password),
            email=email,
            role=role,
            date_created=as_utc(date_created) or utcnow(),
        )
        async with translate_errors(self.session, "user create"):
            self.session.add(user)
            await self.session.commit()
        logger.info("Created user %s", user.id)
        return user.id

    async def read_all(self) -> list[User]:
        stmt = select(User).order_by(User.name.asc())  # type: ignore[union-attr]
        async with translate_errors(self.session, "user read"):
            result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def read_by_id(self, user_id: uuid.UUID) -> User | None:
        async with translate_errors(self.session, "user read"):
            return await self.session.get(User, user_id)

    async def read_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        async with translate_errors(self.session, "user read"):
            result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_by_field(self, field: str | None = None, value: str | None = None) -> int:
        """Count users whose ``field`` equals ``value``; ``field`` must be allowlisted.

        With no field every user is counted.
        """
        stmt = select(func.count()).select_from(User)
        if field is not None:
            column = COUNTABLE_FIELDS.get(field)
            if column is None:
                raise ValueError(f"Cannot count users by field '{field}'")
            if field == "role":
                value = UserRole(value)
            stmt = stmt.where(column == value)

        async with translate_errors(self.session, "user count"):
            result = await self.session.execute(stmt)
        return result.scalar_one()

    async def update(
        self,
        user_id: uuid.UUID,
        name: str | None = None,
        email: str | None = None,
        date_activated: datetime | None = None,
        date_last_login: datetime | None = None,
    ) -> bool:
        """Partial update; ``None`` keeps the stored value. False if no such user."""
        changes = {
            "name": name,
            "email": email,
            "date_activated": as_utc(date_activated),
            "date_last_login": as_utc(date_last_login),
        }
        async with translate_errors(self.session, "user update"):
            user = await self.session.get(User, user_id)
            if user is None:
                return False
            for field, value in changes.items():
                if value is not None:
                    setattr(user, field, value)
            self.session.add(user)
            await self.session.commit()
        return True

    async def update_password(self, user_id: uuid.UUID, password: str) -> bool:
        async with translate_errors(self.session, "user password update"):
            user = await self.session.get(User, user_id)
            if user is None:
                return False
            user.password = self.hasher.hash(password)
            self.session.add(user)
            await self.session.commit()
        return True

    async def delete_by_id(self, user_id: uuid.UUID) -> bool:
        async with translate_errors(self.session, "user delete"):
            user = await self.session.get(User, user_id)
            if user is None:
                return False
            await self.session.delete(user)
            await self.session.commit()
        logger.info("Deleted user %s", user_id)
        return True
