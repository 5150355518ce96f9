"""Account service — signup, login and lifecycle of user accounts.

Sits on top of the user store and password hasher. Store errors pass through
unchanged, except that unique-constraint failures on signup and profile
updates become DuplicateAccount and every login failure is one AuthFailure.
"""

from __future__ import annotations

import logging
import uuid

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from keepy.core.exceptions import AuthFailure, ConstraintViolation, DuplicateAccount, NotFound
from keepy.core.security import PasswordHasher
from keepy.models.base import utcnow
from keepy.models.user import (
    UserCreate,
    UserPasswordChange,
    UserRead,
    UserRole,
    UserSession,
    UserUpdate,
)
from keepy.stores.users import UserStore

logger = logging.getLogger(__name__)

AUTH_FAILURE_MESSAGE = "Invalid email or password"


class AccountService:
    def __init__(self, session: AsyncSession, hasher: PasswordHasher | None = None) -> None:
        self.hasher = hasher or PasswordHasher()
        self.users = UserStore(session, self.hasher)

    async def sign_up(
        self,
        name: str,
        password: str,
        email: str,
        role: UserRole = UserRole.BASIC,
    ) -> UserRead:
        """Create an account. Raises DuplicateAccount if the name or email is taken."""
        body = UserCreate(name=name, password=password, email=email, role=role)
        try:
            user_id = await self.users.create(
                name=body.name,
                password=body.password,
                email=body.email,
                role=body.role,
            )
        except ConstraintViolation as exc:
            raise DuplicateAccount() from exc
        return await self.get_user(user_id)

    async def authenticate(self, email: str, password: str) -> UserRead:
        """Check credentials and stamp the login time.

        Raises the same AuthFailure for an unknown email, a malformed email
        and a wrong password.
        """
        try:
            credentials = UserSession(email=email, password=password)
        except ValidationError:
            self.hasher.dummy_verify()
            raise AuthFailure(AUTH_FAILURE_MESSAGE) from None

        user = await self.users.read_by_email(credentials.email)
        if user is None:
            self.hasher.dummy_verify()
            logger.warning("Login failed: unknown account")
            raise AuthFailure(AUTH_FAILURE_MESSAGE)

        if not self.hasher.verify(credentials.password, user.password):
            logger.warning("Login failed for user %s", user.id)
            raise AuthFailure(AUTH_FAILURE_MESSAGE)

        if self.hasher.needs_rehash(user.password):
            await self.users.update_password(user.id, credentials.password)
            logger.info("Upgraded password hash for user %s", user.id)

        await self.users.update(user.id, date_last_login=utcnow())
        return await self.get_user(user.id)

    async def get_user(self, user_id: uuid.UUID) -> UserRead:
        user = await self.users.read_by_id(user_id)
        if user is None:
            raise NotFound("User not found")
        return UserRead.model_validate(user)

    async def list_users(self) -> list[UserRead]:
        return [UserRead.model_validate(u) for u in await self.users.read_all()]

    async def update_profile(self, user_id: uuid.UUID, body: UserUpdate) -> UserRead:
        """Apply the fields set on ``body``; the rest keep their value."""
        try:
            found = await self.users.update(
                user_id,
                name=body.name,
                email=body.email,
                date_activated=body.date_activated,
                date_last_login=body.date_last_login,
            )
        except ConstraintViolation as exc:
            raise DuplicateAccount() from exc
        if not found:
            raise NotFound("User not found")
        return await self.get_user(user_id)

    async def activate(self, user_id: uuid.UUID) -> bool:
        return await self.users.update(user_id, date_activated=utcnow())

    async def change_password(self, user_id: uuid.UUID, new_password: str) -> bool:
        body = UserPasswordChange(password=new_password)
        return await self.users.update_password(user_id, body.password)

    async def delete_account(self, user_id: uuid.UUID) -> bool:
        """Hard-delete the account. False if it was already gone."""
        return await self.users.delete_by_id(user_id)
