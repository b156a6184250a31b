"""User Repository — SQLAlchemy implementation of the UserRepository protocol.

Invariants:
    - One storage statement per call, committed before returning (update uses UPDATE ... RETURNING)
    - Unknown id on get/update raises ResourceNotFoundError
    - Unknown id on delete is a no-op (zero rows affected is success)
    - Any SQLAlchemy failure is rolled back and raised as DatabaseError; no retries
    - list() orders by primary key (insertion order)
"""

import logging
from datetime import date

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.core.domain_types import UserId
from userapi.core.errors import ResourceNotFoundError
from userapi.infrastructure.database import translate_db_errors
from userapi.models.user import User

logger = logging.getLogger(__name__)


class SqlAlchemyUserRepository:
    """User persistence over an AsyncSession (one session per request)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, dob: date) -> User:
        user = User(name=name, dob=dob)
        async with translate_db_errors(self.db, "create"):
            self.db.add(user)
            await self.db.commit()
        logger.debug(f"User {user.id} created", extra={"user_id": user.id})
        return user

    async def get_by_id(self, user_id: UserId) -> User:
        async with translate_db_errors(self.db, "get"):
            user = await self._select_one(user_id)
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        return user

    async def list(self, limit: int, offset: int) -> list[User]:
        query = select(User).order_by(User.id).limit(limit).offset(offset)
        async with translate_db_errors(self.db, "list"):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def update(self, user_id: UserId, name: str, dob: date) -> User:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(name=name, dob=dob)
            .returning(User)
            .execution_options(populate_existing=True)
        )
        async with translate_db_errors(self.db, "update"):
            result = await self.db.execute(stmt)
            user = result.scalar_one_or_none()
            await self.db.commit()
        if user is None:
            raise ResourceNotFoundError("User", str(user_id))
        return user

    async def delete(self, user_id: UserId) -> None:
        async with translate_db_errors(self.db, "delete"):
            result = await self.db.execute(
                delete(User).where(User.id == user_id),
            )
            await self.db.commit()
        if result.rowcount == 0:
            logger.info(
                f"Delete of unknown user {user_id} ignored",
                extra={"user_id": user_id},
            )

    async def _select_one(self, user_id: UserId) -> User | None:
        result = await self.db.execute(
            select(User).where(User.id == user_id),
        )
        return result.scalar_one_or_none()
