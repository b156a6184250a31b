"""User Service — orchestrates repository calls and age enrichment per use case.

Invariants:
    - Stateless: holds only the injected repository and clock
    - Every returned record carries age = calculate_age(dob, today())
    - Repository errors propagate unchanged (no translation, no retries)
    - list_users returns [] (never None) when the repository has no rows

Design Decisions:
    - Clock injected as a callable: tests pin "today" without patching datetime
"""

from datetime import date
from typing import Callable

from userapi.core.age import calculate_age
from userapi.core.domain_types import UserId
from userapi.core.repository_protocols import UserLike, UserRepository
from userapi.schemas.user import UserResponse


class UserService:
    """One method per use case; maps storage records to UserResponse."""

    def __init__(
        self,
        repository: UserRepository,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.today = today

    async def create_user(self, name: str, dob: date) -> UserResponse:
        user = await self.repository.create(name, dob)
        return self._to_response(user)

    async def get_user(self, user_id: UserId) -> UserResponse:
        user = await self.repository.get_by_id(user_id)
        return self._to_response(user)

    async def list_users(self, limit: int, offset: int) -> list[UserResponse]:
        users = await self.repository.list(limit, offset)
        return [self._to_response(u) for u in users]

    async def update_user(
        self, user_id: UserId, name: str, dob: date,
    ) -> UserResponse:
        user = await self.repository.update(user_id, name, dob)
        return self._to_response(user)

    async def delete_user(self, user_id: UserId) -> None:
        await self.repository.delete(user_id)

    def _to_response(self, user: UserLike) -> UserResponse:
        return UserResponse(
            id=user.id,
            name=user.name,
            dob=user.dob,
            age=calculate_age(user.dob, self.today()),
        )
