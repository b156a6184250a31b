"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO;
      the age calculation that consumes their records stays sync and pure
"""

from datetime import date
from typing import Protocol

from userapi.core.domain_types import UserId


class UserLike(Protocol):
    """Structural contract for stored user records (ORM rows or test fakes)."""
    id: int
    name: str
    dob: date


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell.

    get_by_id/update raise ResourceNotFoundError for unknown ids;
    storage failures raise DatabaseError. delete of an unknown id is a no-op.
    """
    async def create(self, name: str, dob: date) -> UserLike: ...
    async def get_by_id(self, user_id: UserId) -> UserLike: ...
    async def list(self, limit: int, offset: int) -> list[UserLike]: ...
    async def update(self, user_id: UserId, name: str, dob: date) -> UserLike: ...
    async def delete(self, user_id: UserId) -> None: ...
