"""User Service — age enrichment and unchanged error propagation.

Invariants:
    - Every response carries age computed against the injected clock
    - list_users returns [] when the repository is empty
    - Repository errors reach the caller as the same exception object
"""

from datetime import date

import pytest

from userapi.core.age import calculate_age
from userapi.core.errors import DatabaseError, ResourceNotFoundError
from userapi.services.user_service import UserService

from tests.services.fake_user_repository import FailingUserRepository, FakeUserRepository

TODAY = date(2026, 10, 19)


@pytest.fixture
def repo():
    return FakeUserRepository()


@pytest.fixture
def service(repo):
    return UserService(repo, today=lambda: TODAY)


async def test_create_user_enriches_with_age(service):
    user = await service.create_user("Ada", date(1990, 12, 1))
    assert user.id == 1
    assert user.name == "Ada"
    assert user.dob == date(1990, 12, 1)
    assert user.age == 35


async def test_get_user_matches_created_record(service):
    created = await service.create_user("Grace", date(1906, 12, 9))
    fetched = await service.get_user(created.id)
    assert fetched == created
    assert fetched.age == calculate_age(date(1906, 12, 9), TODAY)


async def test_age_follows_the_clock(repo):
    await repo.create("Linus", date(1969, 12, 28))
    before = UserService(repo, today=lambda: date(2026, 12, 27))
    after = UserService(repo, today=lambda: date(2026, 12, 28))
    assert (await before.get_user(1)).age == 56
    assert (await after.get_user(1)).age == 57


async def test_list_users_empty_returns_empty_list(service):
    users = await service.list_users(20, 0)
    assert users == []


async def test_list_users_maps_every_record(service):
    await service.create_user("Ada", date(2000, 1, 1))
    await service.create_user("Bob", date(2010, 6, 30))
    users = await service.list_users(20, 0)
    assert [u.name for u in users] == ["Ada", "Bob"]
    assert [u.age for u in users] == [26, 16]


async def test_list_users_passes_paging_through(service, repo):
    for i in range(5):
        await service.create_user(f"user-{i}", date(2000, 1, 1))
    users = await service.list_users(2, 1)
    assert [u.id for u in users] == [2, 3]


async def test_update_user_returns_new_values(service):
    created = await service.create_user("Ada", date(2000, 1, 1))
    updated = await service.update_user(created.id, "Ada L.", date(1999, 1, 1))
    assert updated.id == created.id
    assert updated.name == "Ada L."
    assert updated.age == 27


async def test_delete_user_delegates(service, repo):
    created = await service.create_user("Ada", date(2000, 1, 1))
    await service.delete_user(created.id)
    assert created.id not in repo.rows


async def test_not_found_propagates_unchanged(service):
    with pytest.raises(ResourceNotFoundError):
        await service.get_user(99)
    with pytest.raises(ResourceNotFoundError):
        await service.update_user(99, "Nobody", date(2000, 1, 1))


@pytest.mark.parametrize("call", [
    lambda s: s.create_user("Ada", date(2000, 1, 1)),
    lambda s: s.get_user(1),
    lambda s: s.list_users(20, 0),
    lambda s: s.update_user(1, "Ada", date(2000, 1, 1)),
    lambda s: s.delete_user(1),
])
async def test_storage_errors_propagate_as_same_object(call):
    error = DatabaseError("Connection or operational error", "execute")
    service = UserService(FailingUserRepository(error), today=lambda: TODAY)
    with pytest.raises(DatabaseError) as exc_info:
        await call(service)
    assert exc_info.value is error
