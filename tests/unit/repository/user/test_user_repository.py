import pytest
from sqlalchemy.ext.asyncio import AsyncSession
from usermanagement.models.user import User
from usermanagement.repositories import user as user_repo


def _user(user_name: str, email: str, status: str = "A") -> User:
    return User(
        user_name=user_name,
        first_name="Unit",
        last_name="Test",
        email=email,
        user_status=status,
        department=None,
    )


@pytest.mark.asyncio
@pytest.mark.unit
async def test_user_create_and_get(db_session: AsyncSession):
    created = await user_repo.create(db_session, _user("unituser", "unit_user@example.com"))
    assert created.id is not None
    assert created.created_at is not None and created.updated_at is not None
    fetched = await user_repo.get_by_id(db_session, created.id)
    assert fetched is not None and fetched.email == "unit_user@example.com"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_user_list_all_ordered_by_id(db_session: AsyncSession):
    for name in ["zulu", "yankee"]:
        await user_repo.create(db_session, _user(f"{name}user", f"{name}@u.com"))
    users = await user_repo.list_all(db_session)
    assert [u.user_name for u in users] == ["zuluuser", "yankeeuser"]
    assert users[0].id < users[1].id


@pytest.mark.asyncio
@pytest.mark.unit
async def test_get_by_id_missing(db_session: AsyncSession):
    assert await user_repo.get_by_id(db_session, 987654) is None


@pytest.mark.asyncio
@pytest.mark.unit
async def test_update_writes_row(db_session: AsyncSession):
    user = await user_repo.create(db_session, _user("beforename", "before@u.com"))
    user.user_name = "aftername"
    user.department = "Ops"
    await user_repo.update(db_session, user)
    db_session.expunge_all()
    fetched = await user_repo.get_by_id(db_session, user.id)
    assert fetched.user_name == "aftername"
    assert fetched.department == "Ops"
