import pytest

from extrovertidos.core.backend import QueryResult
from extrovertidos.core.constants import RoleEnum
from extrovertidos.core.exceptions import AuthorizationError, BadRequestError, NotFoundError
from extrovertidos.services.role import RoleService
from tests.helpers.fakes import make_backend


def _roles(role=None, error=None):
    backend = make_backend()
    data = {"role": role} if role is not None else None
    backend.get.return_value = QueryResult(data=data, error=error)
    return RoleService(backend), backend


@pytest.mark.asyncio
@pytest.mark.parametrize("role,is_moderator,is_admin", [
    ("admin", True, True),
    ("moderator", True, False),
    ("user", False, False),
    ("superhero", False, False),
])
async def test_role_checks(role, is_moderator, is_admin):
    roles, _ = _roles(role)

    assert await roles.is_moderator("U1") is is_moderator
    assert await roles.is_admin("U1") is is_admin


@pytest.mark.asyncio
async def test_missing_identity_is_a_plain_user():
    roles, backend = _roles("admin")

    assert await roles.get_user_role(None) == RoleEnum.USER
    backend.get.assert_not_awaited()


@pytest.mark.asyncio
async def test_lookup_failure_is_a_plain_user():
    roles, _ = _roles(error=RuntimeError("boom"))

    assert await roles.get_user_role("U1") == RoleEnum.USER
    with pytest.raises(AuthorizationError):
        await roles.require_moderator("U1")


@pytest.mark.asyncio
async def test_only_admins_change_roles():
    roles, backend = _roles("moderator")

    with pytest.raises(AuthorizationError):
        await roles.update_user_role("U2", "admin", "mod1")
    backend.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_user_role_validates_role():
    roles, backend = _roles("admin")

    with pytest.raises(BadRequestError):
        await roles.update_user_role("U2", "overlord", "admin1")
    backend.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_user_role_unknown_target():
    roles, backend = _roles("admin")
    backend.update.return_value = QueryResult(data=None)

    with pytest.raises(NotFoundError):
        await roles.update_user_role("ghost", "moderator", "admin1")


@pytest.mark.asyncio
async def test_update_user_role_writes_role():
    roles, backend = _roles("admin")
    backend.update.return_value = QueryResult(data={"id": "U2", "role": "moderator", "name": "Ana"})

    profile = await roles.update_user_role("U2", RoleEnum.MODERATOR, "admin1")

    assert profile.role == RoleEnum.MODERATOR
    assert backend.update.await_args.args[2]["role"] == "moderator"
