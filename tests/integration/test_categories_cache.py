from unittest.mock import patch

import pytest

from extrovertidos.core.exceptions import AuthorizationError
from extrovertidos.schemas.category import CategoryCreate, CategoryUpdate
from extrovertidos.services.category import CategoryService
from extrovertidos.services.role import RoleService


@pytest.mark.asyncio
async def test_categories_are_cached_until_an_admin_changes_them(backend, cache, admin):
    categories = CategoryService(backend, cache, RoleService(backend))
    music = await categories.create_category(CategoryCreate(name="Música", sort_order=2), admin.id)
    await categories.create_category(CategoryCreate(name="Teatro", sort_order=1), admin.id)
    await categories.create_category(CategoryCreate(name="Oculta", active=False), admin.id)

    with patch.object(backend, "select", wraps=backend.select) as select_spy:
        first = await categories.get_categories()
        second = await categories.get_categories()
        assert select_spy.call_count == 1

    assert [category.name for category in first] == ["Teatro", "Música"]
    assert second == first

    await categories.update_category(music.id, CategoryUpdate(sort_order=0), admin.id)
    assert cache.get("categories") is None

    refreshed = await categories.get_categories()
    assert [category.name for category in refreshed] == ["Música", "Teatro"]


@pytest.mark.asyncio
async def test_only_admins_manage_categories(backend, cache, moderator):
    categories = CategoryService(backend, cache, RoleService(backend))

    with pytest.raises(AuthorizationError):
        await categories.create_category(CategoryCreate(name="Deportes"), moderator.id)


@pytest.mark.asyncio
async def test_cached_categories_are_handed_out_as_copies(backend, cache, admin):
    categories = CategoryService(backend, cache, RoleService(backend))
    await categories.create_category(CategoryCreate(name="Música"), admin.id)

    listed = await categories.get_categories()
    listed[0].name = "Cambiado"
    listed.clear()

    assert [category.name for category in await categories.get_categories()] == ["Música"]
