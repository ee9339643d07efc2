import logging
from typing import List

from extrovertidos.core.backend import BackendClient
from extrovertidos.core.cache import TTLCache
from extrovertidos.core.cache_config import CACHE_KEYS, INVALIDATION_PATTERNS
from extrovertidos.core.constants import TableEnum
from extrovertidos.core.exceptions import BackendError, NotFoundError
from extrovertidos.schemas.category import Category, CategoryCreate, CategoryUpdate
from extrovertidos.services.role import RoleService

logger = logging.getLogger(__name__)

class CategoryService:
    def __init__(self, backend: BackendClient, cache: TTLCache, roles: RoleService):
        self.backend = backend
        self.cache = cache
        self.roles = roles

    def _invalidate(self) -> None:
        for namespace in INVALIDATION_PATTERNS["category_update"]:
            self.cache.invalidate_namespace(namespace)

    async def get_categories(self) -> List[Category]:
        cached = self.cache.get(CACHE_KEYS["categories"])
        if cached is not None:
            return [category.model_copy() for category in cached]

        result = await self.backend.select(TableEnum.CATEGORIES, {"active": True}, order_by="sort_order")
        if result.error:
            raise BackendError("Could not load categories.", cause=result.error)

        categories = [Category.model_validate(row) for row in result.data]
        self.cache.set(CACHE_KEYS["categories"], categories)
        return [category.model_copy() for category in categories]

    async def create_category(self, category_in: CategoryCreate, actor_id: str) -> Category:
        await self.roles.require_admin(actor_id, "Only administrators can manage categories.")
        result = await self.backend.insert(TableEnum.CATEGORIES, category_in.model_dump())
        if result.error:
            raise BackendError("Could not create category.", cause=result.error)
        self._invalidate()
        return Category.model_validate(result.data)

    async def update_category(self, category_id: str, category_in: CategoryUpdate, actor_id: str) -> Category:
        await self.roles.require_admin(actor_id, "Only administrators can manage categories.")
        result = await self.backend.update(TableEnum.CATEGORIES, category_id, category_in.model_dump(exclude_unset=True))
        if result.error:
            raise BackendError("Could not update category.", cause=result.error)
        if result.data is None:
            raise NotFoundError("Category not found.")
        self._invalidate()
        return Category.model_validate(result.data)
