"""
Category service - category list with derived active-listing counts, cached in Redis.
"""

from aubazaar.cache.redis_client import Cache
from aubazaar.db.repositories.category_repository import CategoryRepository
from aubazaar.schemas.category import CategoryList, CategoryResponse

CATEGORY_COUNTS_KEY = "categories:counts"


class CategoryService:
    def __init__(self, category_repo: CategoryRepository, cache: Cache):
        self.category_repo = category_repo
        self.cache = cache

    async def list_categories(self) -> CategoryList:
        cached = await self.cache.get_json(CATEGORY_COUNTS_KEY)
        if cached is not None:
            return CategoryList(categories=[CategoryResponse(**c) for c in cached])

        rows = await self.category_repo.list_with_active_counts()
        categories = [
            CategoryResponse(
                id=category.id,
                name=category.name,
                icon=category.icon,
                description=category.description,
                count=count,
            )
            for category, count in rows
        ]
        await self.cache.set_json(CATEGORY_COUNTS_KEY, [c.model_dump() for c in categories])
        return CategoryList(categories=categories)
