"""
Category repository - categories with their derived active-listing counts.
"""

from sqlalchemy import and_, func, select

from aubazaar.db.models.category import Category
from aubazaar.db.models.listing import Listing, ListingStatus
from aubazaar.db.repositories.base_repository import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    def __init__(self, session):
        super().__init__(session, Category)

    async def list_with_active_counts(self) -> list[tuple[Category, int]]:
        """All categories by name, each with its active listing count (one grouped query)."""
        result = await self.session.execute(
            select(Category, func.count(Listing.id))
            .outerjoin(
                Listing,
                and_(Listing.category == Category.name, Listing.status == ListingStatus.ACTIVE.value),
            )
            .group_by(Category.id)
            .order_by(Category.name)
        )
        return [(category, count) for category, count in result.all()]
