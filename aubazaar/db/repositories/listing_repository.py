"""
Listing repository - catalog queries, filtering and counters.
Filters are built from SQLAlchemy expressions only, so every user value is a bound parameter.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.orm import selectinload

from aubazaar.db.models.listing import Listing, ListingStatus
from aubazaar.db.repositories.base_repository import BaseRepository


@dataclass(frozen=True)
class ListingFilters:
    """Catalog filters. Every supplied field narrows the result (conjunctive)."""

    category: str | None = None
    search: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    condition: str | None = None

    def apply(self, stmt: Select) -> Select:
        stmt = stmt.where(Listing.status == ListingStatus.ACTIVE.value)
        if self.category:
            stmt = stmt.where(Listing.category == self.category)
        if self.search:
            stmt = stmt.where(
                or_(
                    Listing.title.icontains(self.search, autoescape=True),
                    Listing.description.icontains(self.search, autoescape=True),
                )
            )
        if self.min_price is not None:
            stmt = stmt.where(Listing.price >= self.min_price)
        if self.max_price is not None:
            stmt = stmt.where(Listing.price <= self.max_price)
        if self.condition:
            stmt = stmt.where(Listing.condition == self.condition)
        return stmt


def _newest_first(stmt: Select) -> Select:
    return stmt.order_by(Listing.created_at.desc(), Listing.id.desc())


class ListingRepository(BaseRepository[Listing]):
    """Listing-specific queries. Seller is eager-loaded to avoid lazy loads in async code."""

    def __init__(self, session):
        super().__init__(session, Listing)

    async def get_by_id_with_seller(self, id: int) -> Listing | None:
        result = await self.session.execute(
            select(Listing)
            .where(Listing.id == id)
            .options(selectinload(Listing.seller))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def search(self, filters: ListingFilters, *, offset: int, limit: int) -> list[Listing]:
        stmt = filters.apply(select(Listing).options(selectinload(Listing.seller)))
        stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(_newest_first(stmt).offset(offset).limit(limit))
        return list(result.scalars().all())

    async def count(self, filters: ListingFilters) -> int:
        result = await self.session.execute(filters.apply(select(func.count(Listing.id))))
        return result.scalar_one()

    async def increment_views(self, id: int) -> None:
        """Bump the view counter in the store. Not atomic with a following read."""
        await self.session.execute(
            update(Listing)
            .where(Listing.id == id)
            .values(view_count=Listing.view_count + 1)
            .execution_options(synchronize_session=False)
        )

    async def similar(self, listing: Listing, limit: int = 4) -> list[Listing]:
        """Active listings in the same category, excluding the listing itself."""
        stmt = (
            select(Listing)
            .where(
                Listing.category == listing.category,
                Listing.id != listing.id,
                Listing.status == ListingStatus.ACTIVE.value,
            )
            .options(selectinload(Listing.seller))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(_newest_first(stmt).limit(limit))
        return list(result.scalars().all())

    async def list_for_owner(self, user_id: int) -> list[Listing]:
        result = await self.session.execute(
            _newest_first(select(Listing).where(Listing.user_id == user_id))
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def count_for_owner(self, user_id: int, status: ListingStatus) -> int:
        result = await self.session.execute(
            select(func.count(Listing.id)).where(Listing.user_id == user_id, Listing.status == status.value)
        )
        return result.scalar_one()

    async def total_views_for_owner(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.coalesce(func.sum(Listing.view_count), 0)).where(Listing.user_id == user_id)
        )
        return int(result.scalar_one())
