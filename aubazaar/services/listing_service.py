"""
Listing catalog service - create, browse, detail and status changes.
Keeps controllers thin; repositories hold the queries.
"""

import logging
import math

from aubazaar.cache.redis_client import Cache
from aubazaar.core.exceptions import Forbidden, NotFound
from aubazaar.db.models.listing import Listing, ListingStatus
from aubazaar.db.repositories.listing_repository import ListingFilters, ListingRepository
from aubazaar.schemas.listing import (
    ListingCreate,
    ListingDetail,
    ListingDetailResponse,
    ListingPage,
    ListingResponse,
    Pagination,
)
from aubazaar.services.category_service import CATEGORY_COUNTS_KEY

logger = logging.getLogger(__name__)

SIMILAR_LIMIT = 4


def _listing_to_response(listing: Listing) -> ListingResponse:
    """Map model to API response with seller display name."""
    resp = ListingResponse.model_validate(listing)
    resp.seller_name = listing.seller.full_name if listing.seller else None
    return resp


def _listing_to_detail(listing: Listing) -> ListingDetail:
    seller = listing.seller
    return ListingDetail(
        **_listing_to_response(listing).model_dump(),
        seller_email=seller.email,
        seller_phone=seller.phone,
        seller_department=seller.department,
        seller_avatar=seller.avatar_url,
    )


def clamp_page(page: int, limit: int, max_limit: int) -> tuple[int, int]:
    """Page and limit forced to positive integers; limit capped at max_limit."""
    return max(1, page), min(max(1, limit), max_limit)


class ListingService:
    def __init__(self, listing_repo: ListingRepository, cache: Cache):
        self.listing_repo = listing_repo
        self.cache = cache

    async def create(self, user_id: int, data: ListingCreate, images: list[str]) -> ListingResponse:
        listing = Listing(
            user_id=user_id,
            title=data.title,
            description=data.description,
            price=data.price,
            category=data.category,
            condition=data.condition.value,
            location=data.location,
            status=ListingStatus.ACTIVE.value,
            images=list(images),
            view_count=0,
        )
        listing = await self.listing_repo.add(listing)
        # Counts are recomputed by other requests, so drop the key only once the row is visible
        await self.listing_repo.commit()
        await self.cache.delete(CATEGORY_COUNTS_KEY)
        logger.info("Listing id=%s created by user id=%s", listing.id, user_id)
        # Reload with seller so the response carries the display name
        listing = await self.listing_repo.get_by_id_with_seller(listing.id)
        return _listing_to_response(listing)

    async def list_listings(self, filters: ListingFilters, page: int, limit: int, max_limit: int) -> ListingPage:
        """Active listings matching all filters, newest first, with pagination metadata."""
        page, limit = clamp_page(page, limit, max_limit)
        listings = await self.listing_repo.search(filters, offset=(page - 1) * limit, limit=limit)
        total = await self.listing_repo.count(filters)
        return ListingPage(
            listings=[_listing_to_response(l) for l in listings],
            pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
        )

    async def get_detail(self, id: int) -> ListingDetailResponse:
        """Count a view, then return the listing with seller contact and similar listings.

        The increment and the read are separate statements, so under concurrent
        views the returned count may lag by the views that landed in between.
        """
        await self.listing_repo.increment_views(id)
        listing = await self.listing_repo.get_by_id_with_seller(id)
        if not listing:
            raise NotFound("Listing not found")
        similar = await self.listing_repo.similar(listing, limit=SIMILAR_LIMIT)
        return ListingDetailResponse(
            listing=_listing_to_detail(listing),
            similar=[_listing_to_response(l) for l in similar],
        )

    async def update_status(self, user_id: int, id: int, status: ListingStatus) -> ListingResponse:
        """Owner-only status transition (mark sold, remove, relist)."""
        listing = await self.listing_repo.get_by_id_with_seller(id)
        if not listing:
            raise NotFound("Listing not found")
        if listing.user_id != user_id:
            raise Forbidden("You can only change your own listings")
        listing.status = status.value
        await self.listing_repo.save(listing)
        await self.listing_repo.commit()
        await self.cache.delete(CATEGORY_COUNTS_KEY)
        logger.info("Listing id=%s status set to %s", id, status.value)
        listing = await self.listing_repo.get_by_id_with_seller(id)
        return _listing_to_response(listing)
