"""
Listing endpoints - catalog browse, detail, create (multipart with images) and status.
Thin controller; ListingService holds the business logic.
"""

from decimal import Decimal

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from aubazaar.core.dependencies import Context, CurrentIdentity
from aubazaar.core.exceptions import InvalidInput
from aubazaar.db.models.listing import ListingCondition
from aubazaar.db.repositories.listing_repository import ListingFilters, ListingRepository
from aubazaar.db.session import DbSession
from aubazaar.schemas.listing import (
    ListingCreate,
    ListingCreated,
    ListingDetailResponse,
    ListingPage,
    ListingResponse,
    ListingStatusUpdate,
)
from aubazaar.services.listing_service import ListingService

router = APIRouter()

# Keeps the page offset inside the store's 64-bit integer range
MAX_PAGE = 1_000_000


def _get_listing_service(session: DbSession, ctx: Context) -> ListingService:
    return ListingService(ListingRepository(session), ctx.cache)


@router.get("", response_model=ListingPage)
async def list_listings(
    session: DbSession,
    ctx: Context,
    category: str | None = None,
    search: str | None = None,
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    condition: ListingCondition | None = None,
    page: int = Query(1, le=MAX_PAGE),
    limit: int | None = None,
):
    """Active listings filtered conjunctively, newest first. GET /listings?category=Books&page=2."""
    filters = ListingFilters(
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        condition=condition.value if condition else None,
    )
    svc = _get_listing_service(session, ctx)
    return await svc.list_listings(
        filters,
        page=page,
        limit=limit if limit is not None else ctx.settings.default_page_size,
        max_limit=ctx.settings.max_page_size,
    )


@router.post("", response_model=ListingCreated, status_code=status.HTTP_201_CREATED)
async def create_listing(
    session: DbSession,
    ctx: Context,
    identity: CurrentIdentity,
    title: str = Form(..., min_length=1, max_length=255),
    description: str | None = Form(None),
    price: Decimal = Form(..., ge=0, max_digits=10, decimal_places=2),
    category: str = Form(..., min_length=1, max_length=100),
    condition: ListingCondition = Form(...),
    location: str | None = Form(None, max_length=255),
    images: list[UploadFile] | None = File(None),
):
    """Create a listing owned by the caller. Up to max_listing_images image files."""
    images = [f for f in images or [] if f.filename]
    if len(images) > ctx.settings.max_listing_images:
        raise InvalidInput(f"File upload error: at most {ctx.settings.max_listing_images} images allowed")
    data = ListingCreate(
        title=title,
        description=description,
        price=price,
        category=category,
        condition=condition,
        location=location,
    )
    paths = await ctx.media.save_many(images, field="images")
    listing = await _get_listing_service(session, ctx).create(identity.id, data, paths)
    return ListingCreated(message="Listing created successfully!", listing=listing)


@router.get("/{listing_id}", response_model=ListingDetailResponse)
async def get_listing(session: DbSession, ctx: Context, listing_id: int):
    """Listing detail. Each call counts one view."""
    return await _get_listing_service(session, ctx).get_detail(listing_id)


@router.patch("/{listing_id}/status", response_model=ListingResponse)
async def update_listing_status(
    session: DbSession,
    ctx: Context,
    identity: CurrentIdentity,
    listing_id: int,
    data: ListingStatusUpdate,
):
    """Mark a listing sold, removed or active again (owner only)."""
    return await _get_listing_service(session, ctx).update_status(identity.id, listing_id, data.status)
