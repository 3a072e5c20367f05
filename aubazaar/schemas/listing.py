"""Listing request/response schemas - REST API contract."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from aubazaar.db.models.listing import ListingCondition, ListingStatus


class ListingCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1, max_length=100)
    condition: ListingCondition
    location: str | None = Field(None, max_length=255)


class ListingStatusUpdate(BaseModel):
    status: ListingStatus


class ListingResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: str | None = None
    price: float
    category: str
    condition: str
    location: str | None = None
    status: str
    images: list[str] = []
    view_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    seller_name: str | None = None  # Populated by service layer

    model_config = {"from_attributes": True}


class ListingDetail(ListingResponse):
    seller_email: str | None = None
    seller_phone: str | None = None
    seller_department: str | None = None
    seller_avatar: str | None = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ListingPage(BaseModel):
    listings: list[ListingResponse]
    pagination: Pagination


class ListingDetailResponse(BaseModel):
    listing: ListingDetail
    similar: list[ListingResponse]


class ListingCreated(BaseModel):
    message: str
    listing: ListingResponse
