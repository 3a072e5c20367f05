"""
Listing catalog API - create with images, filters, pagination, detail views and status.
"""

from decimal import Decimal
from pathlib import Path

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from aubazaar.db.models import Listing

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 128

LISTING_FORM = {
    "title": "Study desk",
    "description": "Solid wood, one drawer",
    "price": "25.50",
    "category": "Furniture",
    "condition": "Like New",
    "location": "Girls' hostel",
}


async def _listing_count(session) -> int:
    return (await session.execute(select(func.count(Listing.id)))).scalar_one()


@pytest.mark.asyncio
async def test_create_listing_requires_auth(client: AsyncClient):
    response = await client.post("/api/listings", data=LISTING_FORM)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_listing_with_images(client: AsyncClient, auth_headers, test_user, settings):
    files = [
        ("images", ("front.png", PNG_BYTES, "image/png")),
        ("images", ("side.jpg", b"\xff\xd8\xff" + b"\x00" * 64, "image/jpeg")),
    ]
    response = await client.post("/api/listings", headers=auth_headers, data=LISTING_FORM, files=files)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Listing created successfully!"
    listing = body["listing"]
    assert listing["title"] == "Study desk"
    assert listing["price"] == 25.5
    assert listing["status"] == "active"
    assert listing["view_count"] == 0
    assert listing["user_id"] == test_user.id
    assert listing["seller_name"] == "Test User"

    images = listing["images"]
    assert len(images) == 2
    assert images[0].startswith("/uploads/images-") and images[0].endswith(".png")
    assert images[1].endswith(".jpg")
    stored = Path(settings.upload_dir) / images[0].rsplit("/", 1)[1]
    assert stored.read_bytes() == PNG_BYTES

    served = await client.get(images[0])
    assert served.status_code == 200
    assert served.content == PNG_BYTES


@pytest.mark.asyncio
async def test_create_listing_rejects_non_image(client: AsyncClient, auth_headers, session):
    files = [("images", ("notes.txt", b"hello", "text/plain"))]
    response = await client.post("/api/listings", headers=auth_headers, data=LISTING_FORM, files=files)
    assert response.status_code == 400
    assert response.json() == {"error": "Only image files are allowed!"}
    assert await _listing_count(session) == 0


@pytest.mark.asyncio
async def test_create_listing_rejects_too_many_images(client: AsyncClient, auth_headers, settings):
    files = [("images", (f"p{i}.png", PNG_BYTES, "image/png")) for i in range(settings.max_listing_images + 1)]
    response = await client.post("/api/listings", headers=auth_headers, data=LISTING_FORM, files=files)
    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [{"price": "-1"}, {"condition": "Broken"}, {"title": ""}],
)
async def test_create_listing_validates_fields(client: AsyncClient, auth_headers, session, override):
    response = await client.post("/api/listings", headers=auth_headers, data={**LISTING_FORM, **override})
    assert response.status_code == 400
    assert await _listing_count(session) == 0


@pytest.mark.asyncio
async def test_list_filters_price_range_and_category(client: AsyncClient, test_user, listing_factory):
    for price in ("5", "10", "15", "20", "25"):
        await listing_factory(test_user, price=Decimal(price), category="Electronics")
    await listing_factory(test_user, price=Decimal("12"), category="Textbooks")

    response = await client.get("/api/listings", params={"min_price": 10, "max_price": 20})
    assert response.status_code == 200
    prices = sorted(l["price"] for l in response.json()["listings"])
    assert prices == [10, 12, 15, 20]

    response = await client.get(
        "/api/listings", params={"min_price": 10, "max_price": 20, "category": "Electronics"}
    )
    data = response.json()
    assert sorted(l["price"] for l in data["listings"]) == [10, 15, 20]
    assert all(l["category"] == "Electronics" for l in data["listings"])
    assert data["pagination"]["total"] == 3


@pytest.mark.asyncio
async def test_list_search_is_case_insensitive_substring(client: AsyncClient, test_user, listing_factory):
    await listing_factory(test_user, title="Graphing Calculator", description="TI-84")
    await listing_factory(test_user, title="Bookshelf", description="barely used, pine")
    await listing_factory(test_user, title="Kettle", description="1.7 litre")

    titles = lambda r: {l["title"] for l in r.json()["listings"]}  # noqa: E731
    assert titles(await client.get("/api/listings", params={"search": "calc"})) == {"Graphing Calculator"}
    assert titles(await client.get("/api/listings", params={"search": "BARELY"})) == {"Bookshelf"}
    assert titles(await client.get("/api/listings", params={"search": "%"})) == set()


@pytest.mark.asyncio
async def test_list_condition_filter_and_inactive_excluded(client: AsyncClient, test_user, listing_factory):
    await listing_factory(test_user, title="New one", condition="New")
    await listing_factory(test_user, title="Fair one", condition="Fair")
    await listing_factory(test_user, title="Sold one", condition="New", status="sold")

    response = await client.get("/api/listings", params={"condition": "New"})
    assert [l["title"] for l in response.json()["listings"]] == ["New one"]

    response = await client.get("/api/listings")
    assert "Sold one" not in {l["title"] for l in response.json()["listings"]}


@pytest.mark.asyncio
async def test_list_newest_first_with_seller_name(client: AsyncClient, test_user, listing_factory):
    first = await listing_factory(test_user)
    second = await listing_factory(test_user)
    response = await client.get("/api/listings")
    listings = response.json()["listings"]
    assert [l["id"] for l in listings] == [second.id, first.id]
    assert listings[0]["seller_name"] == "Test User"


@pytest.mark.asyncio
async def test_pagination_last_page(client: AsyncClient, test_user, listing_factory):
    for _ in range(45):
        await listing_factory(test_user)

    response = await client.get("/api/listings", params={"page": 3, "limit": 20})
    data = response.json()
    assert len(data["listings"]) == 5
    assert data["pagination"] == {"page": 3, "limit": 20, "total": 45, "pages": 3}


@pytest.mark.asyncio
async def test_pagination_clamps_to_positive(client: AsyncClient, test_user, listing_factory):
    await listing_factory(test_user)
    await listing_factory(test_user)

    response = await client.get("/api/listings", params={"page": 0, "limit": -5})
    data = response.json()
    assert data["pagination"]["page"] == 1
    assert data["pagination"]["limit"] == 1
    assert data["pagination"]["pages"] == 2
    assert len(data["listings"]) == 1


@pytest.mark.asyncio
async def test_get_listing_counts_views(client: AsyncClient, test_user, listing_factory):
    listing = await listing_factory(test_user)

    first = await client.get(f"/api/listings/{listing.id}")
    assert first.status_code == 200
    assert first.json()["listing"]["view_count"] == 1

    second = await client.get(f"/api/listings/{listing.id}")
    assert second.json()["listing"]["view_count"] == 2


@pytest.mark.asyncio
async def test_get_listing_includes_seller_contact(client: AsyncClient, test_user, listing_factory):
    listing = await listing_factory(test_user)
    detail = (await client.get(f"/api/listings/{listing.id}")).json()["listing"]
    assert detail["seller_name"] == "Test User"
    assert detail["seller_email"] == test_user.email
    assert detail["seller_phone"] == "0771234567"


@pytest.mark.asyncio
async def test_get_listing_similar(client: AsyncClient, test_user, listing_factory):
    target = await listing_factory(test_user, category="Electronics")
    for _ in range(6):
        await listing_factory(test_user, category="Electronics")
    sold = await listing_factory(test_user, category="Electronics", status="sold")
    await listing_factory(test_user, category="Textbooks")

    response = await client.get(f"/api/listings/{target.id}")
    similar = response.json()["similar"]
    assert len(similar) == 4
    assert all(s["category"] == "Electronics" for s in similar)
    assert all(s["status"] == "active" for s in similar)
    ids = {s["id"] for s in similar}
    assert target.id not in ids
    assert sold.id not in ids


@pytest.mark.asyncio
async def test_get_listing_not_found(client: AsyncClient):
    response = await client.get("/api/listings/9999")
    assert response.status_code == 404
    assert response.json() == {"error": "Listing not found"}


@pytest.mark.asyncio
async def test_owner_can_mark_listing_sold(client: AsyncClient, test_user, auth_headers, listing_factory):
    listing = await listing_factory(test_user)
    response = await client.patch(
        f"/api/listings/{listing.id}/status", headers=auth_headers, json={"status": "sold"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "sold"

    listed = await client.get("/api/listings")
    assert listed.json()["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_only_owner_changes_status(client: AsyncClient, test_user, user_factory, make_headers, listing_factory):
    listing = await listing_factory(test_user)
    other = await user_factory()
    response = await client.patch(
        f"/api/listings/{listing.id}/status", headers=make_headers(other), json={"status": "removed"}
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_page_beyond_bound_is_rejected(client: AsyncClient, test_user, listing_factory):
    await listing_factory(test_user)
    response = await client.get("/api/listings", params={"page": 10**20})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
