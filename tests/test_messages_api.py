"""
Messaging API - send, list with enrichment, read receipts.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_send_message(client: AsyncClient, test_user, auth_headers, user_factory, listing_factory):
    seller = await user_factory(full_name="Seller Sam")
    listing = await listing_factory(seller, title="Mini fridge")

    response = await client.post(
        "/api/messages",
        headers=auth_headers,
        json={"listing_id": listing.id, "receiver_id": seller.id, "message": "Is this still available?"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Message sent successfully!"
    assert data["messageId"] > 0


@pytest.mark.asyncio
async def test_send_message_without_listing(client: AsyncClient, auth_headers, user_factory):
    other = await user_factory()
    response = await client.post(
        "/api/messages", headers=auth_headers, json={"receiver_id": other.id, "message": "Hi"}
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_cannot_message_yourself(client: AsyncClient, test_user, auth_headers):
    response = await client.post(
        "/api/messages", headers=auth_headers, json={"receiver_id": test_user.id, "message": "Hello me"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_receiver_required(client: AsyncClient, auth_headers):
    response = await client.post("/api/messages", headers=auth_headers, json={"message": "Hello?"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_receiver_or_listing(client: AsyncClient, auth_headers, user_factory):
    response = await client.post("/api/messages", headers=auth_headers, json={"receiver_id": 999, "message": "x"})
    assert response.status_code == 404

    other = await user_factory()
    response = await client.post(
        "/api/messages", headers=auth_headers, json={"receiver_id": other.id, "listing_id": 999, "message": "x"}
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Listing not found"}


@pytest.mark.asyncio
async def test_send_requires_auth(client: AsyncClient):
    response = await client.post("/api/messages", json={"receiver_id": 1, "message": "x"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_list_messages_enriched_newest_first(
    client: AsyncClient, test_user, auth_headers, user_factory, listing_factory, make_headers
):
    seller = await user_factory(full_name="Seller Sam")
    outsider = await user_factory(full_name="Outsider")
    listing = await listing_factory(seller, title="Mini fridge")

    await client.post(
        "/api/messages",
        headers=auth_headers,
        json={"listing_id": listing.id, "receiver_id": seller.id, "message": "Still available?"},
    )
    await client.post(
        "/api/messages",
        headers=make_headers(seller),
        json={"listing_id": listing.id, "receiver_id": test_user.id, "message": "Yes it is"},
    )
    await client.post(
        "/api/messages", headers=make_headers(outsider), json={"receiver_id": seller.id, "message": "Unrelated"}
    )

    response = await client.get("/api/messages", headers=auth_headers)
    assert response.status_code == 200
    messages = response.json()["messages"]
    assert [m["message"] for m in messages] == ["Yes it is", "Still available?"]
    reply = messages[0]
    assert reply["listing_title"] == "Mini fridge"
    assert reply["sender_name"] == "Seller Sam"
    assert reply["receiver_name"] == "Test User"
    assert reply["is_read"] is False

    seller_view = (await client.get("/api/messages", headers=make_headers(seller))).json()["messages"]
    assert len(seller_view) == 3
    assert seller_view[0]["listing_title"] is None


@pytest.mark.asyncio
async def test_mark_read_by_receiver_only(client: AsyncClient, test_user, auth_headers, user_factory, make_headers):
    other = await user_factory()
    sent = await client.post("/api/messages", headers=auth_headers, json={"receiver_id": other.id, "message": "Hi"})
    message_id = sent.json()["messageId"]

    response = await client.patch(f"/api/messages/{message_id}/read", headers=auth_headers)
    assert response.status_code == 403

    response = await client.patch(f"/api/messages/{message_id}/read", headers=make_headers(other))
    assert response.status_code == 200

    inbox = (await client.get("/api/messages", headers=make_headers(other))).json()["messages"]
    assert inbox[0]["is_read"] is True

    response = await client.patch("/api/messages/9999/read", headers=auth_headers)
    assert response.status_code == 404
