"""
BDD step definitions for the health feature (pytest-bdd).
"""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient
from pytest_bdd import parsers, scenarios, then, when

# Load all scenarios from the feature file
scenarios("../features/health.feature")


@pytest.fixture
def response():
    """Store last response for then steps."""
    return {}


async def _get(app, path: str):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        return await client.get(path)


@when(parsers.parse('I request "GET" "{path}"'))
def request_path(app, response, path):
    r = asyncio.run(_get(app, path))
    response["status"] = r.status_code
    response["body"] = r.json()


@then(parsers.parse("the response status should be {code:d}"))
def status_is(response, code):
    assert response["status"] == code


@then(parsers.parse('the response body should have "{key}" equals "{value}"'))
def body_field_equals(response, key, value):
    assert response["body"].get(key) == value
