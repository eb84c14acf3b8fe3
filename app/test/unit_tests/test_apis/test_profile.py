"""
API tests for the user profile endpoints.
"""

from decimal import Decimal

import pytest

from app.test.factory.user import UserFactory, UserProfileFactory

URL = "/api/v1/profile/"


@pytest.mark.asyncio
async def test_get_profile_of_unknown_user(test_async_client):
    response = await test_async_client.get(URL)
    assert response.status_code == 404
    assert response.json()["detail"] == "User profile not found."


@pytest.mark.asyncio
async def test_get_profile(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id, city="York")
    await UserProfileFactory(user_id=auth_user_id, electricity_rate_per_kwh=Decimal("0.31"))

    response = await test_async_client.get(URL)
    assert response.status_code == 200

    data = response.json()
    assert data["id"] == str(auth_user_id)
    assert data["city"] == "York"
    assert Decimal(data["profile"]["electricity_rate_per_kwh"]) == Decimal("0.31")


@pytest.mark.asyncio
async def test_first_save_creates_user_and_profile(test_async_client, auth_user_id):
    response = await test_async_client.put(
        URL,
        json={"household_size": 4, "city": "Pune", "electricity_rate_per_kwh": 6.5},
    )
    assert response.status_code == 200

    data = response.json()
    assert data["id"] == str(auth_user_id)
    assert data["email"] == f"{auth_user_id.hex[:8]}@example.com"
    assert data["household_size"] == 4
    assert Decimal(data["profile"]["electricity_rate_per_kwh"]) == Decimal("6.5")

    response = await test_async_client.get(URL)
    assert response.status_code == 200
    assert response.json()["city"] == "Pune"


@pytest.mark.asyncio
async def test_update_keeps_fields_not_sent(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id, city="York")
    await UserProfileFactory(user_id=auth_user_id, eco_goals="Solar panels")

    response = await test_async_client.put(URL, json={"target_reduction": 25})
    assert response.status_code == 200

    data = response.json()
    assert data["city"] == "York"
    assert data["profile"]["eco_goals"] == "Solar panels"
    assert Decimal(data["profile"]["target_reduction"]) == Decimal("25")


@pytest.mark.asyncio
async def test_negative_rate_is_rejected(test_async_client):
    response = await test_async_client.put(URL, json={"electricity_rate_per_kwh": -0.1})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_field_is_rejected(test_async_client):
    response = await test_async_client.put(URL, json={"favourite_colour": "green"})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_rate_beyond_column_capacity_is_rejected(test_async_client):
    response = await test_async_client.put(URL, json={"electricity_rate_per_kwh": 1_000_000})
    assert response.status_code == 422

    response = await test_async_client.put(URL, json={"electricity_rate_per_kwh": "999999.9999"})
    assert response.status_code == 200
