"""
API tests for meter readings endpoints following kkb_fastapi pattern.
"""

import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from app.test.factory.meter_reading import MeterReadingFactory
from app.test.factory.user import UserFactory

URL = "/api/v1/meter-readings"


def csv_upload(content: str, filename: str = "readings.csv"):
    return {"csv_file": (filename, content.encode("utf-8"), "text/csv")}


@pytest.mark.asyncio
async def test_add_meter_reading(test_async_client, auth_user_id):
    """Test creating a reading normalises the date and defaults the source."""
    await UserFactory(id=auth_user_id)

    response = await test_async_client.post(
        f"{URL}/",
        json={"reading_date": "2025-03-15", "consumption_kwh": 245.5, "emission_co2_kg": 98.2},
    )
    assert response.status_code == 201

    data = response.json()
    assert data["reading_date"] == "2025-03-01"
    assert Decimal(data["consumption_kwh"]) == Decimal("245.5")
    assert data["source"] == "manual"
    assert data["user_id"] == str(auth_user_id)


@pytest.mark.asyncio
async def test_add_duplicate_month(test_async_client, auth_user_id):
    """Test a second reading for the same month is rejected."""
    await UserFactory(id=auth_user_id)
    await MeterReadingFactory(user_id=auth_user_id, reading_date=date(2025, 3, 1))

    response = await test_async_client.post(
        f"{URL}/", json={"reading_date": "2025-03-20", "consumption_kwh": 100}
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_add_reading_without_user(test_async_client):
    response = await test_async_client.post(
        f"{URL}/", json={"reading_date": "2025-03-01", "consumption_kwh": 100}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User not found. Complete your profile first."


@pytest.mark.asyncio
async def test_add_reading_validation(test_async_client, auth_user_id):
    """Test negative consumption and unknown source fail validation."""
    await UserFactory(id=auth_user_id)

    response = await test_async_client.post(
        f"{URL}/", json={"reading_date": "2025-03-01", "consumption_kwh": -1}
    )
    assert response.status_code == 422
    assert response.json()["message"] == "Validation error"

    response = await test_async_client.post(
        f"{URL}/",
        json={"reading_date": "2025-03-01", "consumption_kwh": 1, "source": "smart_meter"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_meter_readings(test_async_client, auth_user_id):
    """Test readings are listed newest first and scoped to the user."""
    await UserFactory(id=auth_user_id)
    other = await UserFactory()
    for month in (1, 3, 2):
        await MeterReadingFactory(user_id=auth_user_id, reading_date=date(2024, month, 1))
    await MeterReadingFactory(user_id=other.id, reading_date=date(2024, 4, 1))

    response = await test_async_client.get(f"{URL}/")
    assert response.status_code == 200

    data = response.json()
    assert [item["reading_date"] for item in data] == [
        "2024-03-01",
        "2024-02-01",
        "2024-01-01",
    ]


@pytest.mark.asyncio
async def test_monthly_summary(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    await MeterReadingFactory(
        user_id=auth_user_id,
        reading_date=date(2024, 2, 1),
        consumption_kwh=Decimal("200"),
        emission_co2_kg=None,
    )
    await MeterReadingFactory(
        user_id=auth_user_id,
        reading_date=date(2024, 1, 1),
        consumption_kwh=Decimal("150.5"),
        emission_co2_kg=Decimal("60"),
    )

    response = await test_async_client.get(f"{URL}/summary")
    assert response.status_code == 200

    data = response.json()
    assert data == [
        {
            "month": "2024-01",
            "total_consumption_kwh": 150.5,
            "total_emission_co2_kg": 60.0,
            "emission_missing": False,
        },
        {
            "month": "2024-02",
            "total_consumption_kwh": 200.0,
            "total_emission_co2_kg": 0.0,
            "emission_missing": True,
        },
    ]


@pytest.mark.asyncio
async def test_get_meter_reading_by_id(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    reading = await MeterReadingFactory(user_id=auth_user_id)

    response = await test_async_client.get(f"{URL}/{reading.id}")
    assert response.status_code == 200
    assert response.json()["id"] == str(reading.id)


@pytest.mark.asyncio
async def test_get_reading_of_other_user(test_async_client):
    other = await UserFactory()
    reading = await MeterReadingFactory(user_id=other.id)

    response = await test_async_client.get(f"{URL}/{reading.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_meter_reading(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    reading = await MeterReadingFactory(user_id=auth_user_id)

    response = await test_async_client.put(
        f"{URL}/{reading.id}", json={"consumption_kwh": 180, "emission_co2_kg": None}
    )
    assert response.status_code == 200

    data = response.json()
    assert Decimal(data["consumption_kwh"]) == Decimal("180")
    assert data["emission_co2_kg"] is None
    assert data["reading_date"] == reading.reading_date.isoformat()


@pytest.mark.asyncio
async def test_update_rejects_month_change(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    reading = await MeterReadingFactory(user_id=auth_user_id)

    response = await test_async_client.put(
        f"{URL}/{reading.id}", json={"reading_date": "2020-01-01"}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_with_empty_body(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    reading = await MeterReadingFactory(user_id=auth_user_id)

    response = await test_async_client.put(f"{URL}/{reading.id}", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "No fields provided for update."


@pytest.mark.asyncio
async def test_update_missing_reading(test_async_client):
    response = await test_async_client.put(
        f"{URL}/{uuid.uuid4()}", json={"consumption_kwh": 1}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_meter_reading(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    reading = await MeterReadingFactory(user_id=auth_user_id)

    response = await test_async_client.delete(f"{URL}/{reading.id}")
    assert response.status_code == 200
    assert response.json() == {"message": "Meter reading deleted successfully."}

    response = await test_async_client.get(f"{URL}/{reading.id}")
    assert response.status_code == 404

    response = await test_async_client.delete(f"{URL}/{reading.id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_batch_delete(test_async_client, auth_user_id):
    """Test only the user's own readings are deleted."""
    await UserFactory(id=auth_user_id)
    other = await UserFactory()
    mine = await MeterReadingFactory.create_batch(3, user_id=auth_user_id)
    theirs = await MeterReadingFactory(user_id=other.id)

    response = await test_async_client.post(
        f"{URL}/batch-delete",
        json={"ids": [str(mine[0].id), str(mine[1].id), str(theirs.id)]},
    )
    assert response.status_code == 200
    assert response.json() == {"deleted_count": 2}

    response = await test_async_client.get(f"{URL}/")
    assert [item["id"] for item in response.json()] == [str(mine[2].id)]


@pytest.mark.asyncio
async def test_upload_csv(test_async_client, auth_user_id):
    """Test CSV upload inserts new months and overwrites existing ones."""
    await UserFactory(id=auth_user_id)
    await MeterReadingFactory(
        user_id=auth_user_id, reading_date=date(2024, 1, 1), consumption_kwh=Decimal("999")
    )
    content = (
        "readingDate,consumptionKWH,emissionCO2kg,source\n"
        "2024-01-10,120,48,\n"
        "2024-02-10,110,,manual\n"
    )

    response = await test_async_client.post(
        f"{URL}/upload-csv", files=csv_upload(content)
    )
    assert response.status_code == 200

    data = response.json()
    assert data["uploaded_count"] == 2
    assert data["message"] == "Successfully uploaded and processed 2 meter readings."

    by_month = {item["reading_date"]: item for item in data["readings"]}
    assert len(by_month) == 2
    assert Decimal(by_month["2024-01-01"]["consumption_kwh"]) == Decimal("120")
    assert by_month["2024-01-01"]["source"] == "csv_upload"
    assert by_month["2024-02-01"]["emission_co2_kg"] is None
    assert by_month["2024-02-01"]["source"] == "manual"


@pytest.mark.asyncio
async def test_upload_csv_with_row_errors_writes_nothing(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    content = (
        "readingDate,consumptionKWH,emissionCO2kg,source\n"
        "2024-01-10,120,48,\n"
        "yesterday,110,,\n"
        "2024-03-10,n/a,,\n"
    )

    response = await test_async_client.post(
        f"{URL}/upload-csv", files=csv_upload(content)
    )
    assert response.status_code == 400

    detail = response.json()["detail"]
    assert detail["processed_count"] == 0
    assert detail["errors"] == [
        "Row 3: Invalid readingDate format.",
        "Row 4: Invalid consumptionKWH value.",
    ]

    response = await test_async_client.get(f"{URL}/")
    assert response.json() == []


@pytest.mark.asyncio
async def test_upload_csv_without_rows(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)

    response = await test_async_client.post(
        f"{URL}/upload-csv", files=csv_upload("readingDate,consumptionKWH\n")
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No valid readings found in the CSV to upload."


@pytest.mark.asyncio
async def test_upload_rejects_other_file_types(test_async_client):
    response = await test_async_client.post(
        f"{URL}/upload-csv",
        files=csv_upload("readingDate,consumptionKWH\n", filename="readings.xlsx"),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Only CSV files are allowed!"


@pytest.mark.asyncio
async def test_add_reading_beyond_column_capacity(test_async_client, auth_user_id):
    """Test quantities the database cannot store fail validation, not the insert."""
    await UserFactory(id=auth_user_id)

    response = await test_async_client.post(
        f"{URL}/", json={"reading_date": "2025-03-01", "consumption_kwh": "1e20"}
    )
    assert response.status_code == 422

    response = await test_async_client.post(
        f"{URL}/",
        json={"reading_date": "2025-03-01", "consumption_kwh": 1, "emission_co2_kg": 1e9},
    )
    assert response.status_code == 422

    response = await test_async_client.post(
        f"{URL}/", json={"reading_date": "2025-03-01", "consumption_kwh": "99999999.9999"}
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_update_reading_beyond_column_capacity(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    reading = await MeterReadingFactory(user_id=auth_user_id)

    response = await test_async_client.put(
        f"{URL}/{reading.id}", json={"consumption_kwh": 1e20}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_upload_csv_beyond_column_capacity(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    content = "readingDate,consumptionKWH\n2024-01-01,1e20\n"

    response = await test_async_client.post(
        f"{URL}/upload-csv", files=csv_upload(content)
    )
    assert response.status_code == 400
    assert response.json()["detail"]["errors"] == ["Row 2: Invalid consumptionKWH value."]

    response = await test_async_client.get(f"{URL}/")
    assert response.json() == []


@pytest.mark.asyncio
async def test_upload_csv_with_oversized_field(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    content = "readingDate,consumptionKWH\n2024-01-01," + "9" * 200_000 + "\n"

    response = await test_async_client.post(
        f"{URL}/upload-csv", files=csv_upload(content)
    )
    assert response.status_code == 400
    assert response.json()["detail"].startswith("CSV file could not be parsed")


@pytest.mark.asyncio
async def test_timestamps_are_returned_in_utc(test_async_client, auth_user_id):
    await UserFactory(id=auth_user_id)
    reading = await MeterReadingFactory(user_id=auth_user_id)

    response = await test_async_client.get(f"{URL}/{reading.id}")
    assert response.status_code == 200

    created_at = datetime.fromisoformat(response.json()["created_at"].replace("Z", "+00:00"))
    assert created_at.utcoffset() == timedelta(0)
