"""
Meter Readings API router.

Create, list, update and delete monthly meter readings, bulk CSV import and
the monthly summary used by the consumption charts.
"""

import logging
from pathlib import Path
from uuid import UUID

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import CurrentUser, get_current_user, get_db_session
from app.database.repositories import (
    DuplicateReadingError,
    MeterReadingRepository,
    UserRepository,
)
from app.pydantic_models.meter_reading import (
    BatchDeleteRequest,
    BatchDeleteResponse,
    CsvUploadResponse,
    MeterReadingCreate,
    MeterReadingPydModel,
    MeterReadingUpdate,
    MonthlySummaryPydModel,
)
from app.services.analytics import compute_monthly_summaries
from app.services.importers.csv_readings import (
    CsvImportError,
    decode_upload,
    parse_readings_csv,
)
from app.utils.constants import CSV_EXTENSION, MAX_CSV_BYTES

router = APIRouter(
    prefix="/api/v1/meter-readings",
    tags=["Meter Readings"],
)

logger = logging.getLogger(__name__)


async def _ensure_user_exists(session: AsyncSession, user_id: UUID):
    if not await UserRepository(session).exists(user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User not found. Complete your profile first.",
        )


@router.post(
    "/", response_model=MeterReadingPydModel, status_code=status.HTTP_201_CREATED
)
async def add_meter_reading(
    payload: MeterReadingCreate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Add a meter reading for one month.

    The date is stored as the first day of its month. A second reading for
    the same month is rejected with 409; update the existing one instead.

    Example:
        ```
        POST /api/v1/meter-readings
        {"reading_date": "2025-03-15", "consumption_kwh": 245.5, "emission_co2_kg": 98.2}
        ```
    """
    await _ensure_user_exists(session, user.id)

    repo = MeterReadingRepository(session)
    try:
        reading = await repo.create_reading(
            user_id=user.id,
            reading_date=payload.reading_date,
            consumption_kwh=payload.consumption_kwh,
            emission_co2_kg=payload.emission_co2_kg,
            source=payload.source,
        )
    except DuplicateReadingError as e:
        logger.warning(str(e))
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A meter reading for this user and month already exists. "
            "Consider updating it instead.",
        )

    logger.info(f"Added meter reading {reading.id} for {reading.reading_date:%Y-%m}")
    return reading


@router.get("/", response_model=list[MeterReadingPydModel])
async def list_meter_readings(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """List the user's meter readings, most recent month first."""
    repo = MeterReadingRepository(session)
    return await repo.list_for_user(user.id)


@router.get("/summary", response_model=list[MonthlySummaryPydModel])
async def get_monthly_consumption_summary(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Monthly consumption and emission totals in chronological order.

    Example:
        ```
        GET /api/v1/meter-readings/summary
        [{"month": "2025-01", "total_consumption_kwh": 120.0, ...}, ...]
        ```
    """
    repo = MeterReadingRepository(session)
    readings = await repo.list_for_user(user.id, newest_first=False)
    summaries = compute_monthly_summaries(readings)
    return [MonthlySummaryPydModel.model_validate(s) for s in summaries]


@router.post("/upload-csv", response_model=CsvUploadResponse)
async def upload_meter_readings_csv(
    request: Request,
    csv_file: UploadFile = File(..., description="CSV with readingDate, consumptionKWH, emissionCO2kg, source"),
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Bulk import readings from a CSV file.

    Every row is validated first; if any row is invalid nothing is written
    and the per-row errors are returned. Valid uploads overwrite existing
    readings for the same month.
    """
    if Path(csv_file.filename or "").suffix.lower() != CSV_EXTENSION:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed!",
        )

    max_bytes = request.app.state.config.section("uploads").get(
        "max_csv_bytes", MAX_CSV_BYTES
    )
    content = await csv_file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"CSV file exceeds the {max_bytes} byte limit.",
        )

    try:
        parsed = parse_readings_csv(decode_upload(content))
    except CsvImportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if parsed.errors:
        logger.warning(f"CSV upload rejected with {len(parsed.errors)} row errors")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": "CSV processing completed with errors.",
                "errors": parsed.errors,
                "processed_count": 0,
            },
        )

    if not parsed.rows:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid readings found in the CSV to upload.",
        )

    await _ensure_user_exists(session, user.id)

    repo = MeterReadingRepository(session)
    uploaded_count = await repo.upsert_many(user.id, parsed.rows)
    readings = await repo.list_for_user(user.id)

    logger.info(f"Imported {uploaded_count} meter readings from {csv_file.filename}")
    return CsvUploadResponse(
        message=f"Successfully uploaded and processed {uploaded_count} meter readings.",
        uploaded_count=uploaded_count,
        readings=[MeterReadingPydModel.model_validate(r) for r in readings],
    )


@router.post("/batch-delete", response_model=BatchDeleteResponse)
async def batch_delete_meter_readings(
    payload: BatchDeleteRequest,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete several readings; ids not owned by the user are ignored."""
    repo = MeterReadingRepository(session)
    deleted = await repo.delete_many_for_user(payload.ids, user.id)
    logger.info(f"Deleted {deleted} of {len(payload.ids)} requested meter readings")
    return BatchDeleteResponse(deleted_count=deleted)


@router.get("/{reading_id}", response_model=MeterReadingPydModel)
async def get_meter_reading(
    reading_id: UUID,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Get one meter reading by ID."""
    repo = MeterReadingRepository(session)
    reading = await repo.get_for_user(reading_id, user.id)

    if not reading:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meter reading not found or does not belong to user.",
        )

    return reading


@router.put("/{reading_id}", response_model=MeterReadingPydModel)
async def update_meter_reading(
    reading_id: UUID,
    payload: MeterReadingUpdate,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Update consumption, emission or source of a reading.

    The reading month cannot be changed; sending reading_date fails validation.
    """
    # emission may be cleared with null; consumption and source may not
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field == "emission_co2_kg"
    }
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields provided for update.",
        )

    repo = MeterReadingRepository(session)
    reading = await repo.update_for_user(reading_id, user.id, **changes)

    if not reading:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meter reading not found or does not belong to user.",
        )

    return reading


@router.delete("/{reading_id}")
async def delete_meter_reading(
    reading_id: UUID,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete one meter reading."""
    repo = MeterReadingRepository(session)
    deleted = await repo.delete_for_user(reading_id, user.id)

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Meter reading not found or does not belong to user.",
        )

    return {"message": "Meter reading deleted successfully."}
