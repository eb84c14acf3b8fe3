"""
CSV import of meter readings.

Expected header: readingDate, consumptionKWH, emissionCO2kg, source.
Only readingDate and consumptionKWH are required. Rows are validated up
front so an upload is applied completely or not at all.

Dates are year-first only (2024-03-15, 2024-03, 2024/03/15); day-first forms
such as 03/04/2024 are ambiguous and rejected. Quantities are plain decimals
with a dot; thousands separators and decimal commas are rejected.

Usage:
    parsed = parse_readings_csv(content)
    if parsed.errors:
        ...  # reject the upload
    await MeterReadingRepository(session).upsert_many(user_id, parsed.rows)
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from app.utils.constants import MAX_QUANTITY, ReadingSource

logger = logging.getLogger(__name__)

VALID_SOURCES = {ReadingSource.MANUAL, ReadingSource.CSV_UPLOAD}
DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y/%m/%d", "%Y-%m-%dT%H:%M:%S")

class CsvImportError(Exception):
    """Raised when an upload cannot be read as CSV at all."""

@dataclass
class ParsedReadings:
    """Validated rows ready for upsert plus per-row error messages."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

def first_of_month(value: date) -> date:
    return date(value.year, value.month, 1)

def parse_reading_date(raw: str) -> Optional[date]:
    """Parse a reading date and normalise it to the first of its month."""
    raw = raw.strip()
    for fmt in DATE_FORMATS:
        try:
            return first_of_month(datetime.strptime(raw, fmt).date())
        except ValueError:
            continue
    return None

def parse_quantity(raw: str) -> Optional[Decimal]:
    """Parse a number between 0 and MAX_QUANTITY, the column's capacity."""
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        return None
    if not value.is_finite() or not 0 <= value <= MAX_QUANTITY:
        return None
    return value

def decode_upload(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CsvImportError("CSV file must be UTF-8 encoded.") from e

def _validate_row(
    row_number: int, row: dict
) -> tuple[Optional[dict[str, Any]], Optional[str]]:
    """Return the upsert row, or the error message for this CSV row."""
    raw_date = (row.get("readingDate") or "").strip()
    raw_consumption = (row.get("consumptionKWH") or "").strip()
    raw_emission = (row.get("emissionCO2kg") or "").strip()
    source = (row.get("source") or "").strip() or ReadingSource.CSV_UPLOAD

    if not raw_date or not raw_consumption:
        return None, f"Row {row_number}: Missing required fields (readingDate, consumptionKWH)."

    reading_date = parse_reading_date(raw_date)
    if reading_date is None:
        return None, f"Row {row_number}: Invalid readingDate format."

    consumption = parse_quantity(raw_consumption)
    if consumption is None:
        return None, f"Row {row_number}: Invalid consumptionKWH value."

    if source not in VALID_SOURCES:
        return None, f"Row {row_number}: Unknown source '{source}'."

    emission = None
    if raw_emission:
        emission = parse_quantity(raw_emission)
        if emission is None:
            return None, f"Row {row_number}: Invalid emissionCO2kg value."

    return {
        "reading_date": reading_date,
        "consumption_kwh": consumption,
        "emission_co2_kg": emission,
        "source": source,
    }, None

def parse_readings_csv(content: str) -> ParsedReadings:
    """
    Validate CSV text into meter reading rows.

    Row numbers in error messages count the header as row 1. When two rows
    fall in the same month the later one wins.

    Args:
        content: Full CSV text including the header row

    Returns:
        ParsedReadings with rows keyed for MeterReadingRepository.upsert_many

    Raises:
        CsvImportError: If the text has no header row or is not parseable as
            CSV (e.g. a field longer than the csv module's field limit)
    """
    parsed = ParsedReadings()
    by_month: dict[date, dict[str, Any]] = {}

    try:
        reader = csv.DictReader(io.StringIO(content), skipinitialspace=True)
        if not reader.fieldnames:
            raise CsvImportError("CSV file is empty or has no header row.")

        for index, row in enumerate(reader):
            reading, error = _validate_row(index + 2, row)
            if error:
                parsed.errors.append(error)
            else:
                by_month[reading["reading_date"]] = reading
    except csv.Error as e:
        raise CsvImportError(f"CSV file could not be parsed: {e}") from e

    parsed.rows = list(by_month.values())
    logger.info(
        f"Parsed {len(parsed.rows)} readings from CSV with {len(parsed.errors)} errors"
    )
    return parsed
