"""
Application constants following kkb_fastapi pattern.
"""
from decimal import Decimal
from enum import Enum


class ConfigFile:
    """Configuration file paths."""
    PRODUCTION = "production.toml"
    DEVELOPMENT = "development.toml"
    TEST = "test.toml"


class ReadingSource:
    """Provenance tags for meter readings."""
    MANUAL = "manual"
    CSV_UPLOAD = "csv_upload"


class MetricEnum(str, Enum):
    """Quantity a baseline deviation is computed over."""
    CONSUMPTION = "consumption"
    EMISSION = "emission"


class OutcomeStatus(str, Enum):
    """Result states of a baseline deviation computation."""
    OK = "ok"
    NO_DATA = "no_data"
    INSUFFICIENT_BASELINE = "insufficient_baseline"
    RATE_MISSING = "rate_missing"


# Number of leading months that form the "normal usage" reference
BASELINE_MONTHS = 3

# Largest values the Numeric columns can hold
MAX_QUANTITY = Decimal("99999999.9999")  # Numeric(12, 4): kWh, kg CO2
MAX_RATE_PER_KWH = Decimal("999999.9999")  # Numeric(10, 4)
MAX_POWER_WATTS = Decimal("99999999.99")  # Numeric(10, 2)

# CSV upload limits
MAX_CSV_BYTES = 5 * 1024 * 1024
CSV_EXTENSION = ".csv"
