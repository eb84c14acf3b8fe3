"""
Baseline deviation analytics.

Pure functions that turn a user's meter readings into monthly summaries and
compare later months against the average of the first few months:

    baseline   = mean(metric over the first BASELINE_MONTHS months)
    deviation  = baseline - actual          (positive means a saving)
    cumulative = sum(deviation for every month after the baseline window)

Monetary savings multiply the cumulative kWh deviation by the user's
electricity rate. "No data", "not enough months" and "no rate" are ordinary
results, not errors.
"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional, Sequence

from app.utils.constants import BASELINE_MONTHS, MetricEnum, OutcomeStatus

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


@dataclass(frozen=True)
class MonthlySummary:
    """Totals of one calendar month of readings."""

    month: date
    total_consumption_kwh: Decimal
    total_emission_co2_kg: Decimal
    emission_missing: bool = False

    def value_of(self, metric: MetricEnum) -> Decimal:
        if metric == MetricEnum.CONSUMPTION:
            return self.total_consumption_kwh
        return self.total_emission_co2_kg


@dataclass(frozen=True)
class DeviationResult:
    """Outcome of a baseline deviation computation."""

    value: Decimal
    status: OutcomeStatus
    message: str
    months_needed: Optional[int] = None

    @property
    def is_ok(self) -> bool:
        return self.status == OutcomeStatus.OK


def to_decimal(value: Any) -> Decimal:
    """Convert a numeric reading value to Decimal without float noise."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Decimal) -> Decimal:
    """Round to 2 decimal places, halves away from zero."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def compute_monthly_summaries(readings: Iterable[Any]) -> list[MonthlySummary]:
    """
    Group readings by calendar month.

    Each reading needs ``reading_date`` (date or datetime), ``consumption_kwh``
    and ``emission_co2_kg`` (may be None, counted as 0). Day-of-month is
    ignored. The result is sorted by month ascending and does not depend on
    the input order.

    Args:
        readings: Meter readings of a single user

    Returns:
        One MonthlySummary per month present in the input
    """
    totals: dict[date, list] = {}

    for reading in readings:
        reading_date = reading.reading_date
        month = date(reading_date.year, reading_date.month, 1)

        bucket = totals.setdefault(month, [ZERO, ZERO, False])
        bucket[0] += to_decimal(reading.consumption_kwh)
        if reading.emission_co2_kg is None:
            bucket[2] = True
        else:
            bucket[1] += to_decimal(reading.emission_co2_kg)

    return [
        MonthlySummary(
            month=month,
            total_consumption_kwh=consumption,
            total_emission_co2_kg=emission,
            emission_missing=missing,
        )
        for month, (consumption, emission, missing) in sorted(totals.items())
    ]


def cumulative_deviation(
    summaries: Sequence[MonthlySummary], metric: MetricEnum
) -> Decimal:
    """
    Sum of (baseline - actual) over the months after the baseline window.

    ``summaries`` must be sorted ascending and hold at least BASELINE_MONTHS
    entries. The value is not rounded.
    """
    if len(summaries) < BASELINE_MONTHS:
        raise ValueError(
            f"Need at least {BASELINE_MONTHS} months, got {len(summaries)}"
        )

    baseline_total = sum(
        (s.value_of(metric) for s in summaries[:BASELINE_MONTHS]), ZERO
    )
    baseline = baseline_total / BASELINE_MONTHS

    return sum(
        (baseline - s.value_of(metric) for s in summaries[BASELINE_MONTHS:]), ZERO
    )


def compute_baseline_deviation(
    summaries: Sequence[MonthlySummary],
    metric: MetricEnum,
    rate: Optional[Any] = None,
) -> DeviationResult:
    """
    Cumulative savings (consumption) or CO2 reduction (emission) against the baseline.

    Checks run in this order:
        1. consumption only: rate unset or <= 0 -> RATE_MISSING
        2. no months -> NO_DATA
        3. fewer than BASELINE_MONTHS months -> INSUFFICIENT_BASELINE

    Args:
        summaries: Monthly summaries sorted ascending
        metric: CONSUMPTION for monetary savings, EMISSION for kg CO2
        rate: Electricity rate per kWh, used for CONSUMPTION only

    Returns:
        DeviationResult with the value rounded half-up to 2 decimal places
    """
    metric = MetricEnum(metric)
    monetary = metric == MetricEnum.CONSUMPTION
    subject = "savings" if monetary else "CO2 reduction"

    if monetary:
        rate_value = to_decimal(rate) if rate is not None else None
        if rate_value is None or rate_value <= 0:
            return DeviationResult(
                value=ZERO,
                status=OutcomeStatus.RATE_MISSING,
                message="Electricity rate not set in profile, cannot calculate savings.",
            )

    if not summaries:
        return DeviationResult(
            value=ZERO,
            status=OutcomeStatus.NO_DATA,
            message=f"No meter readings available to calculate {subject}.",
        )

    if len(summaries) < BASELINE_MONTHS:
        return DeviationResult(
            value=ZERO,
            status=OutcomeStatus.INSUFFICIENT_BASELINE,
            message=(
                f"Not enough historical data (need at least {BASELINE_MONTHS} months) "
                f"to establish a baseline for {subject}."
            ),
            months_needed=BASELINE_MONTHS,
        )

    total = cumulative_deviation(summaries, metric)
    if monetary:
        total = total * rate_value

    return DeviationResult(
        value=round_half_up(total),
        status=OutcomeStatus.OK,
        message=(
            "Total monetary savings calculated successfully."
            if monetary
            else "Total CO2 reduction calculated successfully."
        ),
    )
