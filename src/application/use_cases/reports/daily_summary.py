from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from src.application.interfaces.repositories.productions import DailyTotalsRow
from src.application.interfaces.unit_of_work import UnitOfWork

ZERO = Decimal("0")
CENT = Decimal("0.01")


@dataclass(slots=True)
class DailySummary:
    date: date
    morning: Decimal
    evening: Decimal
    total: Decimal
    cattle_count: int
    average_per_cow: Decimal


def round2(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def summarize(day: date, row: DailyTotalsRow | None) -> DailySummary:
    """Turn the grouped totals for one day (or their absence) into a summary."""
    if row is None:
        return DailySummary(
            date=day, morning=ZERO, evening=ZERO, total=ZERO, cattle_count=0, average_per_cow=ZERO
        )
    total = row.morning + row.evening
    average = round2(total / row.cattle_count) if row.cattle_count else ZERO
    return DailySummary(
        date=day,
        morning=row.morning,
        evening=row.evening,
        total=total,
        cattle_count=row.cattle_count,
        average_per_cow=average,
    )


async def execute(uow: UnitOfWork, day: date) -> DailySummary:
    rows = await uow.productions.daily_totals(day, day)
    row = next((r for r in rows if r.date == day), None)
    return summarize(day, row)
