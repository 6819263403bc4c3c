from __future__ import annotations

import calendar
from datetime import date

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.reports.daily_summary import DailySummary, summarize


async def execute(uow: UnitOfWork, year: int, month: int) -> list[DailySummary]:
    """One summary per calendar day of the month, in day order.

    Totals come from a single query grouped by date; days without records are
    reported as zero summaries.
    """
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise ValidationError("year is out of range")
    days_in_month = calendar.monthrange(year, month)[1]
    first, last = date(year, month, 1), date(year, month, days_in_month)

    rows = await uow.productions.daily_totals(first, last)
    by_date = {row.date: row for row in rows}
    return [
        summarize(date(year, month, day), by_date.get(date(year, month, day)))
        for day in range(1, days_in_month + 1)
    ]
