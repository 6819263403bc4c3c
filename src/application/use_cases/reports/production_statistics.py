from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from src.application.errors import ValidationError
from src.application.interfaces.repositories.productions import ProductionFilters
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.reports.daily_summary import ZERO, round2
from src.domain.value_objects.production_status import ProductionStatus


def _empty_quality() -> dict[str, int]:
    return {"grade_a": 0, "grade_b": 0, "grade_c": 0, "ungraded": 0}


def _empty_status() -> dict[str, int]:
    return {status.value: 0 for status in ProductionStatus}


@dataclass(slots=True)
class ProductionStatistics:
    total_production: Decimal = ZERO
    average_daily: Decimal = ZERO
    average_per_cow: Decimal = ZERO
    highest_daily: Decimal = ZERO
    lowest_daily: Decimal = ZERO
    total_cattle: int = 0
    active_cattle: int = 0
    quality_distribution: dict[str, int] = field(default_factory=_empty_quality)
    status_distribution: dict[str, int] = field(default_factory=_empty_status)


_GRADE_KEYS = {"A": "grade_a", "B": "grade_b", "C": "grade_c", None: "ungraded"}


async def execute(
    uow: UnitOfWork,
    from_date: date | None = None,
    to_date: date | None = None,
) -> ProductionStatistics:
    if from_date is not None and to_date is not None and from_date > to_date:
        raise ValidationError("from_date must not be after to_date")
    records = await uow.productions.list(
        ProductionFilters(date_from=from_date, date_to=to_date)
    )
    if not records:
        return ProductionStatistics()

    daily: dict[date, Decimal] = defaultdict(lambda: ZERO)
    cattle_ids = set()
    quality = _empty_quality()
    statuses = _empty_status()
    for record in records:
        daily[record.date] += record.quantity
        cattle_ids.add(record.cattle_id)
        quality[_GRADE_KEYS[record.quality_grade()]] += 1
        statuses[ProductionStatus(record.status).value] += 1

    total = sum(daily.values(), ZERO)
    return ProductionStatistics(
        total_production=round2(total),
        average_daily=round2(total / len(daily)),
        average_per_cow=round2(total / len(cattle_ids)),
        highest_daily=round2(max(daily.values())),
        lowest_daily=round2(min(daily.values())),
        total_cattle=len(cattle_ids),
        # every animal with production in range counts as active
        active_cattle=len(cattle_ids),
        quality_distribution=quality,
        status_distribution=statuses,
    )
