from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender
from src.utils.datetime_tz import farm_today


@dataclass(slots=True)
class CattleStatistics:
    total: int
    by_status: dict[str, int] = field(default_factory=dict)
    by_gender: dict[str, int] = field(default_factory=dict)
    average_age: Decimal = Decimal("0")


async def execute(uow: UnitOfWork) -> CattleStatistics:
    herd = await uow.cattle.list_all()
    today = farm_today()

    by_status = {status.value: 0 for status in CattleStatus}
    by_gender = {gender.value: 0 for gender in Gender}
    ages: list[int] = []
    for cattle in herd:
        by_status[CattleStatus(cattle.status).value] += 1
        by_gender[Gender(cattle.gender).value] += 1
        age = cattle.age(today)
        if age is not None:
            ages.append(age)

    average_age = Decimal("0")
    if ages:
        average_age = (Decimal(sum(ages)) / Decimal(len(ages))).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
    return CattleStatistics(
        total=len(herd),
        by_status=by_status,
        by_gender=by_gender,
        average_age=average_age,
    )
