from __future__ import annotations

from src.application.interfaces.repositories.cattle import CattleFilters
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender
from src.utils.datetime_tz import farm_today


async def execute(uow: UnitOfWork) -> list[Cattle]:
    """Live cattle that currently pass the milking eligibility gate, by name."""
    candidates = await uow.cattle.list(
        CattleFilters(status=CattleStatus.ACTIVE, gender=Gender.FEMALE),
        sort_by="name",
        sort_dir="asc",
    )
    today = farm_today()
    return [c for c in candidates if c.can_milk(today)]
