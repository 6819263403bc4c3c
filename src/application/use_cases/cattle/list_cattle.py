from __future__ import annotations

import math
from dataclasses import dataclass

from src.application.errors import ValidationError
from src.application.interfaces.repositories.cattle import CattleFilters
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle

SORT_FIELDS = ("name", "tag_number", "birth_date", "status", "created_at")


@dataclass(slots=True)
class ListCattleResult:
    items: list[Cattle]
    total: int
    page: int
    limit: int
    total_pages: int


async def execute(
    uow: UnitOfWork,
    filters: CattleFilters,
    *,
    page: int = 1,
    limit: int = 20,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> ListCattleResult:
    if limit <= 0 or limit > 100:
        raise ValidationError("limit must be between 1 and 100")
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    sort_field = sort_by if sort_by in SORT_FIELDS else "created_at"
    sort_dir = (sort_order or "desc").lower()

    items = await uow.cattle.list(
        filters,
        limit=limit,
        offset=(page - 1) * limit,
        sort_by=sort_field,
        sort_dir=sort_dir,
    )
    total = await uow.cattle.count(filters)
    return ListCattleResult(
        items=items,
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )
