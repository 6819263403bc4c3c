from __future__ import annotations

import math
from dataclasses import dataclass

from src.application.errors import ValidationError
from src.application.interfaces.repositories.productions import ProductionFilters
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production import Production

SORT_FIELDS = (
    "date",
    "session",
    "quantity",
    "fat_content",
    "protein_content",
    "status",
    "created_at",
)


@dataclass(slots=True)
class ListProductionsResult:
    items: list[Production]
    total: int
    page: int
    limit: int
    total_pages: int


async def execute(
    uow: UnitOfWork,
    filters: ProductionFilters,
    *,
    page: int = 1,
    limit: int = 20,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> ListProductionsResult:
    if limit <= 0 or limit > 100:
        raise ValidationError("limit must be between 1 and 100")
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    if (
        filters.date_from is not None
        and filters.date_to is not None
        and filters.date_from > filters.date_to
    ):
        raise ValidationError("from_date must not be after to_date")
    sort_field = sort_by if sort_by in SORT_FIELDS else "date"

    items = await uow.productions.list(
        filters,
        limit=limit,
        offset=(page - 1) * limit,
        sort_by=sort_field,
        sort_dir=(sort_order or "desc").lower(),
    )
    total = await uow.productions.count(filters)
    return ListProductionsResult(
        items=items,
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )
