from __future__ import annotations

from datetime import date
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.repositories.productions import ProductionFilters
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production import Production


async def execute(
    uow: UnitOfWork,
    cattle_id: UUID,
    from_date: date | None = None,
    to_date: date | None = None,
) -> list[Production]:
    """Production of one animal, newest date first and morning before evening."""
    if not await uow.cattle.get(cattle_id):
        raise NotFound(f"Cattle with ID {cattle_id} not found")
    return await uow.productions.list(
        ProductionFilters(cattle_id=cattle_id, date_from=from_date, date_to=to_date),
        sort_by="history",
    )
