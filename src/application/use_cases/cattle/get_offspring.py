from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle


async def execute(uow: UnitOfWork, cattle_id: UUID) -> list[Cattle]:
    if not await uow.cattle.get(cattle_id):
        raise NotFound(f"Cattle with ID {cattle_id} not found")
    return await uow.cattle.list_offspring(cattle_id)
