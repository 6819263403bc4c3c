from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle


async def execute(uow: UnitOfWork, cattle_id: UUID) -> Cattle:
    cattle = await uow.cattle.get(cattle_id)
    if not cattle:
        raise NotFound(f"Cattle with ID {cattle_id} not found")
    return cattle


async def by_tag(uow: UnitOfWork, tag_number: str) -> Cattle:
    cattle = await uow.cattle.get_by_tag(tag_number)
    if not cattle:
        raise NotFound(f"Cattle with tag number {tag_number} not found")
    return cattle


async def tag_exists(uow: UnitOfWork, tag_number: str) -> bool:
    return await uow.cattle.tag_exists(tag_number)
