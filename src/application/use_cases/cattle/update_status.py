from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import CattleStatus


async def execute(uow: UnitOfWork, cattle_id: UUID, status: CattleStatus) -> Cattle:
    existing = await uow.cattle.get(cattle_id)
    if not existing:
        raise NotFound(f"Cattle with ID {cattle_id} not found")
    if existing.status == status:
        return existing
    updated = await uow.cattle.update(cattle_id, {"status": status})
    if not updated:
        raise NotFound(f"Cattle with ID {cattle_id} not found")
    await uow.commit()
    return updated
