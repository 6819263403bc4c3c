from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production import Production


async def execute(uow: UnitOfWork, production_id: UUID) -> Production:
    production = await uow.productions.get(production_id)
    if not production:
        raise NotFound(f"Production record with ID {production_id} not found")
    return production
