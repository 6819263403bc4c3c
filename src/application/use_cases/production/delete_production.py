from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound, PermissionDenied
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.production.state import require_recorded
from src.domain.value_objects.role import Role


def ensure_can_delete(role: Role) -> None:
    if not role.can_delete():
        raise PermissionDenied("Role not allowed to delete production records")


async def execute(uow: UnitOfWork, role: Role, production_id: UUID) -> None:
    ensure_can_delete(role)
    existing = await uow.productions.get(production_id)
    if not existing:
        raise NotFound(f"Production record with ID {production_id} not found")
    require_recorded(existing, "delete")
    deleted = await uow.productions.delete(production_id)
    if not deleted:
        raise NotFound(f"Production record with ID {production_id} not found")
    await uow.commit()
