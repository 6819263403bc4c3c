from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


def ensure_can_delete(role: Role) -> None:
    if not role.can_delete():
        raise PermissionDenied("Role not allowed to delete cattle")


async def execute(uow: UnitOfWork, role: Role, cattle_id: UUID) -> None:
    ensure_can_delete(role)
    deleted = await uow.cattle.delete(cattle_id)
    if not deleted:
        raise NotFound(f"Cattle with ID {cattle_id} not found")
    await uow.commit()
    logger.info("Cattle %s soft-deleted", cattle_id)
