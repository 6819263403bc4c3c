from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from src.application.errors import ConflictError, PermissionDenied
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.cattle.pedigree import validate_parents
from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateCattleInput:
    tag_number: str
    name: str
    gender: Gender
    status: CattleStatus | None = None
    breed: str | None = None
    birth_date: date | None = None
    weight: Decimal | None = None
    photo_url: str | None = None
    notes: str | None = None
    metadata: dict[str, Any] | None = None
    # Pedigree
    parent_bull_id: UUID | None = None
    parent_cow_id: UUID | None = None


def ensure_can_create(role: Role) -> None:
    if not role.can_create():
        raise PermissionDenied("Role not allowed to create cattle")


async def execute(uow: UnitOfWork, role: Role, payload: CreateCattleInput) -> Cattle:
    ensure_can_create(role)
    if await uow.cattle.tag_exists(payload.tag_number):
        raise ConflictError(f"Cattle with tag number {payload.tag_number} already exists")
    await validate_parents(
        uow,
        parent_bull_id=payload.parent_bull_id,
        parent_cow_id=payload.parent_cow_id,
    )
    cattle = Cattle.create(
        tag_number=payload.tag_number,
        name=payload.name,
        gender=payload.gender,
        status=payload.status,
        breed=payload.breed,
        birth_date=payload.birth_date,
        weight=payload.weight,
        photo_url=payload.photo_url,
        notes=payload.notes,
        metadata=payload.metadata,
        parent_bull_id=payload.parent_bull_id,
        parent_cow_id=payload.parent_cow_id,
    )
    created = await uow.cattle.add(cattle)
    await uow.commit()
    logger.info("Cattle %s registered with tag %s", created.id, created.tag_number)
    return created
