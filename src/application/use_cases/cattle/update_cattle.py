from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from src.application.errors import ConflictError, NotFound, PermissionDenied
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.cattle.pedigree import validate_parent
from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender
from src.domain.value_objects.role import Role

UPDATABLE_FIELDS = (
    "tag_number",
    "name",
    "gender",
    "status",
    "breed",
    "birth_date",
    "weight",
    "photo_url",
    "notes",
    "metadata",
    # Pedigree
    "parent_bull_id",
    "parent_cow_id",
)


@dataclass(slots=True)
class UpdateCattleInput:
    tag_number: str | None = None
    name: str | None = None
    gender: Gender | None = None
    status: CattleStatus | None = None
    breed: str | None = None
    birth_date: date | None = None
    weight: Decimal | None = None
    photo_url: str | None = None
    notes: str | None = None
    metadata: dict[str, Any] | None = None
    parent_bull_id: UUID | None = None
    parent_cow_id: UUID | None = None


def ensure_can_update(role: Role) -> None:
    if not role.can_update():
        raise PermissionDenied("Role not allowed to update cattle")


async def execute(
    uow: UnitOfWork,
    role: Role,
    cattle_id: UUID,
    payload: UpdateCattleInput,
) -> Cattle:
    ensure_can_update(role)
    existing = await uow.cattle.get(cattle_id)
    if not existing:
        raise NotFound(f"Cattle with ID {cattle_id} not found")

    data: dict = {}
    for field_name in UPDATABLE_FIELDS:
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if not data:
        return existing

    new_tag = data.get("tag_number")
    if new_tag is not None and new_tag != existing.tag_number:
        if await uow.cattle.tag_exists(new_tag, exclude_id=cattle_id):
            raise ConflictError(f"Cattle with tag number {new_tag} already exists")
    for parent_field in ("parent_bull_id", "parent_cow_id"):
        new_parent = data.get(parent_field)
        if new_parent is not None and new_parent != getattr(existing, parent_field):
            await validate_parent(uow, parent_field, new_parent)

    updated = await uow.cattle.update(cattle_id, data)
    if not updated:
        raise NotFound(f"Cattle with ID {cattle_id} not found")
    await uow.commit()
    return updated
