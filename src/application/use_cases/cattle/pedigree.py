from __future__ import annotations

from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.gender import Gender

_ROLES = {
    "parent_bull_id": ("Parent bull", Gender.MALE),
    "parent_cow_id": ("Parent cow", Gender.FEMALE),
}


async def validate_parent(uow: UnitOfWork, field_name: str, parent_id: UUID) -> None:
    """Ensure a parent reference resolves to a live record of the expected gender."""
    label, expected = _ROLES[field_name]
    parent = await uow.cattle.get(parent_id)
    if parent is None:
        raise ValidationError(
            f"{label} not found",
            details={"field": field_name, "value": str(parent_id)},
        )
    if parent.gender != expected:
        raise ValidationError(
            f"{label} must be {expected.value}",
            details={"field": field_name, "value": str(parent_id)},
        )


async def validate_parents(
    uow: UnitOfWork,
    *,
    parent_bull_id: UUID | None = None,
    parent_cow_id: UUID | None = None,
) -> None:
    # No cycle detection: only existence and gender are checked.
    if parent_bull_id is not None:
        await validate_parent(uow, "parent_bull_id", parent_bull_id)
    if parent_cow_id is not None:
        await validate_parent(uow, "parent_cow_id", parent_cow_id)
