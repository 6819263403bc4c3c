from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from src.application.errors import (
    ConflictError,
    IneligibleOperation,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production import Production
from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateProductionInput:
    cattle_id: UUID
    date: date
    session: MilkingSession
    quantity: Decimal
    fat_content: Decimal | None = None
    protein_content: Decimal | None = None
    temperature: Decimal | None = None
    notes: str | None = None
    quality_metrics: dict[str, Any] | None = None


def ensure_can_record(role: Role) -> None:
    if not role.can_record_production():
        raise PermissionDenied("Role not allowed to record production")


async def execute(
    uow: UnitOfWork,
    role: Role,
    recorded_by: UUID,
    payload: CreateProductionInput,
) -> Production:
    ensure_can_record(role)
    if payload.quantity < 0:
        raise ValidationError("quantity must be non-negative")

    cattle = await uow.cattle.get(payload.cattle_id)
    if not cattle:
        raise NotFound(f"Cattle with ID {payload.cattle_id} not found")
    if not cattle.can_milk():
        raise IneligibleOperation(
            f"Cattle {cattle.display_name} is not eligible for milk production",
            details={"cattle_id": str(cattle.id)},
        )

    session = MilkingSession(payload.session)
    existing = await uow.productions.find_by_key(cattle.id, payload.date, session)
    if existing is not None:
        raise ConflictError(
            f"Production record already exists for {cattle.name} on "
            f"{payload.date.isoformat()} {session.value} session",
            details={"existing_id": str(existing.id)},
        )

    production = Production.create(
        cattle_id=cattle.id,
        date=payload.date,
        session=session,
        quantity=payload.quantity,
        recorded_by_id=recorded_by,
        fat_content=payload.fat_content,
        protein_content=payload.protein_content,
        temperature=payload.temperature,
        quality_metrics=payload.quality_metrics,
        notes=payload.notes,
    )
    created = await uow.productions.add(production)
    await uow.commit()
    logger.info(
        "Production %s recorded for cattle %s on %s %s (%s L)",
        created.id,
        cattle.tag_number,
        created.date.isoformat(),
        created.session.value,
        created.quantity,
    )
    return created
