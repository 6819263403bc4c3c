from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.production.state import require_recorded
from src.domain.models.production import Production
from src.domain.value_objects.milking_session import MilkingSession


@dataclass(slots=True)
class UpdateProductionInput:
    date: date | None = None
    session: MilkingSession | None = None
    quantity: Decimal | None = None
    fat_content: Decimal | None = None
    protein_content: Decimal | None = None
    temperature: Decimal | None = None
    notes: str | None = None
    quality_metrics: dict[str, Any] | None = None


async def execute(
    uow: UnitOfWork,
    production_id: UUID,
    payload: UpdateProductionInput,
) -> Production:
    existing = await uow.productions.get(production_id)
    if not existing:
        raise NotFound(f"Production record with ID {production_id} not found")
    require_recorded(existing, "update")

    data: dict = {}
    for field_name in (
        "date",
        "session",
        "quantity",
        "fat_content",
        "protein_content",
        "temperature",
        "notes",
        "quality_metrics",
    ):
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if not data:
        return existing
    if "quantity" in data and data["quantity"] < 0:
        raise ValidationError("quantity must be non-negative")

    if "date" in data or "session" in data:
        new_date = data.get("date", existing.date)
        new_session = MilkingSession(data.get("session", existing.session))
        clash = await uow.productions.find_by_key(
            existing.cattle_id, new_date, new_session, exclude_id=production_id
        )
        if clash is not None:
            raise ConflictError(
                "Production record already exists for this cattle on "
                f"{new_date.isoformat()} {new_session.value} session",
                details={"existing_id": str(clash.id)},
            )

    updated = await uow.productions.update(production_id, data)
    if not updated:
        raise NotFound(f"Production record with ID {production_id} not found")
    await uow.commit()
    return updated
