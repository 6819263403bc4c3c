from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.production.state import require_recorded
from src.domain.models.production import Production
from src.domain.value_objects.production_status import ProductionStatus
from src.domain.value_objects.role import Role
from src.utils.datetime_tz import utc_now

logger = logging.getLogger(__name__)


def ensure_can_verify(role: Role) -> None:
    if not role.can_verify():
        raise PermissionDenied("Role not allowed to verify production")


async def execute(
    uow: UnitOfWork,
    role: Role,
    production_id: UUID,
    decision: ProductionStatus,
    verified_by: UUID,
    note: str | None = None,
) -> Production:
    ensure_can_verify(role)
    decision = ProductionStatus(decision)
    if not decision.is_terminal:
        raise ValidationError("Verification status must be verified or rejected")

    existing = await uow.productions.get(production_id)
    if not existing:
        raise NotFound(f"Production record with ID {production_id} not found")
    recorded = require_recorded(existing, "verify")

    changes = recorded.verify(
        decision, verified_by_id=verified_by, verified_at=utc_now(), note=note
    )
    updated = await uow.productions.update(production_id, changes)
    if not updated:
        raise NotFound(f"Production record with ID {production_id} not found")
    await uow.commit()
    logger.info("Production %s marked %s by %s", production_id, decision.value, verified_by)
    return updated
