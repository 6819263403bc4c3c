from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from src.application.errors import AppError, BadRequest, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.production import create_production
from src.application.use_cases.production.create_production import CreateProductionInput
from src.domain.models.production import Production
from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BulkItemOutcome:
    index: int
    payload: CreateProductionInput
    production: Production | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.production is not None


@dataclass(slots=True)
class BulkCreateResult:
    outcomes: list[BulkItemOutcome] = field(default_factory=list)

    @property
    def created(self) -> list[Production]:
        return [o.production for o in self.outcomes if o.production is not None]

    @property
    def errors(self) -> list[str]:
        return [o.error for o in self.outcomes if o.error is not None]


def _describe(payload: CreateProductionInput) -> str:
    return (
        f"{payload.cattle_id}-{payload.date.isoformat()}-"
        f"{MilkingSession(payload.session).value}"
    )


async def execute(
    uow: UnitOfWork,
    role: Role,
    recorded_by: UUID,
    items: list[CreateProductionInput],
) -> BulkCreateResult:
    """Create each item independently, one at a time.

    Every successful item is committed on its own, so a failing item never
    undoes an earlier success. Only a batch in which nothing succeeds raises.
    """
    create_production.ensure_can_record(role)
    if not items:
        raise ValidationError("At least one production record is required")

    result = BulkCreateResult()
    for index, payload in enumerate(items):
        try:
            created = await create_production.execute(uow, role, recorded_by, payload)
        except AppError as exc:
            await uow.rollback()
            result.outcomes.append(
                BulkItemOutcome(
                    index=index, payload=payload, error=f"{_describe(payload)}: {exc.message}"
                )
            )
            continue
        result.outcomes.append(BulkItemOutcome(index=index, payload=payload, production=created))

    if not result.created:
        raise BadRequest(
            f"All records failed: {'; '.join(result.errors)}",
            details={"errors": result.errors},
        )
    if result.errors:
        logger.warning(
            "Bulk production: %d of %d records failed: %s",
            len(result.errors),
            len(items),
            "; ".join(result.errors),
        )
    return result
