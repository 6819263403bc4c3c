from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from src.domain.models.production import Production
from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.production_status import ProductionStatus


@dataclass(slots=True)
class ProductionFilters:
    session: MilkingSession | None = None
    status: ProductionStatus | None = None
    cattle_id: UUID | None = None
    date: date | None = None
    date_from: date | None = None
    date_to: date | None = None
    min_quantity: Decimal | None = None
    max_quantity: Decimal | None = None
    search: str | None = None


@dataclass(slots=True)
class DailyTotalsRow:
    """Per-date aggregate produced by a single grouped query."""

    date: date
    morning: Decimal
    evening: Decimal
    cattle_count: int


class ProductionsRepository(Protocol):
    async def add(self, production: Production) -> Production: ...

    async def get(self, production_id: UUID) -> Production | None: ...

    async def find_by_key(
        self,
        cattle_id: UUID,
        on_date: date,
        session: MilkingSession,
        *,
        exclude_id: UUID | None = None,
    ) -> Production | None: ...

    async def list(
        self,
        filters: ProductionFilters,
        *,
        limit: int | None = None,
        offset: int | None = None,
        sort_by: str | None = None,
        sort_dir: str | None = None,
    ) -> list[Production]: ...

    async def count(self, filters: ProductionFilters) -> int: ...

    async def daily_totals(self, date_from: date, date_to: date) -> list[DailyTotalsRow]: ...

    async def update(self, production_id: UUID, data: dict) -> Production | None: ...

    async def delete(self, production_id: UUID) -> bool: ...
