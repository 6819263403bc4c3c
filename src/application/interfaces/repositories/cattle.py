from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender


@dataclass(slots=True)
class CattleFilters:
    status: CattleStatus | None = None
    gender: Gender | None = None
    breed: str | None = None
    search: str | None = None
    born_after: date | None = None
    born_before: date | None = None


class CattleRepository(Protocol):
    async def add(self, cattle: Cattle) -> Cattle: ...

    async def get(self, cattle_id: UUID) -> Cattle | None: ...

    async def get_by_tag(self, tag_number: str) -> Cattle | None: ...

    async def tag_exists(self, tag_number: str, *, exclude_id: UUID | None = None) -> bool: ...

    async def list(
        self,
        filters: CattleFilters,
        *,
        limit: int | None = None,
        offset: int | None = None,
        sort_by: str | None = None,
        sort_dir: str | None = None,
    ) -> list[Cattle]: ...

    async def count(self, filters: CattleFilters) -> int: ...

    async def list_all(self) -> list[Cattle]: ...

    async def list_offspring(self, parent_id: UUID) -> list[Cattle]: ...

    async def update(self, cattle_id: UUID, data: dict) -> Cattle | None: ...

    async def delete(self, cattle_id: UUID) -> bool: ...
