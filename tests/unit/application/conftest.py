from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from uuid import UUID

import pytest

from src.application.interfaces.repositories.cattle import CattleFilters
from src.application.interfaces.repositories.productions import (
    DailyTotalsRow,
    ProductionFilters,
)
from src.domain.models.cattle import Cattle
from src.domain.models.production import Production
from src.domain.value_objects.gender import Gender
from src.domain.value_objects.milking_session import MilkingSession


class InMemoryCattleRepo:
    def __init__(self) -> None:
        self.rows: dict[UUID, Cattle] = {}

    def _live(self) -> list[Cattle]:
        return [c for c in self.rows.values() if c.deleted_at is None]

    async def add(self, cattle: Cattle) -> Cattle:
        self.rows[cattle.id] = cattle
        return cattle

    async def get(self, cattle_id: UUID) -> Cattle | None:
        cattle = self.rows.get(cattle_id)
        if cattle is None or cattle.deleted_at is not None:
            return None
        return cattle

    async def get_by_tag(self, tag_number: str) -> Cattle | None:
        return next((c for c in self._live() if c.tag_number == tag_number), None)

    async def tag_exists(self, tag_number: str, *, exclude_id: UUID | None = None) -> bool:
        return any(
            c.tag_number == tag_number and c.id != exclude_id for c in self._live()
        )

    def _matches(self, cattle: Cattle, filters: CattleFilters) -> bool:
        if filters.status is not None and cattle.status != filters.status:
            return False
        if filters.gender is not None and cattle.gender != filters.gender:
            return False
        if filters.breed and filters.breed.lower() not in (cattle.breed or "").lower():
            return False
        if filters.search:
            term = filters.search.lower()
            if term not in cattle.name.lower() and term not in cattle.tag_number.lower():
                return False
        return True

    async def list(self, filters, *, limit=None, offset=None, sort_by=None, sort_dir=None):
        items = [c for c in self._live() if self._matches(c, filters)]
        items.sort(key=lambda c: getattr(c, sort_by or "created_at"), reverse=sort_dir == "desc")
        start = offset or 0
        return items[start : start + limit] if limit else items[start:]

    async def count(self, filters) -> int:
        return len([c for c in self._live() if self._matches(c, filters)])

    async def list_all(self) -> list[Cattle]:
        return self._live()

    async def list_offspring(self, parent_id: UUID) -> list[Cattle]:
        return [
            c for c in self._live() if parent_id in (c.parent_bull_id, c.parent_cow_id)
        ]

    async def update(self, cattle_id: UUID, data: dict) -> Cattle | None:
        current = await self.get(cattle_id)
        if current is None:
            return None
        updated = replace(current, **data)
        self.rows[cattle_id] = updated
        return updated

    async def delete(self, cattle_id: UUID) -> bool:
        current = await self.get(cattle_id)
        if current is None:
            return False
        current.deleted_at = datetime.now(timezone.utc)
        return True


class InMemoryProductionsRepo:
    def __init__(self) -> None:
        self.rows: dict[UUID, Production] = {}

    def _live(self) -> list[Production]:
        return [p for p in self.rows.values() if p.deleted_at is None]

    async def add(self, production: Production) -> Production:
        self.rows[production.id] = production
        return production

    async def get(self, production_id: UUID) -> Production | None:
        production = self.rows.get(production_id)
        if production is None or production.deleted_at is not None:
            return None
        return production

    async def find_by_key(self, cattle_id, on_date, session, *, exclude_id=None):
        return next(
            (
                p
                for p in self._live()
                if p.cattle_id == cattle_id
                and p.date == on_date
                and p.session == session
                and p.id != exclude_id
            ),
            None,
        )

    def _matches(self, p: Production, filters: ProductionFilters) -> bool:
        if filters.cattle_id is not None and p.cattle_id != filters.cattle_id:
            return False
        if filters.session is not None and p.session != filters.session:
            return False
        if filters.status is not None and p.status != filters.status:
            return False
        if filters.date is not None and p.date != filters.date:
            return False
        if filters.date_from is not None and p.date < filters.date_from:
            return False
        if filters.date_to is not None and p.date > filters.date_to:
            return False
        return True

    async def list(self, filters, *, limit=None, offset=None, sort_by=None, sort_dir=None):
        items = [p for p in self._live() if self._matches(p, filters)]
        if sort_by == "history":
            items.sort(key=lambda p: p.session != MilkingSession.MORNING)
            items.sort(key=lambda p: p.date, reverse=True)
        else:
            items.sort(key=lambda p: getattr(p, sort_by or "date"), reverse=sort_dir != "asc")
        start = offset or 0
        return items[start : start + limit] if limit else items[start:]

    async def count(self, filters) -> int:
        return len([p for p in self._live() if self._matches(p, filters)])

    async def daily_totals(self, date_from: date, date_to: date) -> list[DailyTotalsRow]:
        morning: dict[date, Decimal] = defaultdict(Decimal)
        evening: dict[date, Decimal] = defaultdict(Decimal)
        cattle: dict[date, set] = defaultdict(set)
        for p in self._live():
            if not date_from <= p.date <= date_to:
                continue
            bucket = morning if p.session == MilkingSession.MORNING else evening
            bucket[p.date] += p.quantity
            cattle[p.date].add(p.cattle_id)
        return [
            DailyTotalsRow(
                date=day,
                morning=morning.get(day, Decimal("0")),
                evening=evening.get(day, Decimal("0")),
                cattle_count=len(ids),
            )
            for day, ids in sorted(cattle.items())
        ]

    async def update(self, production_id: UUID, data: dict) -> Production | None:
        current = await self.get(production_id)
        if current is None:
            return None
        updated = replace(current, **data)
        self.rows[production_id] = updated
        return updated

    async def delete(self, production_id: UUID) -> bool:
        current = await self.get(production_id)
        if current is None:
            return False
        current.deleted_at = datetime.now(timezone.utc)
        return True


def make_uow(cattle_repo=None, productions_repo=None):
    calls = {"commit": 0, "rollback": 0}

    async def commit():
        calls["commit"] += 1

    async def rollback():
        calls["rollback"] += 1

    return SimpleNamespace(
        cattle=cattle_repo or InMemoryCattleRepo(),
        productions=productions_repo or InMemoryProductionsRepo(),
        commit=commit,
        rollback=rollback,
        calls=calls,
    )


@pytest.fixture()
def uow():
    return make_uow()


@pytest.fixture()
def add_cattle(uow):
    async def _add(tag: str, name: str | None = None, **overrides) -> Cattle:
        data = {
            "tag_number": tag,
            "name": name or f"Cow {tag}",
            "gender": Gender.FEMALE,
            "birth_date": date(2018, 3, 1),
        }
        data.update(overrides)
        return await uow.cattle.add(Cattle.create(**data))

    return _add
