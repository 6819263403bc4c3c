from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import asc, desc, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, InfrastructureError
from src.application.interfaces.repositories.cattle import CattleFilters, CattleRepository
from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender
from src.infrastructure.db.orm.cattle import CattleORM

_SORT_COLUMNS = {
    "name": CattleORM.name,
    "tag_number": CattleORM.tag_number,
    "birth_date": CattleORM.birth_date,
    "status": CattleORM.status,
    "created_at": CattleORM.created_at,
}


class CattleSQLAlchemyRepository(CattleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: CattleORM) -> Cattle:
        return Cattle(
            id=orm.id,
            tag_number=orm.tag_number,
            name=orm.name,
            gender=Gender(orm.gender),
            status=CattleStatus(orm.status),
            breed=orm.breed,
            birth_date=orm.birth_date,
            weight=orm.weight,
            photo_url=orm.photo_url,
            notes=orm.notes,
            metadata=orm.metadata_,
            parent_bull_id=orm.parent_bull_id,
            parent_cow_id=orm.parent_cow_id,
            deleted_at=orm.deleted_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    def _live(self):
        return select(CattleORM).where(CattleORM.deleted_at.is_(None))

    def _apply_filters(self, stmt, filters: CattleFilters):
        if filters.status is not None:
            stmt = stmt.where(CattleORM.status == filters.status)
        if filters.gender is not None:
            stmt = stmt.where(CattleORM.gender == filters.gender)
        if filters.breed:
            stmt = stmt.where(func.lower(CattleORM.breed).like(f"%{filters.breed.lower()}%"))
        if filters.search:
            term = f"%{filters.search.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(CattleORM.name).like(term),
                    func.lower(CattleORM.tag_number).like(term),
                )
            )
        if filters.born_after is not None:
            stmt = stmt.where(CattleORM.birth_date >= filters.born_after)
        if filters.born_before is not None:
            stmt = stmt.where(CattleORM.birth_date <= filters.born_before)
        return stmt

    async def add(self, cattle: Cattle) -> Cattle:
        orm = CattleORM(
            id=cattle.id,
            tag_number=cattle.tag_number,
            name=cattle.name,
            breed=cattle.breed,
            birth_date=cattle.birth_date,
            gender=cattle.gender,
            status=cattle.status,
            weight=cattle.weight,
            photo_url=cattle.photo_url,
            notes=cattle.notes,
            metadata_=cattle.metadata,
            parent_bull_id=cattle.parent_bull_id,
            parent_cow_id=cattle.parent_cow_id,
            deleted_at=cattle.deleted_at,
            created_at=cattle.created_at,
            updated_at=cattle.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                f"Cattle with tag number {cattle.tag_number} already exists"
            ) from exc
        return self._to_domain(orm)

    async def get(self, cattle_id: UUID) -> Cattle | None:
        result = await self.session.execute(self._live().where(CattleORM.id == cattle_id))
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_tag(self, tag_number: str) -> Cattle | None:
        result = await self.session.execute(
            self._live().where(CattleORM.tag_number == tag_number)
        )
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def tag_exists(self, tag_number: str, *, exclude_id: UUID | None = None) -> bool:
        stmt = (
            select(func.count(CattleORM.id))
            .where(CattleORM.deleted_at.is_(None))
            .where(CattleORM.tag_number == tag_number)
        )
        if exclude_id is not None:
            stmt = stmt.where(CattleORM.id != exclude_id)
        result = await self.session.execute(stmt)
        return (result.scalar() or 0) > 0

    async def list(
        self,
        filters: CattleFilters,
        *,
        limit: int | None = None,
        offset: int | None = None,
        sort_by: str | None = None,
        sort_dir: str | None = None,
    ) -> list[Cattle]:
        stmt = self._apply_filters(self._live(), filters)
        column = _SORT_COLUMNS.get(sort_by or "created_at", CattleORM.created_at)
        dir_fn = asc if (sort_dir or "desc").lower() == "asc" else desc
        stmt = stmt.order_by(dir_fn(column), dir_fn(CattleORM.id))
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def count(self, filters: CattleFilters) -> int:
        stmt = select(func.count(CattleORM.id)).where(CattleORM.deleted_at.is_(None))
        stmt = self._apply_filters(stmt, filters)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_all(self) -> list[Cattle]:
        result = await self.session.execute(self._live().order_by(CattleORM.created_at))
        return [self._to_domain(row) for row in result.scalars().all()]

    async def list_offspring(self, parent_id: UUID) -> list[Cattle]:
        stmt = (
            self._live()
            .where(
                or_(CattleORM.parent_bull_id == parent_id, CattleORM.parent_cow_id == parent_id)
            )
            .order_by(CattleORM.birth_date, CattleORM.tag_number)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def update(self, cattle_id: UUID, data: dict) -> Cattle | None:
        values = dict(data)
        if "metadata" in values:
            values["metadata_"] = values.pop("metadata")
        values["updated_at"] = datetime.now(timezone.utc)
        stmt = (
            update(CattleORM)
            .where(CattleORM.id == cattle_id)
            .where(CattleORM.deleted_at.is_(None))
            .values(**values)
            .returning(CattleORM)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update cattle due to constraint violation") from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, cattle_id: UUID) -> bool:
        now = datetime.now(timezone.utc)
        stmt = (
            update(CattleORM)
            .where(CattleORM.id == cattle_id)
            .where(CattleORM.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
            .returning(CattleORM.id)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to delete cattle") from exc
        return result.scalar_one_or_none() is not None
