from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import and_, asc, case, desc, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.productions import (
    DailyTotalsRow,
    ProductionFilters,
    ProductionsRepository,
)
from src.domain.models.production import Production
from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.production_status import ProductionStatus
from src.infrastructure.db.orm.cattle import CattleORM
from src.infrastructure.db.orm.production import ProductionORM

# Morning sorts before evening regardless of the column's collation
_SESSION_ORDER = case((ProductionORM.session == MilkingSession.MORNING, 0), else_=1)

_SORT_COLUMNS = {
    "date": ProductionORM.date,
    "session": _SESSION_ORDER,
    "quantity": ProductionORM.quantity,
    "fat_content": ProductionORM.fat_content,
    "protein_content": ProductionORM.protein_content,
    "status": ProductionORM.status,
    "created_at": ProductionORM.created_at,
}


def _as_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    return Decimal(str(value)).quantize(Decimal("0.01"))


class ProductionsSQLAlchemyRepository(ProductionsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ProductionORM) -> Production:
        return Production(
            id=orm.id,
            cattle_id=orm.cattle_id,
            date=orm.date,
            session=MilkingSession(orm.session),
            quantity=orm.quantity,
            status=ProductionStatus(orm.status),
            fat_content=orm.fat_content,
            protein_content=orm.protein_content,
            temperature=orm.temperature,
            quality_metrics=orm.quality_metrics,
            recorded_by_id=orm.recorded_by_id,
            verified_by_id=orm.verified_by_id,
            verified_at=orm.verified_at,
            notes=orm.notes,
            deleted_at=orm.deleted_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    def _conditions(self, filters: ProductionFilters) -> list:
        conds = [ProductionORM.deleted_at.is_(None)]
        if filters.session is not None:
            conds.append(ProductionORM.session == filters.session)
        if filters.status is not None:
            conds.append(ProductionORM.status == filters.status)
        if filters.cattle_id is not None:
            conds.append(ProductionORM.cattle_id == filters.cattle_id)
        if filters.date is not None:
            conds.append(ProductionORM.date == filters.date)
        if filters.date_from is not None:
            conds.append(ProductionORM.date >= filters.date_from)
        if filters.date_to is not None:
            conds.append(ProductionORM.date <= filters.date_to)
        if filters.min_quantity is not None:
            conds.append(ProductionORM.quantity >= filters.min_quantity)
        if filters.max_quantity is not None:
            conds.append(ProductionORM.quantity <= filters.max_quantity)
        return conds

    def _filtered(self, stmt, filters: ProductionFilters):
        stmt = stmt.where(and_(*self._conditions(filters)))
        if filters.search:
            term = f"%{filters.search.lower()}%"
            stmt = stmt.join(CattleORM, CattleORM.id == ProductionORM.cattle_id).where(
                or_(
                    func.lower(CattleORM.name).like(term),
                    func.lower(CattleORM.tag_number).like(term),
                )
            )
        return stmt

    async def add(self, production: Production) -> Production:
        orm = ProductionORM(
            id=production.id,
            cattle_id=production.cattle_id,
            date=production.date,
            session=production.session,
            quantity=production.quantity,
            fat_content=production.fat_content,
            protein_content=production.protein_content,
            temperature=production.temperature,
            status=production.status,
            quality_metrics=production.quality_metrics,
            recorded_by_id=production.recorded_by_id,
            verified_by_id=production.verified_by_id,
            verified_at=production.verified_at,
            notes=production.notes,
            deleted_at=production.deleted_at,
            created_at=production.created_at,
            updated_at=production.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # Lost a race against a concurrent writer for the same key
            raise ConflictError(
                "Production record already exists for this cattle, date and session"
            ) from exc
        return self._to_domain(orm)

    async def get(self, production_id: UUID) -> Production | None:
        result = await self.session.execute(
            select(ProductionORM).where(
                ProductionORM.id == production_id,
                ProductionORM.deleted_at.is_(None),
            )
        )
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def find_by_key(
        self,
        cattle_id: UUID,
        on_date: date,
        session: MilkingSession,
        *,
        exclude_id: UUID | None = None,
    ) -> Production | None:
        stmt = select(ProductionORM).where(
            ProductionORM.cattle_id == cattle_id,
            ProductionORM.date == on_date,
            ProductionORM.session == session,
            ProductionORM.deleted_at.is_(None),
        )
        if exclude_id is not None:
            stmt = stmt.where(ProductionORM.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        filters: ProductionFilters,
        *,
        limit: int | None = None,
        offset: int | None = None,
        sort_by: str | None = None,
        sort_dir: str | None = None,
    ) -> list[Production]:
        stmt = self._filtered(select(ProductionORM), filters)
        if sort_by == "history":
            stmt = stmt.order_by(desc(ProductionORM.date), asc(_SESSION_ORDER))
        else:
            column = _SORT_COLUMNS.get(sort_by or "date", ProductionORM.date)
            dir_fn = asc if (sort_dir or "desc").lower() == "asc" else desc
            stmt = stmt.order_by(dir_fn(column), dir_fn(ProductionORM.id))
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(r) for r in result.scalars().all()]

    async def count(self, filters: ProductionFilters) -> int:
        stmt = self._filtered(select(func.count(ProductionORM.id)), filters)
        result = await self.session.execute(stmt)
        return int(result.scalar_one() or 0)

    async def daily_totals(self, date_from: date, date_to: date) -> list[DailyTotalsRow]:
        morning = func.sum(
            case((ProductionORM.session == MilkingSession.MORNING, ProductionORM.quantity), else_=0)
        )
        evening = func.sum(
            case((ProductionORM.session == MilkingSession.EVENING, ProductionORM.quantity), else_=0)
        )
        stmt = (
            select(
                ProductionORM.date,
                morning.label("morning"),
                evening.label("evening"),
                func.count(func.distinct(ProductionORM.cattle_id)).label("cattle_count"),
            )
            .where(
                ProductionORM.deleted_at.is_(None),
                ProductionORM.date >= date_from,
                ProductionORM.date <= date_to,
            )
            .group_by(ProductionORM.date)
            .order_by(ProductionORM.date)
        )
        result = await self.session.execute(stmt)
        return [
            DailyTotalsRow(
                date=row.date,
                morning=_as_decimal(row.morning),
                evening=_as_decimal(row.evening),
                cattle_count=int(row.cattle_count or 0),
            )
            for row in result.all()
        ]

    async def update(self, production_id: UUID, data: dict) -> Production | None:
        values = {**data, "updated_at": datetime.now(timezone.utc)}
        stmt = (
            update(ProductionORM)
            .where(ProductionORM.id == production_id, ProductionORM.deleted_at.is_(None))
            .values(**values)
            .returning(ProductionORM)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError(
                "Production record already exists for this cattle, date and session"
            ) from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, production_id: UUID) -> bool:
        now = datetime.now(timezone.utc)
        stmt = (
            update(ProductionORM)
            .where(ProductionORM.id == production_id, ProductionORM.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
            .returning(ProductionORM.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
