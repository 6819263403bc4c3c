from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.production_status import ProductionStatus
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm.cattle import _enum_values


class ProductionORM(Base):
    __tablename__ = "productions"
    __table_args__ = (
        # One live record per cattle, day and milking session
        Index(
            "ux_productions_cattle_date_session_active",
            "cattle_id",
            "date",
            "session",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
        Index("ix_productions_date_session", "date", "session"),
        Index("ix_productions_cattle_date", "cattle_id", "date"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    cattle_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("cattle.id"), nullable=False
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    session: Mapped[MilkingSession] = mapped_column(
        Enum(MilkingSession, name="milking_session", values_callable=_enum_values),
        nullable=False,
    )
    quantity: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    fat_content: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    protein_content: Mapped[Decimal | None] = mapped_column(Numeric(4, 2), nullable=True)
    temperature: Mapped[Decimal | None] = mapped_column(Numeric(4, 1), nullable=True)
    status: Mapped[ProductionStatus] = mapped_column(
        Enum(ProductionStatus, name="production_status", values_callable=_enum_values),
        nullable=False,
        default=ProductionStatus.RECORDED,
    )
    quality_metrics: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    recorded_by_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    verified_by_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
