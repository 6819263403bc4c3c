from __future__ import annotations

from datetime import date as DtDate
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models.production import Production
from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.production_status import ProductionStatus


class ProductionCreate(BaseModel):
    date: DtDate
    session: MilkingSession
    quantity: Decimal = Field(gt=0, le=100, decimal_places=2)
    cattle_id: UUID
    fat_content: Decimal | None = Field(default=None, ge=0, le=10, decimal_places=2)
    protein_content: Decimal | None = Field(default=None, ge=0, le=8, decimal_places=2)
    temperature: Decimal | None = Field(default=None, ge=0, le=50, decimal_places=1)
    notes: str | None = None
    quality_metrics: dict[str, Any] | None = None


class ProductionUpdate(BaseModel):
    # cattle_id is fixed once recorded
    date: DtDate | None = None
    session: MilkingSession | None = None
    quantity: Decimal | None = Field(default=None, gt=0, le=100, decimal_places=2)
    fat_content: Decimal | None = Field(default=None, ge=0, le=10, decimal_places=2)
    protein_content: Decimal | None = Field(default=None, ge=0, le=8, decimal_places=2)
    temperature: Decimal | None = Field(default=None, ge=0, le=50, decimal_places=1)
    notes: str | None = None
    quality_metrics: dict[str, Any] | None = None


class ProductionsBulkCreate(BaseModel):
    productions: list[ProductionCreate] = Field(min_length=1, max_length=100)


class ProductionVerify(BaseModel):
    status: Literal["verified", "rejected"]
    notes: str | None = None


class ProductionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    cattle_id: UUID
    date: DtDate
    session: MilkingSession
    quantity: Decimal
    fat_content: Decimal | None
    protein_content: Decimal | None
    temperature: Decimal | None
    status: ProductionStatus
    quality_metrics: dict[str, Any] | None
    recorded_by_id: UUID | None
    verified_by_id: UUID | None
    verified_at: datetime | None
    notes: str | None
    created_at: datetime
    updated_at: datetime
    # Derived at read time
    quality_grade: Literal["A", "B", "C"] | None = None
    is_high_quality: bool = False
    milk_value: Decimal = Decimal("0")

    @classmethod
    def from_domain(cls, production: Production) -> ProductionResponse:
        data = {
            name: getattr(production, name)
            for name in (
                "id",
                "cattle_id",
                "date",
                "session",
                "quantity",
                "fat_content",
                "protein_content",
                "temperature",
                "status",
                "quality_metrics",
                "recorded_by_id",
                "verified_by_id",
                "verified_at",
                "notes",
                "created_at",
                "updated_at",
            )
        }
        return cls(
            **data,
            quality_grade=production.quality_grade(),
            is_high_quality=production.is_high_quality(),
            milk_value=production.milk_value().quantize(Decimal("0.01")),
        )


class ProductionListResponse(BaseModel):
    items: list[ProductionResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class DailySummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    date: DtDate
    morning: Decimal
    evening: Decimal
    total: Decimal
    cattle_count: int
    average_per_cow: Decimal


class QualityDistribution(BaseModel):
    grade_a: int
    grade_b: int
    grade_c: int
    ungraded: int


class StatusDistribution(BaseModel):
    recorded: int
    verified: int
    rejected: int


class ProductionStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    total_production: Decimal
    average_daily: Decimal
    average_per_cow: Decimal
    highest_daily: Decimal
    lowest_daily: Decimal
    total_cattle: int
    active_cattle: int
    quality_distribution: QualityDistribution
    status_distribution: StatusDistribution
