from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.models.cattle import Cattle
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CattleCreate(BaseModel):
    tag_number: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    gender: Gender
    status: CattleStatus | None = CattleStatus.ACTIVE
    breed: str | None = Field(default=None, max_length=50)
    birth_date: date | None = None
    weight: Decimal | None = Field(default=None, ge=0, le=2000, decimal_places=2)
    photo_url: str | None = Field(default=None, max_length=500)
    notes: str | None = None
    metadata: dict[str, Any] | None = None

    # Pedigree
    parent_bull_id: UUID | None = None
    parent_cow_id: UUID | None = None

    @field_validator(
        "breed", "birth_date", "notes", "photo_url", "parent_bull_id", "parent_cow_id",
        mode="before",
    )
    @classmethod
    def empty_strings_are_missing(cls, v: Any) -> Any:
        return _blank_to_none(v)


class CattleUpdate(BaseModel):
    tag_number: str | None = Field(default=None, min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=100)
    gender: Gender | None = None
    status: CattleStatus | None = None
    breed: str | None = Field(default=None, max_length=50)
    birth_date: date | None = None
    weight: Decimal | None = Field(default=None, ge=0, le=2000, decimal_places=2)
    photo_url: str | None = Field(default=None, max_length=500)
    notes: str | None = None
    metadata: dict[str, Any] | None = None
    parent_bull_id: UUID | None = None
    parent_cow_id: UUID | None = None

    @field_validator(
        "breed", "birth_date", "notes", "photo_url", "parent_bull_id", "parent_cow_id",
        mode="before",
    )
    @classmethod
    def empty_strings_are_missing(cls, v: Any) -> Any:
        return _blank_to_none(v)


class CattleStatusUpdate(BaseModel):
    status: CattleStatus


class CattleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    tag_number: str
    name: str
    gender: Gender
    status: CattleStatus
    breed: str | None
    birth_date: date | None
    weight: Decimal | None
    photo_url: str | None
    notes: str | None
    metadata: dict[str, Any] | None
    parent_bull_id: UUID | None
    parent_cow_id: UUID | None
    created_at: datetime
    updated_at: datetime
    # Derived at read time
    age: int | None = None
    age_in_months: int | None = None
    is_adult: bool = False
    can_milk: bool = False

    @classmethod
    def from_domain(cls, cattle: Cattle, today: date | None = None) -> CattleResponse:
        return cls(
            id=cattle.id,
            tag_number=cattle.tag_number,
            name=cattle.name,
            gender=cattle.gender,
            status=cattle.status,
            breed=cattle.breed,
            birth_date=cattle.birth_date,
            weight=cattle.weight,
            photo_url=cattle.photo_url,
            notes=cattle.notes,
            metadata=cattle.metadata,
            parent_bull_id=cattle.parent_bull_id,
            parent_cow_id=cattle.parent_cow_id,
            created_at=cattle.created_at,
            updated_at=cattle.updated_at,
            age=cattle.age(today),
            age_in_months=cattle.age_in_months(today),
            is_adult=cattle.is_adult(today),
            can_milk=cattle.can_milk(today),
        )


class CattleListResponse(BaseModel):
    items: list[CattleResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class CattleStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    total: int
    by_status: dict[str, int]
    by_gender: dict[str, int]
    average_age: Decimal


class TagCheckResponse(BaseModel):
    exists: bool
