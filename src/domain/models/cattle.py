from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender
from src.utils.datetime_tz import farm_today

ADULT_AGE_MONTHS = 24


@dataclass(slots=True)
class Cattle:
    id: UUID
    tag_number: str
    name: str
    gender: Gender
    status: CattleStatus = CattleStatus.ACTIVE
    breed: str | None = None
    birth_date: date | None = None
    weight: Decimal | None = None
    photo_url: str | None = None
    notes: str | None = None
    metadata: dict[str, Any] | None = None

    # Pedigree
    parent_bull_id: UUID | None = None
    parent_cow_id: UUID | None = None

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        tag_number: str,
        name: str,
        gender: Gender,
        status: CattleStatus | None = None,
        breed: str | None = None,
        birth_date: date | None = None,
        weight: Decimal | None = None,
        photo_url: str | None = None,
        notes: str | None = None,
        metadata: dict[str, Any] | None = None,
        parent_bull_id: UUID | None = None,
        parent_cow_id: UUID | None = None,
    ) -> Cattle:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            tag_number=tag_number,
            name=name,
            gender=gender,
            status=status or CattleStatus.ACTIVE,
            breed=breed,
            birth_date=birth_date,
            weight=weight,
            photo_url=photo_url,
            notes=notes,
            metadata=metadata,
            parent_bull_id=parent_bull_id,
            parent_cow_id=parent_cow_id,
            created_at=now,
            updated_at=now,
        )

    # Derived projections. Recomputed on every call so they follow the clock.

    def age(self, today: date | None = None) -> int | None:
        """Whole years since birth, or None when the birth date is unknown."""
        if self.birth_date is None:
            return None
        today = today or farm_today()
        years = today.year - self.birth_date.year
        if (today.month, today.day) < (self.birth_date.month, self.birth_date.day):
            years -= 1
        return years

    def age_in_months(self, today: date | None = None) -> int | None:
        """Calendar months since birth; day of month is ignored."""
        if self.birth_date is None:
            return None
        today = today or farm_today()
        return (today.year - self.birth_date.year) * 12 + (today.month - self.birth_date.month)

    def is_adult(self, today: date | None = None) -> bool:
        months = self.age_in_months(today)
        return months is not None and months >= ADULT_AGE_MONTHS

    def can_milk(self, today: date | None = None) -> bool:
        """Eligibility gate for recording production against this animal."""
        return (
            self.gender == Gender.FEMALE
            and self.status == CattleStatus.ACTIVE
            and self.is_adult(today)
        )

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.tag_number})"
