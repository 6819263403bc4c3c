from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Literal, Union
from uuid import UUID, uuid4

from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.production_status import ProductionStatus

QualityGrade = Literal["A", "B", "C"]

BASE_PRICE_PER_L = Decimal("0.50")
REFERENCE_FAT = Decimal("3.5")
REFERENCE_PROTEIN = Decimal("3.2")
FAT_BONUS_RATE = Decimal("0.02")
PROTEIN_BONUS_RATE = Decimal("0.03")


def _fat_score(fat: Decimal) -> int:
    if fat >= Decimal("3.5"):
        return 2
    if fat >= Decimal("3.0"):
        return 1
    return 0


def _protein_score(protein: Decimal) -> int:
    if protein >= Decimal("3.2"):
        return 2
    if protein >= Decimal("2.8"):
        return 1
    return 0


@dataclass(slots=True)
class Production:
    id: UUID
    cattle_id: UUID
    date: date
    session: MilkingSession
    quantity: Decimal  # liters
    status: ProductionStatus = ProductionStatus.RECORDED
    fat_content: Decimal | None = None  # percentage
    protein_content: Decimal | None = None  # percentage
    temperature: Decimal | None = None  # celsius
    quality_metrics: dict[str, Any] | None = None
    recorded_by_id: UUID | None = None
    verified_by_id: UUID | None = None
    verified_at: datetime | None = None
    notes: str | None = None
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        cattle_id: UUID,
        date: date,
        session: MilkingSession,
        quantity: Decimal,
        recorded_by_id: UUID,
        fat_content: Decimal | None = None,
        protein_content: Decimal | None = None,
        temperature: Decimal | None = None,
        quality_metrics: dict[str, Any] | None = None,
        notes: str | None = None,
    ) -> Production:
        if quantity < 0:
            raise ValueError("quantity must be non-negative")
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            cattle_id=cattle_id,
            date=date,
            session=session,
            quantity=quantity,
            status=ProductionStatus.RECORDED,
            fat_content=fat_content,
            protein_content=protein_content,
            temperature=temperature,
            quality_metrics=quality_metrics,
            recorded_by_id=recorded_by_id,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    @property
    def state(self) -> ProductionState:
        if self.status == ProductionStatus.VERIFIED:
            return Verified(verified_by_id=self.verified_by_id, verified_at=self.verified_at)
        if self.status == ProductionStatus.REJECTED:
            return Rejected(verified_by_id=self.verified_by_id, verified_at=self.verified_at)
        return Recorded(notes=self.notes)

    def quality_grade(self) -> QualityGrade | None:
        if self.fat_content is None or self.protein_content is None:
            return None
        score = _fat_score(self.fat_content) + _protein_score(self.protein_content)
        if score >= 3:
            return "A"
        if score >= 2:
            return "B"
        return "C"

    def is_high_quality(self) -> bool:
        return self.quality_grade() == "A"

    def milk_value(self) -> Decimal:
        """Approximate value of the milking at the base price plus composition bonuses.

        Bonuses are relative to the reference fat/protein percentages and may be
        negative. A missing component contributes nothing.
        """
        fat_bonus = Decimal("0")
        protein_bonus = Decimal("0")
        if self.fat_content is not None:
            fat_bonus = (self.fat_content - REFERENCE_FAT) * FAT_BONUS_RATE
        if self.protein_content is not None:
            protein_bonus = (self.protein_content - REFERENCE_PROTEIN) * PROTEIN_BONUS_RATE
        return self.quantity * (BASE_PRICE_PER_L + fat_bonus + protein_bonus)


# Status variants. Only ``Recorded`` offers transitions; the terminal variants
# carry the verification facts and nothing else.


@dataclass(frozen=True, slots=True)
class Recorded:
    notes: str | None = None

    def verify(
        self,
        decision: ProductionStatus,
        *,
        verified_by_id: UUID,
        verified_at: datetime,
        note: str | None = None,
    ) -> dict[str, Any]:
        """Return the field changes that move a record into a terminal status."""
        if not decision.is_terminal:
            raise ValueError("verification decision must be verified or rejected")
        changes: dict[str, Any] = {
            "status": decision,
            "verified_by_id": verified_by_id,
            "verified_at": verified_at,
        }
        if note:
            entry = f"Verification: {note}"
            changes["notes"] = f"{self.notes}\n\n{entry}" if self.notes else entry
        return changes


@dataclass(frozen=True, slots=True)
class Verified:
    verified_by_id: UUID | None
    verified_at: datetime | None


@dataclass(frozen=True, slots=True)
class Rejected:
    verified_by_id: UUID | None
    verified_at: datetime | None


ProductionState = Union[Recorded, Verified, Rejected]
