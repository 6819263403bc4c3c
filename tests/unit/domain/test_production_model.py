from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from src.domain.models.production import Production, Recorded, Rejected, Verified
from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.production_status import ProductionStatus


def make_production(**overrides) -> Production:
    data = {
        "cattle_id": uuid4(),
        "date": date(2025, 1, 1),
        "session": MilkingSession.MORNING,
        "quantity": Decimal("15"),
        "recorded_by_id": uuid4(),
    }
    data.update(overrides)
    return Production.create(**data)


@pytest.mark.parametrize(
    ("fat", "protein", "grade"),
    [
        ("3.6", "3.3", "A"),
        ("3.6", "2.9", "A"),
        ("3.1", "2.9", "B"),
        ("2.9", "2.7", "C"),
    ],
)
def test_quality_grade(fat, protein, grade):
    production = make_production(fat_content=Decimal(fat), protein_content=Decimal(protein))
    assert production.quality_grade() == grade
    assert production.is_high_quality() is (grade == "A")


def test_quality_grade_needs_both_components():
    assert make_production(fat_content=Decimal("4.0")).quality_grade() is None
    assert make_production(protein_content=Decimal("3.5")).quality_grade() is None


def test_milk_value_applies_fat_bonus():
    production = make_production(
        quantity=Decimal("15.5"), fat_content=Decimal("3.8"), protein_content=Decimal("3.2")
    )
    assert production.milk_value() == Decimal("7.843")


def test_milk_value_matches_reference_example():
    production = make_production(
        quantity=Decimal("15"), fat_content=Decimal("3.8"), protein_content=Decimal("3.3")
    )
    # 15 * (0.50 + 0.3*0.02 + 0.1*0.03) = 15 * 0.509
    assert production.milk_value() == Decimal("7.635")


def test_milk_value_without_components_uses_base_price():
    assert make_production(quantity=Decimal("10")).milk_value() == Decimal("5.00")


def test_create_rejects_negative_quantity():
    with pytest.raises(ValueError):
        make_production(quantity=Decimal("-1"))


def test_state_variants_follow_status():
    production = make_production(notes="first")
    assert isinstance(production.state, Recorded)
    assert production.state.notes == "first"

    stamp = datetime(2025, 1, 2, tzinfo=timezone.utc)
    production.status = ProductionStatus.VERIFIED
    production.verified_at = stamp
    assert isinstance(production.state, Verified)
    assert not hasattr(production.state, "verify")

    production.status = ProductionStatus.REJECTED
    assert isinstance(production.state, Rejected)
    assert production.state.verified_at == stamp


def test_recorded_verify_appends_note():
    verifier = uuid4()
    stamp = datetime(2025, 1, 2, tzinfo=timezone.utc)
    changes = Recorded(notes="Calm milking").verify(
        ProductionStatus.VERIFIED, verified_by_id=verifier, verified_at=stamp, note="ok"
    )
    assert changes["status"] == ProductionStatus.VERIFIED
    assert changes["verified_by_id"] == verifier
    assert changes["notes"] == "Calm milking\n\nVerification: ok"


def test_recorded_verify_without_previous_notes():
    changes = Recorded().verify(
        ProductionStatus.REJECTED,
        verified_by_id=uuid4(),
        verified_at=datetime.now(timezone.utc),
        note="too warm",
    )
    assert changes["notes"] == "Verification: too warm"


def test_recorded_verify_requires_terminal_decision():
    with pytest.raises(ValueError):
        Recorded().verify(
            ProductionStatus.RECORDED,
            verified_by_id=uuid4(),
            verified_at=datetime.now(timezone.utc),
        )
