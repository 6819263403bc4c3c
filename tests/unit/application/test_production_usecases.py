from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from src.application.errors import (
    BadRequest,
    ConflictError,
    IneligibleOperation,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from src.application.interfaces.repositories.productions import ProductionFilters
from src.application.use_cases.cattle import delete_cattle
from src.application.use_cases.production import (
    bulk_create_productions,
    create_production,
    delete_production,
    get_production,
    list_productions,
    update_production,
    verify_production,
)
from src.application.use_cases.reports import cattle_history
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender
from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.production_status import ProductionStatus
from src.domain.value_objects.role import Role

DAY = date(2025, 1, 1)
MORNING = MilkingSession.MORNING
EVENING = MilkingSession.EVENING


def entry(cattle_id, quantity="20", session=MORNING, on=DAY, **extra):
    return create_production.CreateProductionInput(
        cattle_id=cattle_id, date=on, session=session, quantity=Decimal(quantity), **extra
    )


async def record(uow, cattle_id, quantity="20", session=MORNING, on=DAY, **extra):
    return await create_production.execute(
        uow, Role.WORKER, uuid4(), entry(cattle_id, quantity, session, on, **extra)
    )


@pytest.mark.asyncio
async def test_worker_records_production(uow, add_cattle):
    cow = await add_cattle("C-1")
    recorder = uuid4()
    created = await create_production.execute(uow, Role.WORKER, recorder, entry(cow.id))
    assert created.status == ProductionStatus.RECORDED
    assert created.recorded_by_id == recorder
    assert uow.calls["commit"] == 1


@pytest.mark.asyncio
async def test_missing_cattle_raises_not_found(uow):
    with pytest.raises(NotFound):
        await record(uow, uuid4())


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"gender": Gender.MALE},
        {"status": CattleStatus.SOLD},
        {"birth_date": date.today()},
        {"birth_date": None},
    ],
)
async def test_ineligible_cattle_is_refused(uow, add_cattle, overrides):
    cattle = await add_cattle("C-1", name="Bella", **overrides)
    with pytest.raises(IneligibleOperation) as exc:
        await record(uow, cattle.id)
    assert "Bella (C-1)" in exc.value.message
    assert uow.productions.rows == {}


@pytest.mark.asyncio
async def test_duplicate_session_conflicts_but_other_session_is_allowed(uow, add_cattle):
    cow = await add_cattle("C-1")
    await record(uow, cow.id, "20")
    with pytest.raises(ConflictError):
        await record(uow, cow.id, "21")
    evening = await record(uow, cow.id, "18", session=EVENING)
    assert evening.session == EVENING


@pytest.mark.asyncio
async def test_bulk_keeps_successes_and_reports_failures(uow, add_cattle):
    cow = await add_cattle("C-1")
    bull = await add_cattle("B-1", gender=Gender.MALE)
    result = await bulk_create_productions.execute(
        uow,
        Role.WORKER,
        uuid4(),
        [entry(cow.id, "20"), entry(bull.id, "5"), entry(cow.id, "21")],
    )
    assert [o.ok for o in result.outcomes] == [True, False, False]
    assert len(result.created) == 1
    assert result.errors[0].startswith(f"{bull.id}-2025-01-01-morning: ")
    assert uow.calls["rollback"] == 2
    assert len(uow.productions.rows) == 1


@pytest.mark.asyncio
async def test_bulk_all_failed_raises_bad_request(uow, add_cattle):
    bull = await add_cattle("B-1", gender=Gender.MALE)
    with pytest.raises(BadRequest) as exc:
        await bulk_create_productions.execute(
            uow, Role.WORKER, uuid4(), [entry(bull.id), entry(uuid4())]
        )
    assert exc.value.message.startswith("All records failed: ")
    assert len(exc.value.details["errors"]) == 2


@pytest.mark.asyncio
async def test_bulk_rejects_empty_batch(uow):
    with pytest.raises(ValidationError):
        await bulk_create_productions.execute(uow, Role.WORKER, uuid4(), [])


@pytest.mark.asyncio
async def test_verify_sets_terminal_status_once(uow, add_cattle):
    cow = await add_cattle("C-1")
    production = await record(uow, cow.id, notes="Calm")
    verifier = uuid4()

    verified = await verify_production.execute(
        uow, Role.MANAGER, production.id, ProductionStatus.VERIFIED, verifier, note="ok"
    )
    assert verified.status == ProductionStatus.VERIFIED
    assert verified.verified_by_id == verifier
    assert verified.verified_at is not None
    assert verified.notes == "Calm\n\nVerification: ok"

    with pytest.raises(IneligibleOperation):
        await verify_production.execute(
            uow, Role.MANAGER, production.id, ProductionStatus.REJECTED, verifier
        )


@pytest.mark.asyncio
async def test_verify_requires_manager_and_terminal_decision(uow, add_cattle):
    cow = await add_cattle("C-1")
    production = await record(uow, cow.id)
    with pytest.raises(PermissionDenied):
        await verify_production.execute(
            uow, Role.WORKER, production.id, ProductionStatus.VERIFIED, uuid4()
        )
    with pytest.raises(ValidationError):
        await verify_production.execute(
            uow, Role.ADMIN, production.id, ProductionStatus.RECORDED, uuid4()
        )
    with pytest.raises(NotFound):
        await verify_production.execute(
            uow, Role.ADMIN, uuid4(), ProductionStatus.VERIFIED, uuid4()
        )


@pytest.mark.asyncio
async def test_terminal_records_cannot_be_updated_or_deleted(uow, add_cattle):
    cow = await add_cattle("C-1")
    production = await record(uow, cow.id)
    await verify_production.execute(
        uow, Role.ADMIN, production.id, ProductionStatus.REJECTED, uuid4()
    )
    with pytest.raises(IneligibleOperation) as exc:
        await update_production.execute(
            uow, production.id, update_production.UpdateProductionInput(quantity=Decimal("3"))
        )
    assert exc.value.message == "Cannot update production record with status: rejected"
    with pytest.raises(IneligibleOperation):
        await delete_production.execute(uow, Role.ADMIN, production.id)


@pytest.mark.asyncio
async def test_update_rechecks_composite_key(uow, add_cattle):
    cow = await add_cattle("C-1")
    morning = await record(uow, cow.id)
    await record(uow, cow.id, session=EVENING)

    with pytest.raises(ConflictError):
        await update_production.execute(
            uow, morning.id, update_production.UpdateProductionInput(session=EVENING)
        )

    moved = await update_production.execute(
        uow,
        morning.id,
        update_production.UpdateProductionInput(date=date(2025, 1, 2), quantity=Decimal("22")),
    )
    assert moved.date == date(2025, 1, 2)
    assert moved.quantity == Decimal("22")


@pytest.mark.asyncio
async def test_delete_is_soft(uow, add_cattle):
    cow = await add_cattle("C-1")
    production = await record(uow, cow.id)
    with pytest.raises(PermissionDenied):
        await delete_production.execute(uow, Role.WORKER, production.id)
    await delete_production.execute(uow, Role.MANAGER, production.id)
    assert uow.productions.rows[production.id].deleted_at is not None
    with pytest.raises(NotFound):
        await get_production.execute(uow, production.id)
    # the key is free again once the record is deleted
    await record(uow, cow.id)


@pytest.mark.asyncio
async def test_list_productions_validates_range(uow):
    with pytest.raises(ValidationError):
        await list_productions.execute(
            uow, ProductionFilters(date_from=date(2025, 2, 1), date_to=date(2025, 1, 1))
        )
    with pytest.raises(ValidationError):
        await list_productions.execute(uow, ProductionFilters(), limit=101)


@pytest.mark.asyncio
async def test_list_productions_filters_by_session(uow, add_cattle):
    cow = await add_cattle("C-1")
    await record(uow, cow.id)
    await record(uow, cow.id, session=EVENING)
    result = await list_productions.execute(uow, ProductionFilters(session=EVENING))
    assert result.total == 1
    assert result.items[0].session == EVENING


@pytest.mark.asyncio
async def test_deleted_cattle_is_invisible_to_the_ledger(uow, add_cattle):
    cow = await add_cattle("C-1")
    await record(uow, cow.id)
    await delete_cattle.execute(uow, Role.MANAGER, cow.id)

    with pytest.raises(NotFound):
        await record(uow, cow.id, session=EVENING)
    with pytest.raises(NotFound):
        await cattle_history.execute(uow, cow.id)
    assert len(uow.productions.rows) == 1
