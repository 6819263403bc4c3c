from __future__ import annotations

from datetime import date as DtDate
from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response, status

from src.application.errors import ValidationError
from src.application.interfaces.repositories.productions import ProductionFilters
from src.application.use_cases.production import (
    bulk_create_productions,
    create_production,
    delete_production,
    get_production,
    list_productions,
    update_production,
    verify_production,
)
from src.application.use_cases.reports import (
    cattle_history,
    daily_summary,
    monthly_report,
    production_statistics,
)
from src.config.settings import Settings
from src.domain.value_objects.milking_session import MilkingSession
from src.domain.value_objects.production_status import ProductionStatus
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_app_settings, get_auth_context, get_uow
from src.interfaces.http.schemas.productions import (
    DailySummaryResponse,
    ProductionCreate,
    ProductionListResponse,
    ProductionResponse,
    ProductionsBulkCreate,
    ProductionStatisticsResponse,
    ProductionUpdate,
    ProductionVerify,
)

router = APIRouter(prefix="/production", tags=["production"])


def _to_input(payload: ProductionCreate) -> create_production.CreateProductionInput:
    return create_production.CreateProductionInput(**payload.model_dump())


@router.post("/", response_model=ProductionResponse, status_code=status.HTTP_201_CREATED)
async def create_production_endpoint(
    payload: ProductionCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ProductionResponse:
    created = await create_production.execute(
        uow, context.role, context.user_id, _to_input(payload)
    )
    return ProductionResponse.from_domain(created)


@router.post(
    "/bulk", response_model=list[ProductionResponse], status_code=status.HTTP_201_CREATED
)
async def bulk_create_endpoint(
    payload: ProductionsBulkCreate,
    response: Response,
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
) -> list[ProductionResponse]:
    if len(payload.productions) > settings.bulk_max_items:
        raise ValidationError(f"At most {settings.bulk_max_items} records per batch")
    result = await bulk_create_productions.execute(
        uow,
        context.role,
        context.user_id,
        [_to_input(item) for item in payload.productions],
    )
    response.headers["X-Failed-Count"] = str(len(result.errors))
    return [ProductionResponse.from_domain(item) for item in result.created]


@router.get("/", response_model=ProductionListResponse)
async def list_productions_endpoint(
    session: MilkingSession | None = Query(None),
    status_filter: ProductionStatus | None = Query(None, alias="status"),
    cattle_id: UUID | None = Query(None),
    on_date: DtDate | None = Query(None, alias="date"),
    from_date: DtDate | None = Query(None),
    to_date: DtDate | None = Query(None),
    min_quantity: Decimal | None = Query(None, ge=0),
    max_quantity: Decimal | None = Query(None, ge=0),
    search: str | None = Query(None, description="Search by cattle name or tag number"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort_by: str | None = Query(None),
    sort_order: str | None = Query(None, description="asc or desc (default desc)"),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ProductionListResponse:
    filters = ProductionFilters(
        session=session,
        status=status_filter,
        cattle_id=cattle_id,
        date=on_date,
        date_from=from_date,
        date_to=to_date,
        min_quantity=min_quantity,
        max_quantity=max_quantity,
        search=search,
    )
    result = await list_productions.execute(
        uow, filters, page=page, limit=limit, sort_by=sort_by, sort_order=sort_order
    )
    return ProductionListResponse(
        items=[ProductionResponse.from_domain(item) for item in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get("/statistics", response_model=ProductionStatisticsResponse)
async def statistics_endpoint(
    from_date: DtDate | None = Query(None),
    to_date: DtDate | None = Query(None),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ProductionStatisticsResponse:
    stats = await production_statistics.execute(uow, from_date, to_date)
    return ProductionStatisticsResponse.model_validate(stats)


@router.get("/daily-summary/{day}", response_model=DailySummaryResponse)
async def daily_summary_endpoint(
    day: DtDate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> DailySummaryResponse:
    summary = await daily_summary.execute(uow, day)
    return DailySummaryResponse.model_validate(summary)


@router.get("/monthly-report/{year}/{month}", response_model=list[DailySummaryResponse])
async def monthly_report_endpoint(
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> list[DailySummaryResponse]:
    summaries = await monthly_report.execute(uow, year, month)
    return [DailySummaryResponse.model_validate(s) for s in summaries]


@router.get("/cattle/{cattle_id}/history", response_model=list[ProductionResponse])
async def cattle_history_endpoint(
    cattle_id: UUID,
    from_date: DtDate | None = Query(None),
    to_date: DtDate | None = Query(None),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> list[ProductionResponse]:
    records = await cattle_history.execute(uow, cattle_id, from_date, to_date)
    return [ProductionResponse.from_domain(r) for r in records]


@router.get("/{production_id}", response_model=ProductionResponse)
async def get_production_endpoint(
    production_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ProductionResponse:
    production = await get_production.execute(uow, production_id)
    return ProductionResponse.from_domain(production)


@router.patch("/{production_id}", response_model=ProductionResponse)
async def update_production_endpoint(
    production_id: UUID,
    payload: ProductionUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ProductionResponse:
    updated = await update_production.execute(
        uow,
        production_id,
        update_production.UpdateProductionInput(**payload.model_dump(exclude_unset=True)),
    )
    return ProductionResponse.from_domain(updated)


@router.patch("/{production_id}/verify", response_model=ProductionResponse)
async def verify_production_endpoint(
    production_id: UUID,
    payload: ProductionVerify,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> ProductionResponse:
    verified = await verify_production.execute(
        uow,
        context.role,
        production_id,
        ProductionStatus(payload.status),
        context.user_id,
        note=payload.notes,
    )
    return ProductionResponse.from_domain(verified)


@router.delete("/{production_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_production_endpoint(
    production_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Response:
    await delete_production.execute(uow, context.role, production_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
