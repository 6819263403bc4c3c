from __future__ import annotations

from datetime import date as DtDate
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.interfaces.repositories.cattle import CattleFilters
from src.application.use_cases.cattle import (
    cattle_statistics,
    create_cattle,
    delete_cattle,
    get_cattle,
    get_offspring,
    list_cattle,
    list_milking_cows,
    update_cattle,
    update_status,
)
from src.domain.value_objects.cattle_status import CattleStatus
from src.domain.value_objects.gender import Gender
from src.infrastructure.auth.context import AuthContext
from src.interfaces.http.deps import get_auth_context, get_uow
from src.interfaces.http.schemas.cattle import (
    CattleCreate,
    CattleListResponse,
    CattleResponse,
    CattleStatisticsResponse,
    CattleStatusUpdate,
    CattleUpdate,
    TagCheckResponse,
)
from src.utils.datetime_tz import farm_today

router = APIRouter(prefix="/cattle", tags=["cattle"])


@router.post("/", response_model=CattleResponse, status_code=status.HTTP_201_CREATED)
async def create_cattle_endpoint(
    payload: CattleCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> CattleResponse:
    created = await create_cattle.execute(
        uow,
        context.role,
        create_cattle.CreateCattleInput(**payload.model_dump()),
    )
    return CattleResponse.from_domain(created)


@router.get("/", response_model=CattleListResponse)
async def list_cattle_endpoint(
    status_filter: CattleStatus | None = Query(None, alias="status"),
    gender: Gender | None = Query(None),
    breed: str | None = Query(None),
    search: str | None = Query(None, description="Search by name or tag number"),
    born_after: DtDate | None = Query(None),
    born_before: DtDate | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort_by: str | None = Query(
        None, description="One of: name, tag_number, birth_date, status, created_at"
    ),
    sort_order: str | None = Query(None, description="asc or desc (default desc)"),
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> CattleListResponse:
    filters = CattleFilters(
        status=status_filter,
        gender=gender,
        breed=breed,
        search=search,
        born_after=born_after,
        born_before=born_before,
    )
    result = await list_cattle.execute(
        uow, filters, page=page, limit=limit, sort_by=sort_by, sort_order=sort_order
    )
    today = farm_today()
    return CattleListResponse(
        items=[CattleResponse.from_domain(item, today) for item in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get("/statistics", response_model=CattleStatisticsResponse)
async def cattle_statistics_endpoint(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> CattleStatisticsResponse:
    stats = await cattle_statistics.execute(uow)
    return CattleStatisticsResponse.model_validate(stats)


@router.get("/milking-cows", response_model=list[CattleResponse])
async def milking_cows_endpoint(
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> list[CattleResponse]:
    cows = await list_milking_cows.execute(uow)
    today = farm_today()
    return [CattleResponse.from_domain(cow, today) for cow in cows]


@router.get("/check-tag/{tag_number}", response_model=TagCheckResponse)
async def check_tag_endpoint(
    tag_number: str,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> TagCheckResponse:
    return TagCheckResponse(exists=await get_cattle.tag_exists(uow, tag_number))


@router.get("/tag/{tag_number}", response_model=CattleResponse)
async def get_by_tag_endpoint(
    tag_number: str,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> CattleResponse:
    cattle = await get_cattle.by_tag(uow, tag_number)
    return CattleResponse.from_domain(cattle)


@router.get("/{cattle_id}", response_model=CattleResponse)
async def get_cattle_endpoint(
    cattle_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> CattleResponse:
    cattle = await get_cattle.execute(uow, cattle_id)
    return CattleResponse.from_domain(cattle)


@router.get("/{cattle_id}/offspring", response_model=list[CattleResponse])
async def get_offspring_endpoint(
    cattle_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> list[CattleResponse]:
    offspring = await get_offspring.execute(uow, cattle_id)
    today = farm_today()
    return [CattleResponse.from_domain(child, today) for child in offspring]


@router.patch("/{cattle_id}", response_model=CattleResponse)
async def update_cattle_endpoint(
    cattle_id: UUID,
    payload: CattleUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> CattleResponse:
    updated = await update_cattle.execute(
        uow,
        context.role,
        cattle_id,
        update_cattle.UpdateCattleInput(**payload.model_dump(exclude_unset=True)),
    )
    return CattleResponse.from_domain(updated)


@router.patch("/{cattle_id}/status", response_model=CattleResponse)
async def update_status_endpoint(
    cattle_id: UUID,
    payload: CattleStatusUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> CattleResponse:
    updated = await update_status.execute(uow, cattle_id, payload.status)
    return CattleResponse.from_domain(updated)


@router.delete("/{cattle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cattle_endpoint(
    cattle_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
) -> Response:
    await delete_cattle.execute(uow, context.role, cattle_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
