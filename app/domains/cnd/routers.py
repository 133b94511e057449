# app/domains/cnd/routers.py

"""
'cnd' 도메인의 FastAPI 엔드포인트를 정의하는 모듈입니다.
모든 엔드포인트는 서비스 응답 봉투를 그대로 반환하며, 분류에 따라 HTTP 상태 코드만 매핑합니다.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from app.core import dependencies as deps
from app.core.responses import envelope_response
from app.domains.cnd import schemas as cnd_schemas
from app.domains.cnd.services import ConsignmentService

router = APIRouter(
    tags=["Consignment Management (조건부 대여 관리)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 목록 / 통계 / 보고서
# =============================================================================
@router.get("/consignments")
async def list_consignments(
    client_id: Optional[int] = None,
    returned: Optional[bool] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    page: int = 1,
    limit: Optional[int] = None,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """조건부 대여 목록을 생성일 내림차순으로 페이지 단위 조회합니다."""
    result = await service.list_consignments(
        client_id=client_id, returned=returned, date_from=date_from, date_to=date_to, page=page, limit=limit
    )
    return envelope_response(result)


@router.get("/consignments/stats")
async def read_consignment_stats(
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """생성일 기준 전체/진행 중/반납 완료 건수를 조회합니다."""
    return envelope_response(await service.get_stats(date_from=date_from, date_to=date_to))


@router.get("/consignments/reports/active")
async def read_active_report(
    client_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    expired_only: bool = False,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """진행 중인 조건부 대여 보고서 (반납 예정일 오름차순, 남은 일수/만료 여부 포함)."""
    result = await service.active_report(
        client_id=client_id, date_from=date_from, date_to=date_to, expired_only=expired_only
    )
    return envelope_response(result)


@router.get("/consignments/reports/returned")
async def read_returned_report(
    client_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """반납 완료된 조건부 대여 보고서 (생성일 내림차순)."""
    result = await service.returned_report(client_id=client_id, date_from=date_from, date_to=date_to)
    return envelope_response(result)


# =============================================================================
# 2. 단건 조회 / 생성 / 수정 / 삭제
# =============================================================================
@router.get("/consignments/{consignment_id}")
async def read_consignment(
    consignment_id: int,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """ID로 조건부 대여를 고객/품목 정보와 함께 조회합니다."""
    return envelope_response(await service.get_consignment(consignment_id))


@router.post("/consignments")
async def create_consignment(
    consignment_create: cnd_schemas.ConsignmentCreate,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """새 조건부 대여를 생성하고 대여 수량만큼 재고를 차감합니다."""
    result = await service.create(consignment_create)
    return envelope_response(result, success_status=status.HTTP_201_CREATED)


@router.put("/consignments/{consignment_id}")
async def update_consignment(
    consignment_id: int,
    consignment_update: cnd_schemas.ConsignmentUpdate,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """고객, 반납 예정일, 메모를 부분 수정합니다. 반납 완료된 대여는 수정할 수 없습니다."""
    return envelope_response(await service.update(consignment_id, consignment_update))


@router.delete("/consignments/{consignment_id}")
async def delete_consignment(
    consignment_id: int,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """남은 대여 품목의 재고를 복원한 뒤 조건부 대여를 삭제합니다."""
    return envelope_response(await service.delete(consignment_id))


# =============================================================================
# 3. 반납 / 종료 / 판매 전환
# =============================================================================
@router.post("/consignments/{consignment_id}/return-item")
async def return_consignment_item(
    consignment_id: int,
    return_request: cnd_schemas.ReturnItemRequest,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """대여 품목 하나의 일부 또는 전체를 반납합니다."""
    return envelope_response(await service.return_item(consignment_id, return_request))


@router.post("/consignments/{consignment_id}/finalize")
async def finalize_consignment(
    consignment_id: int,
    finalize_request: Optional[cnd_schemas.FinalizeRequest] = Body(None),
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """남은 모든 품목을 재고로 돌려놓고 조건부 대여를 종료합니다."""
    return envelope_response(await service.finalize(consignment_id, finalize_request))


@router.post("/consignments/{consignment_id}/convert-to-sale")
async def convert_consignment_to_sale(
    consignment_id: int,
    conversion_request: cnd_schemas.ConvertToSaleRequest,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """
    대여 품목의 전체 또는 일부를 판매로 전환합니다. 판매된 수량은 재고로 복원되지 않습니다.
    판매가 생성되면 201, 이미 종료된 대여(CONDICIONAL_ALREADY_FINISHED)는 변경 없이 200을 반환합니다.
    """
    result = await service.convert_to_sale(consignment_id, conversion_request)
    success_status = status.HTTP_201_CREATED if result.code is None else status.HTTP_200_OK
    return envelope_response(result, success_status=success_status)
