# app/domains/inv/routers.py

from fastapi import APIRouter, Depends

from app.core import dependencies as deps
from app.core.responses import envelope_response
from app.domains.cnd.services import ConsignmentService
from app.domains.inv import schemas as inv_schemas

router = APIRouter(
    tags=["Inventory Management (품목 관리)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. items 엔드포인트
# =============================================================================
@router.patch("/items/status")
async def update_items_status(
    status_update: inv_schemas.ItemStatusUpdate,
    service: ConsignmentService = Depends(deps.get_consignment_service),
):
    """여러 품목의 상태를 한 번에 변경하고 변경 이력을 남깁니다."""
    return envelope_response(await service.update_item_status(status_update))
