# app/domains/cnd/schemas.py

"""
'cnd' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.

요청 스키마는 형식(타입)만 확인합니다. 수량/ID/반납일 같은 비즈니스 검증은
서비스 계층에서 응답 코드(INVALID_QUANTITY 등)와 함께 수행합니다.
"""

from typing import Any, List, Literal, Optional, Union
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field
from sqlmodel import SQLModel

from app.domains.crm.schemas import ClientSummary
from app.domains.inv.schemas import ItemSummary
from app.domains.sls.schemas import PaymentMethod, SaleResponse


# =============================================================================
# 0. 공통 응답 봉투
# =============================================================================
class ServiceResponse(BaseModel):
    """
    모든 서비스 연산의 결과 형식입니다: {success, message, code?, data?}.
    category는 HTTP 상태 코드 매핑에만 사용되며 응답 본문에는 포함되지 않습니다.
    """
    success: bool
    message: str
    code: Optional[str] = None
    data: Optional[Any] = None
    category: Optional[str] = Field(None, exclude=True, description="not_found / conflict / validation / internal")


# =============================================================================
# 1. 요청 스키마
# =============================================================================
class ConsignmentItemRef(SQLModel):
    """대여할 품목 참조. item_id 또는 item_name 중 하나가 필요합니다."""
    item_id: Optional[int] = Field(None, description="품목 ID")
    item_name: Optional[str] = Field(None, description="품목명 (정확 일치 → 부분 일치로 해석)")
    quantity: int = Field(..., description="대여 수량")


class ConsignmentCreate(SQLModel):
    client_id: int = Field(..., description="고객 ID")
    return_date: datetime = Field(..., description="반납 예정 일시 (오늘 이후)")
    items: List[ConsignmentItemRef] = Field(default_factory=list, description="대여 품목 목록")
    notes: Optional[str] = Field(None)


class ConsignmentUpdate(SQLModel):
    """부분 업데이트. 전달된 필드만 변경됩니다."""
    client_id: Optional[int] = Field(None, description="고객 ID")
    return_date: Optional[datetime] = Field(None, description="반납 예정 일시")
    notes: Optional[str] = Field(None)


class ReturnItemRequest(SQLModel):
    item_id: int = Field(..., description="반납할 품목 ID")
    quantity: int = Field(..., description="반납 수량")


class FinalizeRequest(SQLModel):
    returned: bool = Field(True, description="반납 완료로 표시할지 여부")
    notes: Optional[str] = Field(None)


class SoldItem(SQLModel):
    item_id: int = Field(..., description="판매할 품목 ID")
    quantity: int = Field(..., description="판매 수량")


class ConvertToSaleRequest(SQLModel):
    items_sold: Union[Literal["all"], List[SoldItem]] = Field(..., description='"all" 또는 판매 품목 목록')
    discount: Decimal = Field(Decimal("0"), ge=0, description="할인액")
    payment_method: PaymentMethod = Field(..., description="결제 수단")
    notes: Optional[str] = Field(None)


# =============================================================================
# 2. 응답 스키마
# =============================================================================
class ConsignmentItemResponse(SQLModel):
    id: int
    item_id: int
    quantity: int
    item: Optional[ItemSummary] = None

    class Config:
        from_attributes = True


class ConsignmentResponse(SQLModel):
    id: int
    client_id: int
    return_date: datetime
    returned: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    client: Optional[ClientSummary] = None
    items: List[ConsignmentItemResponse] = []

    class Config:
        from_attributes = True


class ConsignmentPage(SQLModel):
    data: List[ConsignmentResponse]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ReturnItemResult(SQLModel):
    quantity_returned: int
    remaining_item_count: int


class ConsignmentDeleted(SQLModel):
    id: int


class SoldItemLine(SQLModel):
    item_id: int
    name: str
    quantity: int
    unit_price: float
    subtotal: float


class ConversionSummary(SQLModel):
    total: float
    discount: float
    final_amount: float
    consignment_finalized: bool


class ConversionResult(SQLModel):
    sale: Optional[SaleResponse] = None
    updated_consignment: ConsignmentResponse
    items_sold: List[SoldItemLine] = []
    items_returned: List[SoldItemLine] = []
    summary: Optional[ConversionSummary] = None


# =============================================================================
# 3. 보고서/통계 스키마
# =============================================================================
class ActiveConsignmentRow(ConsignmentResponse):
    days_remaining: int
    status: Literal["expired", "active"]
    item_count: int
    total_value: float


class ActiveReportStats(SQLModel):
    total_consignments: int
    total_items: int
    total_value: float
    expired: int
    due_soon: int


class ActiveReport(SQLModel):
    consignments: List[ActiveConsignmentRow]
    stats: ActiveReportStats


class ReturnedConsignmentRow(ConsignmentResponse):
    """item_count/total_value는 현재 남아 있는 대여 품목 기준이며, 반납 완료된 대여는 품목이 비어 있으므로 항상 0입니다."""
    item_count: int
    total_value: float


class ReturnedReportStats(SQLModel):
    """
    반납 보고서 집계. total_items/total_value는 각 대여의 현재 품목 행만 합산합니다.
    반납 완료 시 품목 행이 모두 제거되므로 두 값은 항상 0이며, 반납 시점의 수량/금액 이력은 남기지 않습니다.
    """
    total_consignments: int
    total_items: int
    total_value: float


class ReturnedReport(SQLModel):
    consignments: List[ReturnedConsignmentRow]
    stats: ReturnedReportStats


class ConsignmentStats(SQLModel):
    total: int
    active: int
    returned: int


class ItemStatusResult(SQLModel):
    updated: int
    items: List[ItemSummary]
