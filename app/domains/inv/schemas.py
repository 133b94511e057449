# app/domains/inv/schemas.py

"""
'inv' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.
"""

from typing import Optional, List
from decimal import Decimal
from pydantic import Field
from sqlmodel import SQLModel

from app.domains.inv.models import ItemStatus


# =============================================================================
# 1. items 테이블 스키마
# =============================================================================
class ItemSummary(SQLModel):
    """조건부 대여/판매 응답에 포함되는 품목 요약 정보입니다."""
    id: int
    name: str
    price: Decimal
    quantity: int
    status: ItemStatus
    size: Optional[str] = None
    color: Optional[str] = None

    class Config:
        from_attributes = True


# =============================================================================
# 2. 품목 상태 일괄 변경
# =============================================================================
class ItemStatusUpdate(SQLModel):
    """
    품목 상태 일괄 변경 요청.
    값 검증(빈 목록, 알 수 없는 상태)은 서비스 계층에서 응답 코드와 함께 처리하므로 여기서는 느슨하게 받습니다.
    """
    item_ids: List[int] = Field(default_factory=list, description="상태를 변경할 품목 ID 목록")
    new_status: Optional[str] = Field(None, description="새 상태 (disponivel, em_condicional, vendido)")

