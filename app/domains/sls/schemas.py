# app/domains/sls/schemas.py

"""
'sls' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.
"""

from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pydantic import Field
from sqlmodel import SQLModel


class PaymentMethod(str, Enum):
    """매장에서 허용하는 결제 수단."""
    PIX = "Pix"
    CASH = "Dinheiro"
    CREDIT_CARD = "Cartão de Crédito"
    DEBIT_CARD = "Cartão de Débito"
    BANK_SLIP = "Boleto"
    CHEQUE = "Cheque"
    BARTER = "Permuta"


# =============================================================================
# 1. sale_items 스키마
# =============================================================================
class SaleItemCreate(SQLModel):
    item_id: int = Field(..., description="판매 품목 ID")
    quantity: int = Field(..., gt=0, description="판매 수량")
    unit_price: Decimal = Field(..., ge=0, description="판매 시점 단가")


class SaleItemResponse(SaleItemCreate):
    id: int
    sale_id: int

    class Config:
        from_attributes = True


# =============================================================================
# 2. sales 스키마
# =============================================================================
class SaleCreate(SQLModel):
    payment_method: PaymentMethod = Field(..., description="결제 수단")
    total: Decimal = Field(..., ge=0, description="할인 전 합계")
    discount: Decimal = Field(Decimal("0.00"), ge=0, description="할인액")
    paid_amount: Decimal = Field(..., ge=0, description="최종 결제액 (합계 - 할인)")
    client_name: Optional[str] = Field(None, max_length=100)
    client_phone: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = Field(None)
    items: List[SaleItemCreate] = Field(default_factory=list, description="판매 품목 목록")


class SaleResponse(SQLModel):
    id: int
    payment_method: str
    total: Decimal
    discount: Decimal
    paid_amount: Decimal
    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    notes: Optional[str] = None
    sale_date: Optional[datetime] = None
    items: List[SaleItemResponse] = []

    class Config:
        from_attributes = True
