# app/domains/sls/models.py

"""
'sls' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, UTC
from decimal import Decimal
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import Numeric
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

# 순환 임포트 방지를 위한 TYPE_CHECKING
if TYPE_CHECKING:
    from app.domains.inv.models import Item


# =============================================================================
# 1. sales 테이블 모델
# =============================================================================
class Sale(SQLModel, table=True):
    __tablename__ = "sales"

    id: Optional[int] = Field(default=None, primary_key=True)
    payment_method: str = Field(max_length=30, description="결제 수단")
    total: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))
    discount: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(10, 2), nullable=False))
    paid_amount: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))
    client_name: Optional[str] = Field(default=None, max_length=100, description="판매 시점의 고객명")
    client_phone: Optional[str] = Field(default=None, max_length=20, description="판매 시점의 고객 연락처")
    notes: Optional[str] = Field(default=None)
    sale_date: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="판매 일시"
    )

    items: List["SaleItem"] = Relationship(
        back_populates="sale",
        sa_relationship_kwargs={'cascade': 'all, delete-orphan'}
    )


# =============================================================================
# 2. sale_items 테이블 모델
# =============================================================================
class SaleItem(SQLModel, table=True):
    __tablename__ = "sale_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    sale_id: int = Field(foreign_key="sales.id", index=True)
    item_id: int = Field(foreign_key="items.id", index=True)
    quantity: int = Field(description="판매 수량")
    unit_price: Decimal = Field(sa_column=Column(Numeric(10, 2), nullable=False))

    sale: "Sale" = Relationship(back_populates="items")
    item: "Item" = Relationship(back_populates="sale_items")
