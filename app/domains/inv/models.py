# app/domains/inv/models.py

"""
'inv' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

"""

from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, UTC
from decimal import Decimal
from enum import Enum
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import Numeric, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP


# 순환 임포트 방지를 위한 TYPE_CHECKING
if TYPE_CHECKING:
    from app.domains.cnd.models import ConsignmentItem
    from app.domains.sls.models import SaleItem


class ItemStatus(str, Enum):
    """품목 상태. DB에는 문자열 값으로 저장됩니다."""
    AVAILABLE = "disponivel"
    IN_CONSIGNMENT = "em_condicional"
    SOLD = "vendido"


# =============================================================================
# 1. items 테이블 모델
# =============================================================================
class ItemBase(SQLModel):
    name: str = Field(max_length=100, index=True, description="품목명")
    description: Optional[str] = Field(default=None, description="품목 설명")
    type: Optional[str] = Field(default=None, max_length=50, description="종류 (예: 원피스, 셔츠)")
    size: Optional[str] = Field(default=None, max_length=10, description="사이즈")
    color: Optional[str] = Field(default=None, max_length=30, description="색상")
    status: ItemStatus = Field(default=ItemStatus.AVAILABLE, description="품목 상태")
    notes: Optional[str] = Field(default=None)


class Item(ItemBase, table=True):
    __tablename__ = "items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_items_quantity_non_negative"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    price: Decimal = Field(default=Decimal("0.00"), sa_column=Column(Numeric(10, 2), nullable=False))
    quantity: int = Field(default=0, description="가용 재고 수량")
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=lambda: datetime.now(UTC)),
        description="레코드 마지막 업데이트 일시"
    )

    status_history: List["ItemStatusHistory"] = Relationship(
        back_populates="item",
        sa_relationship_kwargs={'cascade': 'all, delete-orphan'}
    )
    consignment_items: List["ConsignmentItem"] = Relationship(back_populates="item")
    sale_items: List["SaleItem"] = Relationship(back_populates="item")


# =============================================================================
# 2. item_status_history 테이블 모델
# =============================================================================
class ItemStatusHistory(SQLModel, table=True):
    """품목 상태 변경 이력. previous_status는 변경 직전에 저장되어 있던 실제 상태입니다."""
    __tablename__ = "item_status_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    item_id: int = Field(foreign_key="items.id", index=True)
    previous_status: Optional[ItemStatus] = Field(default=None)
    new_status: ItemStatus = Field()
    changed_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="상태 변경 일시"
    )

    item: "Item" = Relationship(back_populates="status_history")
