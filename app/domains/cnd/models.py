# app/domains/cnd/models.py

"""
'cnd' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.

조건부 대여(Consignment)는 대여 품목(ConsignmentItem)을 독점적으로 소유합니다.
returned=True인 조건부 대여는 대여 품목을 하나도 갖지 않습니다.
"""

from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy import CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

# 순환 임포트 방지를 위한 TYPE_CHECKING
if TYPE_CHECKING:
    from app.domains.crm.models import Client
    from app.domains.inv.models import Item


# =============================================================================
# 1. consignments 테이블 모델
# =============================================================================
class Consignment(SQLModel, table=True):
    __tablename__ = "consignments"

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: int = Field(foreign_key="clients.id", index=True)
    return_date: datetime = Field(
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False, index=True),
        description="반납 예정 일시"
    )
    returned: bool = Field(default=False, index=True, description="반납(종료) 여부")
    notes: Optional[str] = Field(default=None)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), index=True),
        description="대여 일시"
    )

    client: "Client" = Relationship(back_populates="consignments")
    items: List["ConsignmentItem"] = Relationship(
        back_populates="consignment",
        sa_relationship_kwargs={'cascade': 'all, delete-orphan', 'order_by': 'ConsignmentItem.id'}
    )


# =============================================================================
# 2. consignment_items 테이블 모델
# =============================================================================
class ConsignmentItem(SQLModel, table=True):
    __tablename__ = "consignment_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_consignment_items_quantity_positive"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    consignment_id: int = Field(foreign_key="consignments.id", index=True)
    item_id: int = Field(foreign_key="items.id", index=True)
    quantity: int = Field(description="대여 중인 수량")

    consignment: "Consignment" = Relationship(back_populates="items")
    item: "Item" = Relationship(back_populates="consignment_items")
