# app/domains/crm/models.py

"""
'crm' 도메인의 데이터베이스 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, UTC
from sqlmodel import Field, Relationship, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP

# 순환 임포트 방지를 위한 TYPE_CHECKING
if TYPE_CHECKING:
    from app.domains.cnd.models import Consignment


# =============================================================================
# 1. clients 테이블 모델
# =============================================================================
class ClientBase(SQLModel):
    name: str = Field(max_length=100, description="고객명")
    email: Optional[str] = Field(default=None, max_length=100, description="이메일")
    cpf: Optional[str] = Field(default=None, max_length=14, unique=True, description="CPF (개인 납세자 번호)")
    phone: Optional[str] = Field(default=None, max_length=20, description="연락처")
    address: Optional[str] = Field(default=None, max_length=255, description="주소")


class Client(ClientBase, table=True):
    __tablename__ = "clients"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )

    consignments: List["Consignment"] = Relationship(back_populates="client")
