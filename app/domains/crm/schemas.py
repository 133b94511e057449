# app/domains/crm/schemas.py

"""
'crm' 도메인의 Pydantic 스키마를 정의하는 모듈입니다.
"""

from typing import Optional
from sqlmodel import SQLModel


class ClientSummary(SQLModel):
    """조건부 대여 응답에 포함되는 고객 요약 정보입니다."""
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    class Config:
        from_attributes = True
