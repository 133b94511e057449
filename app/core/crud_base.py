# app/core/crud_base.py

"""
공통 CRUD(Create, Read, Update, Delete) 작업을 위한 기본 클래스 모듈입니다.
모든 메서드는 비동기(async) 환경에 맞게 작성되었습니다.

도메인 CRUD 클래스는 이 클래스를 상속하고, 여러 연산을 하나의 트랜잭션으로 묶는
쓰기 작업은 도메인 crud 모듈에서 `atomic` 블록으로 구현합니다.
"""

from typing import Generic, Optional, Type, TypeVar, Any
from datetime import date, datetime, time, timedelta

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.sql import Select
from pydantic import BaseModel

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def apply_date_range(
    query: Select,
    date_field: Any,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Select:
    """
    쿼리에 기간 조건을 추가합니다.
    시작일 00:00부터 종료일 당일 전체(다음날 00:00 미만)까지를 포함합니다.
    """
    if start_date is not None:
        query = query.where(date_field >= datetime.combine(start_date, time.min))
    if end_date is not None:
        # end_date 당일까지 포함하기 위함
        query = query.where(date_field < datetime.combine(end_date + timedelta(days=1), time.min))
    return query


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        ID를 기준으로 단일 레코드를 조회합니다.
        (참고: await db.get()은 AsyncSession에서 지원하는 편리한 기능입니다)
        """
        return await db.get(self.model, id)

