# app/core/dependencies.py

"""
FastAPI 애플리케이션의 의존성 주입(Dependency Injection)을 정의하는 모듈입니다.

- 데이터베이스 세션 관리 (get_db_session).
- 요청 단위 조건부 대여 서비스 생성 (get_consignment_service).
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession  # AsyncSession 임포트

# 실제 데이터베이스 세션 제너레이터 임포트
from app.core.database import get_session as get_main_app_session
from app.domains.cnd.services import ConsignmentService


# --- 데이터베이스 세션 의존성 주입 ---
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:  # 타입을 AsyncSession으로 명시
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    app.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session


# --- 서비스 의존성 주입 ---
def get_consignment_service(db: AsyncSession = Depends(get_db_session)) -> ConsignmentService:
    """요청마다 현재 세션에 묶인 ConsignmentService 인스턴스를 생성합니다."""
    return ConsignmentService(db)
