# tests/conftest.py

from typing import AsyncGenerator, Awaitable, Callable
from decimal import Decimal

import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

# app.main을 임포트하여 FastAPI 앱 인스턴스에 접근합니다.
from app.main import app as main_app
from app.core import dependencies as deps
from app.core.database import create_db_and_tables, get_session

from app.domains.crm import models as crm_models
from app.domains.inv import models as inv_models


# --- 테스트용 데이터베이스 설정 ---
# 테스트마다 독립된 인메모리 SQLite DB를 사용합니다.
# StaticPool로 하나의 연결을 공유해야 인메모리 DB가 세션 사이에 유지됩니다.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


# --- 데이터베이스 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """각 테스트 함수마다 빈 데이터베이스를 만들고 모든 테이블을 생성합니다."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_db_and_tables(bind=engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    테스트 함수에서 사용할 비동기 데이터베이스 세션을 제공합니다.
    API 테스트에서는 같은 세션이 요청 처리에도 주입됩니다.
    """
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session


# --- HTTP 클라이언트 픽스처 ---
@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    AsyncClient 인스턴스를 생성하고, 테스트용 비동기 DB 세션을 주입합니다.
    """

    def override_get_session_and_dependency():
        yield db_session

    original_overrides = main_app.dependency_overrides.copy()
    try:
        # get_session과 deps.get_db_session 모두 오버라이드
        main_app.dependency_overrides[get_session] = override_get_session_and_dependency
        main_app.dependency_overrides[deps.get_db_session] = override_get_session_and_dependency

        async with AsyncClient(transport=ASGITransport(app=main_app), base_url="http://test") as async_client:
            yield async_client
    finally:
        # 클라이언트 픽스처가 끝나면 오버라이드를 반드시 복원해야 합니다.
        main_app.dependency_overrides.clear()
        main_app.dependency_overrides.update(original_overrides)


# --- 도메인별 공통 픽스처 ---
@pytest_asyncio.fixture(name="test_customer")
async def test_customer_fixture(db_session: AsyncSession) -> crm_models.Client:
    """조건부 대여를 받을 테스트용 고객을 생성합니다."""
    customer = crm_models.Client(
        name="Maria Silva",
        email="maria@example.com",
        cpf="123.456.789-00",
        phone="11999990000",
        address="Rua das Flores, 10",
    )
    db_session.add(customer)
    await db_session.commit()
    await db_session.refresh(customer)
    return customer


@pytest_asyncio.fixture(name="item_factory")
async def item_factory_fixture(
    db_session: AsyncSession,
) -> Callable[..., Awaitable[inv_models.Item]]:
    """
    재고 품목을 생성하는 팩토리 픽스처입니다.
    사용 예: await item_factory("Vestido Azul", "50.00", 8)
    """

    async def _factory(name: str, price: str = "10.00", quantity: int = 1, **kwargs) -> inv_models.Item:
        db_item = inv_models.Item(name=name, price=Decimal(price), quantity=quantity, **kwargs)
        db_session.add(db_item)
        await db_session.commit()
        await db_session.refresh(db_item)
        return db_item

    return _factory


@pytest_asyncio.fixture(name="blue_dress")
async def blue_dress_fixture(item_factory) -> inv_models.Item:
    """단가 50.00, 재고 8개인 품목."""
    return await item_factory("Vestido Azul", "50.00", 8, type="vestido", size="M", color="azul")


@pytest_asyncio.fixture(name="red_shirt")
async def red_shirt_fixture(item_factory) -> inv_models.Item:
    """단가 80.00, 재고 5개인 품목."""
    return await item_factory("Camisa Vermelha", "80.00", 5, type="camisa", size="G", color="vermelho")
