# tests/domains/test_inv_n.py

"""
'inv' 도메인 (품목 및 재고 관리)에 대한 테스트 모듈입니다.

- 품목 식별자 해석 (ID → 정확한 이름 → 부분 일치, 모호한 이름 처리)
- 재고 차감/복원
- 품목 상태 일괄 변경과 상태 변경 이력
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.exceptions import AmbiguousItemNameError, InsufficientStockError, ItemNotFoundError
from app.domains.inv import crud as inv_crud
from app.domains.inv import models as inv_models


async def _stock(db_session: AsyncSession, item_id: int) -> int:
    result = await db_session.execute(select(inv_models.Item.quantity).where(inv_models.Item.id == item_id))
    return result.scalar_one()


# =================================================================================
# 1. 품목 식별자 해석 (Item Resolver)
# =================================================================================
@pytest.mark.asyncio
async def test_resolve_by_id(db_session: AsyncSession, blue_dress: inv_models.Item):
    """(성공) ID로 품목 해석"""
    resolved = await inv_crud.item.resolve(db_session, item_id=blue_dress.id)
    assert resolved.id == blue_dress.id
    assert resolved.quantity == 8


@pytest.mark.asyncio
async def test_resolve_by_exact_name_trims_whitespace(db_session: AsyncSession, blue_dress: inv_models.Item):
    """(성공) 앞뒤 공백을 제거한 정확한 이름으로 해석"""
    resolved = await inv_crud.item.resolve(db_session, name="  Vestido Azul  ")
    assert resolved.id == blue_dress.id


@pytest.mark.asyncio
async def test_resolve_exact_name_prefers_lowest_id(db_session: AsyncSession, item_factory):
    """(성공) 같은 이름의 품목이 여러 개면 ID가 가장 작은 품목을 선택"""
    first = await item_factory("Saia Preta", "40.00", 2)
    await item_factory("Saia Preta", "45.00", 3)

    resolved = await inv_crud.item.resolve(db_session, name="Saia Preta")
    assert resolved.id == first.id


@pytest.mark.asyncio
async def test_resolve_exact_match_wins_over_partial(db_session: AsyncSession, item_factory):
    """(성공) 정확한 일치가 있으면 부분 일치 후보가 여러 개여도 모호하지 않음"""
    exact = await item_factory("Blusa", "30.00", 1)
    await item_factory("Blusa Branca", "35.00", 1)

    resolved = await inv_crud.item.resolve(db_session, name="Blusa")
    assert resolved.id == exact.id


@pytest.mark.asyncio
async def test_resolve_single_partial_match(
    db_session: AsyncSession, blue_dress: inv_models.Item, red_shirt: inv_models.Item
):
    """(성공) 부분 일치 후보가 하나면 그 품목을 반환 (대소문자 무시)"""
    resolved = await inv_crud.item.resolve(db_session, name="vestido")
    assert resolved.id == blue_dress.id


@pytest.mark.asyncio
async def test_resolve_ambiguous_partial_match(
    db_session: AsyncSession, blue_dress: inv_models.Item, item_factory
):
    """(실패) 부분 일치 후보가 여러 개면 AmbiguousItemNameError"""
    green = await item_factory("Vestido Verde", "55.00", 2)

    with pytest.raises(AmbiguousItemNameError) as exc_info:
        await inv_crud.item.resolve(db_session, name="Vestido")

    assert exc_info.value.code == "ITEM_NAME_AMBIGUOUS"
    assert exc_info.value.candidate_ids == [blue_dress.id, green.id]


@pytest.mark.asyncio
async def test_resolve_not_found(db_session: AsyncSession, blue_dress: inv_models.Item):
    """(실패) 존재하지 않는 ID/이름은 조회 방식이 드러나는 ItemNotFoundError"""
    with pytest.raises(ItemNotFoundError) as by_id:
        await inv_crud.item.resolve(db_session, item_id=9999)
    assert by_id.value.item_id == 9999
    assert "ID 9999" in by_id.value.message

    with pytest.raises(ItemNotFoundError) as by_name:
        await inv_crud.item.resolve(db_session, name="Jaqueta")
    assert by_name.value.name == "Jaqueta"
    assert 'name "Jaqueta"' in by_name.value.message


@pytest.mark.asyncio
async def test_resolve_name_with_like_wildcards_is_literal(db_session: AsyncSession, blue_dress: inv_models.Item):
    """(실패) 이름의 % 문자는 와일드카드가 아니라 문자 그대로 비교"""
    with pytest.raises(ItemNotFoundError):
        await inv_crud.item.resolve(db_session, name="%")


# =================================================================================
# 2. 재고 차감/복원
# =================================================================================
@pytest.mark.asyncio
async def test_decrement_and_increment_stock(db_session: AsyncSession, blue_dress: inv_models.Item):
    """(성공) 재고 차감 후 같은 수량을 복원하면 원래 수량"""
    item_id = blue_dress.id
    await inv_crud.item.decrement_stock(db_session, db_item=blue_dress, quantity=3)
    await db_session.commit()
    assert await _stock(db_session, item_id) == 5

    await inv_crud.item.increment_stock(db_session, item_id=item_id, quantity=3)
    await db_session.commit()
    assert await _stock(db_session, item_id) == 8


@pytest.mark.asyncio
async def test_decrement_stock_insufficient(db_session: AsyncSession, red_shirt: inv_models.Item):
    """(실패) 가용 재고보다 많이 차감하면 InsufficientStockError, 수량은 그대로"""
    with pytest.raises(InsufficientStockError) as exc_info:
        await inv_crud.item.decrement_stock(db_session, db_item=red_shirt, quantity=6)

    assert exc_info.value.available == 5
    assert exc_info.value.requested == 6
    assert "Camisa Vermelha" in exc_info.value.message
    assert red_shirt.quantity == 5


@pytest.mark.asyncio
async def test_stock_changes_apply_on_latest_db_value(
    db_session: AsyncSession, test_engine: AsyncEngine, blue_dress: inv_models.Item
):
    """(성공) 다른 세션이 먼저 커밋한 재고 변경을 덮어쓰지 않고 그 위에 증감"""
    item_id = blue_dress.id
    loaded = await inv_crud.item.get(db_session, item_id)
    assert loaded.quantity == 8

    other_factory = async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)
    async with other_factory() as other_session:
        await inv_crud.item.increment_stock(other_session, item_id=item_id, quantity=2)
        await other_session.commit()

    restored = await inv_crud.item.increment_stock(db_session, item_id=item_id, quantity=2)
    await db_session.commit()
    assert restored.quantity == 12
    assert await _stock(db_session, item_id) == 12

    async with other_factory() as other_session:
        other_item = await inv_crud.item.get(other_session, item_id)
        await inv_crud.item.decrement_stock(other_session, db_item=other_item, quantity=10)
        await other_session.commit()

    # 이 세션의 객체는 아직 12로 알고 있지만 DB 재고는 2
    with pytest.raises(InsufficientStockError) as exc_info:
        await inv_crud.item.decrement_stock(db_session, db_item=loaded, quantity=3)
    await db_session.rollback()

    assert exc_info.value.available == 2
    assert await _stock(db_session, item_id) == 2


# =================================================================================
# 3. 품목 상태 일괄 변경 API
# =================================================================================
@pytest.mark.asyncio
async def test_update_items_status_records_history(
    client: AsyncClient, db_session: AsyncSession, blue_dress: inv_models.Item, red_shirt: inv_models.Item
):
    """(성공) 상태 변경 시 이력의 previous_status는 저장되어 있던 실제 상태"""
    dress_id, shirt_id = blue_dress.id, red_shirt.id
    blue_dress.status = inv_models.ItemStatus.IN_CONSIGNMENT
    db_session.add(blue_dress)
    await db_session.commit()

    response = await client.patch(
        "/api/v1/inv/items/status",
        json={"item_ids": [dress_id, shirt_id], "new_status": "vendido"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["updated"] == 2
    assert {item["status"] for item in body["data"]["items"]} == {"vendido"}

    history = (
        await db_session.execute(
            select(inv_models.ItemStatusHistory).order_by(inv_models.ItemStatusHistory.item_id)
        )
    ).scalars().all()
    previous = {row.item_id: row.previous_status for row in history}
    assert previous == {
        dress_id: inv_models.ItemStatus.IN_CONSIGNMENT,
        shirt_id: inv_models.ItemStatus.AVAILABLE,
    }
    assert all(row.new_status == inv_models.ItemStatus.SOLD for row in history)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, expected_code",
    [
        ({"item_ids": [], "new_status": "vendido"}, "INVALID_ITEM_IDS"),
        ({"item_ids": [0], "new_status": "vendido"}, "INVALID_ITEM_IDS"),
        ({"item_ids": [1]}, "MISSING_STATUS"),
        ({"item_ids": [1], "new_status": "perdido"}, "INVALID_STATUS"),
    ],
)
async def test_update_items_status_validation(client: AsyncClient, payload, expected_code):
    """(실패) 잘못된 요청은 400과 응답 코드"""
    response = await client.patch("/api/v1/inv/items/status", json=payload)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == expected_code
    assert "data" not in body


@pytest.mark.asyncio
async def test_update_items_status_unknown_item_rolls_back(
    client: AsyncClient, db_session: AsyncSession, blue_dress: inv_models.Item
):
    """(실패) 존재하지 않는 품목이 섞여 있으면 404, 앞선 품목의 변경도 롤백"""
    dress_id = blue_dress.id
    response = await client.patch(
        "/api/v1/inv/items/status",
        json={"item_ids": [dress_id, 9999], "new_status": "vendido"},
    )

    assert response.status_code == 404
    assert response.json()["code"] == "ITEM_NOT_FOUND"

    status_in_db = (
        await db_session.execute(select(inv_models.Item.status).where(inv_models.Item.id == dress_id))
    ).scalar_one()
    assert status_in_db == inv_models.ItemStatus.AVAILABLE
    history_count = len((await db_session.execute(select(inv_models.ItemStatusHistory))).scalars().all())
    assert history_count == 0
