# app/domains/inv/crud.py

"""
'inv' 도메인의 CRUD 작업과 재고 저장소(Stock Store) 연산을 정의하는 모듈입니다.

- 품목 식별자 해석(Item Resolver): ID 또는 이름(정확 일치 → 부분 일치)으로 품목을 찾습니다.
- 재고 증감: 호출자의 세션/트랜잭션 안에서 가용 수량을 변경하며 커밋하지 않습니다.
- 상태 변경: 변경 직전의 실제 상태를 이력(ItemStatusHistory)으로 남깁니다.
"""

import logging
from typing import List, Optional

from sqlalchemy import String, func, update
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.core.exceptions import AmbiguousItemNameError, InsufficientStockError, ItemNotFoundError
from app.domains.inv import models as inv_models

logger = logging.getLogger(__name__)


class ItemCRUD(CRUDBase[inv_models.Item, SQLModel, SQLModel]):
    """Item 모델에 특화된 CRUD 및 재고 연산을 처리합니다."""

    async def get_by_exact_name(self, db: AsyncSession, *, name: str) -> Optional[inv_models.Item]:
        """이름이 정확히 일치하는 품목을 조회합니다. 여러 건이면 ID가 가장 작은 품목을 반환합니다."""
        query = select(self.model).where(self.model.name == name).order_by(self.model.id).limit(1)
        result = await db.execute(query)
        return result.scalars().first()

    async def search_by_name(self, db: AsyncSession, *, fragment: str) -> List[inv_models.Item]:
        """이름에 fragment가 포함된 품목 목록을 ID 순으로 조회합니다 (대소문자 무시)."""
        query = (
            select(self.model)
            .where(func.lower(self.model.name, type_=String).contains(fragment.lower(), autoescape=True))
            .order_by(self.model.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def resolve(
        self, db: AsyncSession, *, item_id: Optional[int] = None, name: Optional[str] = None
    ) -> inv_models.Item:
        """
        품목 참조를 실제 재고 품목으로 해석합니다.

        1. item_id가 주어지면 ID로 직접 조회합니다.
        2. 이름이 주어지면 앞뒤 공백을 제거한 뒤 정확히 일치하는 품목을 먼저 찾습니다.
        3. 정확한 일치가 없으면 부분 일치로 찾습니다. 후보가 하나면 그 품목을,
           여러 개면 AmbiguousItemNameError를 발생시킵니다.

        재고 충분 여부는 확인하지 않습니다 (호출자의 책임).
        """
        if item_id is not None:
            db_item = await self.get(db, item_id)
            if db_item is None:
                raise ItemNotFoundError(item_id=item_id)
            return db_item

        search_name = (name or "").strip()
        if not search_name:
            raise ItemNotFoundError(name=name)

        db_item = await self.get_by_exact_name(db, name=search_name)
        if db_item is not None:
            return db_item

        candidates = await self.search_by_name(db, fragment=search_name)
        if not candidates:
            raise ItemNotFoundError(name=search_name)
        if len(candidates) > 1:
            raise AmbiguousItemNameError(search_name, [c.id for c in candidates])
        return candidates[0]

    async def decrement_stock(self, db: AsyncSession, *, db_item: inv_models.Item, quantity: int) -> inv_models.Item:
        """
        가용 재고를 quantity만큼 차감합니다.
        DB에서 `quantity = quantity - n` 조건부 UPDATE로 수행하며, 재고가 부족하면 InsufficientStockError를 발생시킵니다.
        """
        result = await db.execute(
            update(self.model)
            .where(self.model.id == db_item.id, self.model.quantity >= quantity)
            .values(quantity=self.model.quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        await db.refresh(db_item, attribute_names=["quantity"])
        if result.rowcount == 0:
            raise InsufficientStockError(db_item.name, db_item.quantity, quantity)
        logger.debug("Stock of item %s decremented by %s (now %s)", db_item.id, quantity, db_item.quantity)
        return db_item

    async def increment_stock(self, db: AsyncSession, *, item_id: int, quantity: int) -> inv_models.Item:
        """가용 재고를 quantity만큼 복원합니다 (`quantity = quantity + n` UPDATE)."""
        result = await db.execute(
            update(self.model)
            .where(self.model.id == item_id)
            .values(quantity=self.model.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ItemNotFoundError(item_id=item_id)
        db_item = await self.get(db, item_id)
        await db.refresh(db_item, attribute_names=["quantity"])
        logger.debug("Stock of item %s incremented by %s (now %s)", db_item.id, quantity, db_item.quantity)
        return db_item

    async def update_status(
        self, db: AsyncSession, *, item_ids: List[int], new_status: inv_models.ItemStatus
    ) -> List[inv_models.Item]:
        """
        여러 품목의 상태를 변경하고 품목마다 상태 변경 이력을 기록합니다.
        하나라도 존재하지 않으면 ItemNotFoundError를 발생시킵니다 (커밋은 호출자가 담당).
        """
        updated: List[inv_models.Item] = []
        for item_id in item_ids:
            db_item = await self.get(db, item_id)
            if db_item is None:
                raise ItemNotFoundError(item_id=item_id)

            db.add(
                inv_models.ItemStatusHistory(
                    item_id=db_item.id,
                    previous_status=db_item.status,
                    new_status=new_status,
                )
            )
            db_item.status = new_status
            db.add(db_item)
            updated.append(db_item)

        await db.flush()
        return updated


item = ItemCRUD(inv_models.Item)
