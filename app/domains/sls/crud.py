# app/domains/sls/crud.py

"""
'sls' 도메인의 CRUD 작업을 위한 함수들을 정의하는 모듈입니다.
"""

import logging
from typing import Optional

from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase
from app.domains.sls import models as sls_models
from app.domains.sls import schemas as sls_schemas

logger = logging.getLogger(__name__)


class SaleCRUD(CRUDBase[sls_models.Sale, sls_schemas.SaleCreate, sls_schemas.SaleCreate]):
    """Sale 모델에 특화된 CRUD 작업을 처리합니다."""

    async def get(self, db: AsyncSession, id: int) -> Optional[sls_models.Sale]:
        """판매와 판매 품목을 함께 조회합니다."""
        query = (
            select(self.model)
            .where(self.model.id == id)
            .options(selectinload(self.model.items))
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalars().first()

    async def create(
        self, db: AsyncSession, *, obj_in: sls_schemas.SaleCreate, commit: bool = True
    ) -> sls_models.Sale:
        """
        판매와 판매 품목을 저장합니다. 재고 수량은 변경하지 않습니다.
        commit=False이면 flush만 수행하여 호출자의 트랜잭션에 합류합니다.
        """
        db_sale = sls_models.Sale(
            payment_method=obj_in.payment_method.value,
            total=obj_in.total,
            discount=obj_in.discount,
            paid_amount=obj_in.paid_amount,
            client_name=obj_in.client_name,
            client_phone=obj_in.client_phone,
            notes=obj_in.notes,
        )
        db_sale.items = [
            sls_models.SaleItem(item_id=line.item_id, quantity=line.quantity, unit_price=line.unit_price)
            for line in obj_in.items
        ]
        db.add(db_sale)
        if commit:
            await db.commit()
        else:
            await db.flush()
        logger.info("Sale %s recorded (%s items, paid %s)", db_sale.id, len(obj_in.items), obj_in.paid_amount)
        return await self.get(db, db_sale.id)


sale = SaleCRUD(sls_models.Sale)
