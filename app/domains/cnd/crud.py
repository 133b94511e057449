# app/domains/cnd/crud.py

"""
'cnd' 도메인의 조건부 대여 수명 주기 연산을 정의하는 모듈입니다.

각 변경 연산은 하나의 `atomic` 블록 안에서 실행됩니다. 조회, 재고 증감, 대여 품목 변경이
모두 같은 트랜잭션에 속하므로 중간에 예외가 발생하면 해당 호출의 변경은 모두 롤백됩니다.

재고 규칙:
- 대여 품목 생성 시 대여 수량만큼 재고를 차감합니다.
- 반납/종료/삭제 시 반납 수량만큼 재고를 복원합니다.
- 판매로 전환된 수량은 재고를 복원하지 않습니다.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.crud_base import CRUDBase, apply_date_range
from app.core.database import atomic
from app.core.exceptions import (
    ClientNotFoundError,
    ConsignmentAlreadyFinalizedError,
    ConsignmentAlreadyFinishedError,
    ConsignmentAlreadyReturnedError,
    ConsignmentNotFoundError,
    InsufficientStockError,
    InvalidDiscountError,
    InvalidReturnQuantityError,
    InvalidSaleQuantityError,
    ItemNotInConsignmentError,
    NoItemsToFinalizeError,
)
from app.domains.cnd import models as cnd_models
from app.domains.cnd import schemas as cnd_schemas
from app.domains.crm import crud as crm_crud
from app.domains.inv import crud as inv_crud
from app.domains.inv import models as inv_models
from app.domains.sls import crud as sls_crud
from app.domains.sls import schemas as sls_schemas
from app.utils.formatters import as_utc, quantize_money

logger = logging.getLogger(__name__)


class ConsignmentCRUD(
    CRUDBase[cnd_models.Consignment, cnd_schemas.ConsignmentCreate, cnd_schemas.ConsignmentUpdate]
):
    """Consignment 모델에 특화된 수명 주기 연산을 처리합니다."""

    def with_relations(self, query):
        """고객과 대여 품목(및 품목 정보)을 즉시 로딩합니다. 비동기 세션에서는 지연 로딩을 사용하지 않습니다."""
        return query.options(
            selectinload(self.model.client),
            selectinload(self.model.items).selectinload(cnd_models.ConsignmentItem.item),
        ).execution_options(populate_existing=True)

    async def get(self, db: AsyncSession, id: int) -> Optional[cnd_models.Consignment]:
        query = self.with_relations(select(self.model).where(self.model.id == id))
        result = await db.execute(query)
        return result.scalars().first()

    async def _get_or_raise(self, db: AsyncSession, id: int) -> cnd_models.Consignment:
        db_obj = await self.get(db, id)
        if db_obj is None:
            raise ConsignmentNotFoundError(id)
        return db_obj

    async def get_multi_filtered(
        self,
        db: AsyncSession,
        *,
        client_id: Optional[int] = None,
        returned: Optional[bool] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> Tuple[List[cnd_models.Consignment], int]:
        """필터 조건에 맞는 조건부 대여 목록(생성일 내림차순)과 전체 건수를 반환합니다."""
        query = select(self.model)
        if client_id is not None:
            query = query.where(self.model.client_id == client_id)
        if returned is not None:
            query = query.where(self.model.returned == returned)
        query = apply_date_range(query, self.model.created_at, date_from, date_to)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await db.execute(count_query)).scalar_one()

        query = self.with_relations(
            query.order_by(self.model.created_at.desc(), self.model.id.desc()).offset(skip).limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all()), total

    # -------------------------------------------------------------------------
    # 생성
    # -------------------------------------------------------------------------
    async def create_with_items(
        self, db: AsyncSession, *, obj_in: cnd_schemas.ConsignmentCreate
    ) -> cnd_models.Consignment:
        """
        고객 확인 → 품목 해석 → 재고 충분 여부 확인 → 조건부 대여 생성 → 대여 품목 생성 및 재고 차감.
        같은 품목을 여러 번 참조하면 수량을 합쳐 하나의 대여 품목으로 만듭니다.
        """
        async with atomic(db):
            db_client = await crm_crud.client.get(db, obj_in.client_id)
            if db_client is None:
                raise ClientNotFoundError(obj_in.client_id)

            lines: Dict[int, List[Any]] = {}  # item_id -> [Item, 합산 수량]
            for ref in obj_in.items:
                db_item = await inv_crud.item.resolve(db, item_id=ref.item_id, name=ref.item_name)
                if db_item.id in lines:
                    lines[db_item.id][1] += ref.quantity
                else:
                    lines[db_item.id] = [db_item, ref.quantity]

            for db_item, quantity in lines.values():
                if db_item.quantity < quantity:
                    raise InsufficientStockError(db_item.name, db_item.quantity, quantity)

            db_obj = cnd_models.Consignment(
                client_id=db_client.id,
                return_date=as_utc(obj_in.return_date),
                notes=obj_in.notes,
                returned=False,
            )
            db.add(db_obj)
            await db.flush()

            for db_item, quantity in lines.values():
                db.add(cnd_models.ConsignmentItem(consignment_id=db_obj.id, item_id=db_item.id, quantity=quantity))
                await inv_crud.item.decrement_stock(db, db_item=db_item, quantity=quantity)
            await db.flush()
            consignment_id = db_obj.id

        logger.info("Consignment %s created for client %s with %s line(s)", consignment_id, obj_in.client_id, len(lines))
        return await self.get(db, consignment_id)

    # -------------------------------------------------------------------------
    # 수정
    # -------------------------------------------------------------------------
    async def update_consignment(
        self, db: AsyncSession, *, consignment_id: int, changes: Dict[str, Any]
    ) -> cnd_models.Consignment:
        """전달된 필드(client_id, return_date, notes)만 변경합니다. 반납 완료된 대여는 변경할 수 없습니다."""
        async with atomic(db):
            db_obj = await self._get_or_raise(db, consignment_id)
            if db_obj.returned:
                raise ConsignmentAlreadyReturnedError(
                    consignment_id, "Cannot modify a consignment that has already been returned"
                )

            if "client_id" in changes:
                if await crm_crud.client.get(db, changes["client_id"]) is None:
                    raise ClientNotFoundError(changes["client_id"])
                db_obj.client_id = changes["client_id"]
            if "return_date" in changes:
                db_obj.return_date = as_utc(changes["return_date"])
            if "notes" in changes:
                db_obj.notes = changes["notes"]
            db.add(db_obj)
            await db.flush()

        return await self.get(db, consignment_id)

    # -------------------------------------------------------------------------
    # 부분 반납
    # -------------------------------------------------------------------------
    async def return_item(
        self, db: AsyncSession, *, consignment_id: int, item_id: int, quantity: int
    ) -> cnd_schemas.ReturnItemResult:
        """
        대여 품목 하나의 일부 또는 전체를 반납합니다.
        반납 수량이 대여 수량과 같으면 대여 품목 행을 삭제하고, 남은 행이 없으면 returned=True가 됩니다.
        """
        async with atomic(db):
            db_obj = await self._get_or_raise(db, consignment_id)
            if db_obj.returned:
                raise ConsignmentAlreadyReturnedError(consignment_id)

            line = next((ci for ci in db_obj.items if ci.item_id == item_id), None)
            if line is None:
                raise ItemNotInConsignmentError(item_id)
            if quantity > line.quantity:
                raise InvalidReturnQuantityError(quantity, line.quantity)

            if quantity == line.quantity:
                db_obj.items.remove(line)
            else:
                line.quantity -= quantity
                db.add(line)
            await inv_crud.item.increment_stock(db, item_id=item_id, quantity=quantity)

            remaining = len(db_obj.items)
            if remaining == 0:
                db_obj.returned = True
            db.add(db_obj)
            await db.flush()

        logger.info(
            "Consignment %s: returned %s unit(s) of item %s, %s line(s) remaining",
            consignment_id, quantity, item_id, remaining,
        )
        return cnd_schemas.ReturnItemResult(quantity_returned=quantity, remaining_item_count=remaining)

    # -------------------------------------------------------------------------
    # 종료 (전체 반납)
    # -------------------------------------------------------------------------
    async def finalize(
        self, db: AsyncSession, *, consignment_id: int, returned: bool = True, notes: Optional[str] = None
    ) -> cnd_models.Consignment:
        """남은 모든 대여 품목의 재고를 복원하고 행을 삭제한 뒤 조건부 대여를 종료합니다."""
        async with atomic(db):
            db_obj = await self._get_or_raise(db, consignment_id)
            if db_obj.returned:
                raise ConsignmentAlreadyFinalizedError(consignment_id)
            if not db_obj.items:
                raise NoItemsToFinalizeError(consignment_id)

            for line in list(db_obj.items):
                await inv_crud.item.increment_stock(db, item_id=line.item_id, quantity=line.quantity)
                db_obj.items.remove(line)

            db_obj.returned = returned
            if notes is not None:
                db_obj.notes = notes
            db.add(db_obj)
            await db.flush()

        logger.info("Consignment %s finalized (returned=%s)", consignment_id, returned)
        return await self.get(db, consignment_id)

    # -------------------------------------------------------------------------
    # 삭제
    # -------------------------------------------------------------------------
    async def delete_with_restock(self, db: AsyncSession, *, consignment_id: int) -> int:
        """남아 있는 대여 품목의 재고를 복원한 뒤 조건부 대여를 삭제합니다. 어떤 상태에서도 가능합니다."""
        async with atomic(db):
            db_obj = await self._get_or_raise(db, consignment_id)
            for line in db_obj.items:
                await inv_crud.item.increment_stock(db, item_id=line.item_id, quantity=line.quantity)
            await db.delete(db_obj)
            await db.flush()

        logger.info("Consignment %s deleted", consignment_id)
        return consignment_id

    # -------------------------------------------------------------------------
    # 판매 전환
    # -------------------------------------------------------------------------
    async def convert_to_sale(
        self,
        db: AsyncSession,
        *,
        consignment_id: int,
        items_sold: Union[Literal["all"], List[cnd_schemas.SoldItem]],
        discount: Any,
        payment_method: sls_schemas.PaymentMethod,
        notes: Optional[str] = None,
    ) -> cnd_schemas.ConversionResult:
        """
        대여 품목의 전체("all") 또는 일부를 판매로 전환합니다.

        - 판매된 수량은 재고로 복원하지 않습니다.
        - 전부 판매된 행은 삭제하고, 일부 판매된 행은 수량을 줄이며, 나머지 행은 그대로 둡니다.
        - 남은 행이 없으면 returned=True가 됩니다.
        """
        async with atomic(db):
            db_obj = await self._get_or_raise(db, consignment_id)
            if db_obj.returned:
                raise ConsignmentAlreadyFinishedError(consignment_id)

            lines_by_item = {line.item_id: line for line in db_obj.items}
            requested: Dict[int, int] = {}
            if items_sold == "all":
                requested = {line.item_id: line.quantity for line in db_obj.items}
            else:
                for sold in items_sold:
                    requested[sold.item_id] = requested.get(sold.item_id, 0) + sold.quantity
            if not requested:
                raise NoItemsToFinalizeError(consignment_id, "Consignment has no items left to convert")

            sold_lines: List[cnd_schemas.SoldItemLine] = []
            sale_items: List[sls_schemas.SaleItemCreate] = []
            total = quantize_money(0)
            for item_id, quantity in requested.items():
                line = lines_by_item.get(item_id)
                if line is None:
                    raise ItemNotInConsignmentError(item_id)
                db_item: inv_models.Item = line.item
                if quantity > line.quantity:
                    raise InvalidSaleQuantityError(db_item.name, quantity, line.quantity)

                unit_price = quantize_money(db_item.price)
                subtotal = quantize_money(unit_price * quantity)
                total += subtotal
                sold_lines.append(
                    cnd_schemas.SoldItemLine(
                        item_id=item_id,
                        name=db_item.name,
                        quantity=quantity,
                        unit_price=float(unit_price),
                        subtotal=float(subtotal),
                    )
                )
                sale_items.append(sls_schemas.SaleItemCreate(item_id=item_id, quantity=quantity, unit_price=unit_price))

            total = quantize_money(total)
            discount_value = quantize_money(discount or 0)
            if discount_value > total:
                raise InvalidDiscountError(discount_value, total)
            final_amount = quantize_money(total - discount_value)

            db_sale = await sls_crud.sale.create(
                db,
                obj_in=sls_schemas.SaleCreate(
                    payment_method=payment_method,
                    total=total,
                    discount=discount_value,
                    paid_amount=final_amount,
                    client_name=db_obj.client.name if db_obj.client else None,
                    client_phone=db_obj.client.phone if db_obj.client else None,
                    notes=notes,
                    items=sale_items,
                ),
                commit=False,
            )

            for item_id, quantity in requested.items():
                line = lines_by_item[item_id]
                if quantity == line.quantity:
                    db_obj.items.remove(line)
                else:
                    line.quantity -= quantity
                    db.add(line)

            finalized = not db_obj.items
            if finalized:
                db_obj.returned = True
            db.add(db_obj)
            await db.flush()
            sale_id = db_sale.id

        logger.info(
            "Consignment %s converted to sale %s (total %s, discount %s, finalized=%s)",
            consignment_id, sale_id, total, discount_value, finalized,
        )
        db_sale = await sls_crud.sale.get(db, sale_id)
        db_obj = await self.get(db, consignment_id)
        return cnd_schemas.ConversionResult(
            sale=sls_schemas.SaleResponse.model_validate(db_sale),
            updated_consignment=cnd_schemas.ConsignmentResponse.model_validate(db_obj),
            items_sold=sold_lines,
            items_returned=[],
            summary=cnd_schemas.ConversionSummary(
                total=float(total),
                discount=float(discount_value),
                final_amount=float(final_amount),
                consignment_finalized=finalized,
            ),
        )


consignment = ConsignmentCRUD(cnd_models.Consignment)
