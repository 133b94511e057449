# app/domains/cnd/reports.py

"""
조건부 대여 보고서와 통계를 계산하는 모듈입니다.

남은 일수, 만료 여부, 합계 같은 파생 값은 저장하지 않고 조회 시점에 다시 계산합니다.
기간 필터(date_from, date_to)는 대여 생성일 기준이며 양 끝 날짜를 포함합니다.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.crud_base import apply_date_range
from app.domains.cnd import models as cnd_models
from app.domains.cnd import schemas as cnd_schemas
from app.domains.cnd.crud import consignment as consignment_crud
from app.utils.formatters import as_utc, days_remaining, quantize_money, utc_now


def _items_totals(db_obj: cnd_models.Consignment) -> Tuple[int, Decimal]:
    """대여 품목의 총 수량과 총 금액(수량 × 단가)을 계산합니다."""
    item_count = sum(line.quantity for line in db_obj.items)
    total_value = sum((line.item.price * line.quantity for line in db_obj.items), Decimal("0"))
    return item_count, quantize_money(total_value)


async def _load(
    db: AsyncSession,
    *,
    returned: bool,
    client_id: Optional[int],
    date_from: Optional[date],
    date_to: Optional[date],
    order_by,
) -> List[cnd_models.Consignment]:
    query = select(cnd_models.Consignment).where(cnd_models.Consignment.returned == returned)
    if client_id is not None:
        query = query.where(cnd_models.Consignment.client_id == client_id)
    query = apply_date_range(query, cnd_models.Consignment.created_at, date_from, date_to)
    query = consignment_crud.with_relations(query.order_by(*order_by))
    result = await db.execute(query)
    return list(result.scalars().all())


async def active_report(
    db: AsyncSession,
    *,
    client_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    expired_only: bool = False,
    now: Optional[datetime] = None,
) -> cnd_schemas.ActiveReport:
    """
    진행 중(returned=False)인 조건부 대여 보고서. 반납 예정일 오름차순입니다.

    행마다 남은 일수(올림), 상태(expired/active), 품목 수량과 금액을 계산하고,
    전체 건수/수량/금액, 만료 건수, CONSIGNMENT_DUE_SOON_DAYS 이내 반납 예정 건수를 집계합니다.
    """
    now = now or utc_now()
    due_soon_limit = now + timedelta(days=settings.CONSIGNMENT_DUE_SOON_DAYS)
    rows = await _load(
        db,
        returned=False,
        client_id=client_id,
        date_from=date_from,
        date_to=date_to,
        order_by=(cnd_models.Consignment.return_date.asc(), cnd_models.Consignment.id.asc()),
    )

    report_rows: List[cnd_schemas.ActiveConsignmentRow] = []
    total_items = 0
    total_value = Decimal("0")
    expired = due_soon = 0
    for db_obj in rows:
        return_date = as_utc(db_obj.return_date)
        is_expired = return_date < now
        if expired_only and not is_expired:
            continue

        item_count, value = _items_totals(db_obj)
        total_items += item_count
        total_value += value
        if is_expired:
            expired += 1
        elif return_date <= due_soon_limit:
            due_soon += 1

        base = cnd_schemas.ConsignmentResponse.model_validate(db_obj).model_dump()
        report_rows.append(
            cnd_schemas.ActiveConsignmentRow(
                **base,
                days_remaining=days_remaining(return_date, now),
                status="expired" if is_expired else "active",
                item_count=item_count,
                total_value=float(value),
            )
        )

    return cnd_schemas.ActiveReport(
        consignments=report_rows,
        stats=cnd_schemas.ActiveReportStats(
            total_consignments=len(report_rows),
            total_items=total_items,
            total_value=float(quantize_money(total_value)),
            expired=expired,
            due_soon=due_soon,
        ),
    )


async def returned_report(
    db: AsyncSession,
    *,
    client_id: Optional[int] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> cnd_schemas.ReturnedReport:
    """반납 완료(returned=True)된 조건부 대여 보고서. 생성일 내림차순입니다."""
    rows = await _load(
        db,
        returned=True,
        client_id=client_id,
        date_from=date_from,
        date_to=date_to,
        order_by=(cnd_models.Consignment.created_at.desc(), cnd_models.Consignment.id.desc()),
    )

    report_rows: List[cnd_schemas.ReturnedConsignmentRow] = []
    total_items = 0
    total_value = Decimal("0")
    for db_obj in rows:
        # 종료된 대여는 대여 품목 행이 없으므로 현재 행 기준 합계는 0입니다.
        item_count, value = _items_totals(db_obj)
        total_items += item_count
        total_value += value
        base = cnd_schemas.ConsignmentResponse.model_validate(db_obj).model_dump()
        report_rows.append(
            cnd_schemas.ReturnedConsignmentRow(**base, item_count=item_count, total_value=float(value))
        )

    return cnd_schemas.ReturnedReport(
        consignments=report_rows,
        stats=cnd_schemas.ReturnedReportStats(
            total_consignments=len(report_rows),
            total_items=total_items,
            total_value=float(quantize_money(total_value)),
        ),
    )


async def consignment_stats(
    db: AsyncSession, *, date_from: Optional[date] = None, date_to: Optional[date] = None
) -> cnd_schemas.ConsignmentStats:
    """생성일 기준 전체/진행 중/반납 완료 건수를 집계합니다."""

    async def _count(returned: Optional[bool] = None) -> int:
        query = select(func.count(cnd_models.Consignment.id))
        if returned is not None:
            query = query.where(cnd_models.Consignment.returned == returned)
        query = apply_date_range(query, cnd_models.Consignment.created_at, date_from, date_to)
        return (await db.execute(query)).scalar_one()

    return cnd_schemas.ConsignmentStats(
        total=await _count(),
        active=await _count(False),
        returned=await _count(True),
    )
