# app/domains/cnd/services.py

"""
조건부 대여 서비스 계층입니다.

- 입력 값의 비즈니스 검증 (ID, 수량, 반납일, 페이지 범위 등).
- 수명 주기 연산(crud) 및 보고서(reports) 호출.
- 예외 타입에 따른 분류와 공통 응답 봉투 {success, message, code?, data?} 생성.

분류되지 않은 예외는 연산별 일반 코드(CREATE_ERROR 등)로 변환되며,
스택 트레이스는 로그에만 남기고 호출자에게는 전달하지 않습니다.
"""

import logging
import math
from datetime import date
from typing import Any, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import settings
from app.core.database import atomic
from app.core.exceptions import AppError, ConsignmentAlreadyFinishedError, ConsignmentNotFoundError, ValidationError
from app.domains.cnd import crud as cnd_crud
from app.domains.cnd import reports as cnd_reports
from app.domains.cnd import schemas as cnd_schemas
from app.domains.inv import crud as inv_crud
from app.domains.inv.models import ItemStatus
from app.domains.inv import schemas as inv_schemas
from app.utils.formatters import is_past_day

logger = logging.getLogger(__name__)


def _require_positive_id(value: Optional[int], code: str = "INVALID_ID", label: str = "ID") -> None:
    if value is None or value <= 0:
        raise ValidationError(code, f"Invalid {label}: must be a positive integer", value=value)


def _require_positive_quantity(quantity: Optional[int]) -> None:
    if quantity is None or quantity <= 0:
        raise ValidationError("INVALID_QUANTITY", "Quantity must be greater than zero", quantity=quantity)


class ConsignmentService:
    """요청 단위로 생성되며, 주입된 세션 하나로 모든 연산을 수행합니다."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # -------------------------------------------------------------------------
    # 응답 봉투
    # -------------------------------------------------------------------------
    @staticmethod
    def _ok(message: str, data: Any = None, code: Optional[str] = None) -> cnd_schemas.ServiceResponse:
        return cnd_schemas.ServiceResponse(success=True, message=message, code=code, data=data)

    @staticmethod
    def _fail(operation: str, exc: AppError) -> cnd_schemas.ServiceResponse:
        logger.warning("%s rejected [%s]: %s", operation, exc.code, exc.message)
        return cnd_schemas.ServiceResponse(
            success=False, message=exc.message, code=exc.code, category=exc.category.value
        )

    @staticmethod
    def _internal(operation: str, code: str, exc: Exception) -> cnd_schemas.ServiceResponse:
        logger.exception("%s failed [%s]", operation, code)
        return cnd_schemas.ServiceResponse(
            success=False, message=str(exc) or f"{operation} failed", code=code, category="internal"
        )

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------
    async def list_consignments(
        self,
        *,
        client_id: Optional[int] = None,
        returned: Optional[bool] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> cnd_schemas.ServiceResponse:
        limit = settings.DEFAULT_PAGE_LIMIT if limit is None else limit
        try:
            if page < 1:
                raise ValidationError("INVALID_PAGE", "Page must be greater than or equal to 1", page=page)
            if limit < 1 or limit > settings.MAX_PAGE_LIMIT:
                raise ValidationError(
                    "INVALID_LIMIT", f"Limit must be between 1 and {settings.MAX_PAGE_LIMIT}", limit=limit
                )
            if client_id is not None:
                _require_positive_id(client_id, "INVALID_CLIENT_ID", "client ID")

            rows, total = await cnd_crud.consignment.get_multi_filtered(
                self.db,
                client_id=client_id,
                returned=returned,
                date_from=date_from,
                date_to=date_to,
                skip=(page - 1) * limit,
                limit=limit,
            )
            total_pages = math.ceil(total / limit)
            result = cnd_schemas.ConsignmentPage(
                data=[cnd_schemas.ConsignmentResponse.model_validate(row) for row in rows],
                total=total,
                page=page,
                limit=limit,
                total_pages=total_pages,
                has_next=page < total_pages,
                has_prev=page > 1,
            )
            return self._ok("Consignments listed successfully", result)
        except AppError as e:
            return self._fail("list", e)
        except Exception as e:
            return self._internal("list", "LIST_ERROR", e)

    async def get_consignment(self, consignment_id: int) -> cnd_schemas.ServiceResponse:
        try:
            _require_positive_id(consignment_id)
            db_obj = await cnd_crud.consignment.get(self.db, consignment_id)
            if db_obj is None:
                raise ConsignmentNotFoundError(consignment_id)
            return self._ok("Consignment found", cnd_schemas.ConsignmentResponse.model_validate(db_obj))
        except AppError as e:
            return self._fail("get", e)
        except Exception as e:
            return self._internal("get", "SEARCH_ERROR", e)

    # -------------------------------------------------------------------------
    # 생성 / 수정
    # -------------------------------------------------------------------------
    async def create(self, obj_in: cnd_schemas.ConsignmentCreate) -> cnd_schemas.ServiceResponse:
        try:
            _require_positive_id(obj_in.client_id, "INVALID_CLIENT_ID", "client ID")
            if is_past_day(obj_in.return_date):
                raise ValidationError("INVALID_RETURN_DATE", "Return date cannot be in the past")
            if not obj_in.items:
                raise ValidationError("NO_ITEMS", "At least one item is required")
            for ref in obj_in.items:
                _require_positive_quantity(ref.quantity)
                if ref.item_id is not None:
                    _require_positive_id(ref.item_id, "INVALID_ITEM_ID", "item ID")
                elif not (ref.item_name or "").strip():
                    raise ValidationError(
                        "MISSING_ITEM_IDENTIFIER", "Each item needs an item_id or an item_name"
                    )

            db_obj = await cnd_crud.consignment.create_with_items(self.db, obj_in=obj_in)
            return self._ok(
                "Consignment created successfully", cnd_schemas.ConsignmentResponse.model_validate(db_obj)
            )
        except AppError as e:
            return self._fail("create", e)
        except Exception as e:
            return self._internal("create", "CREATE_ERROR", e)

    async def update(
        self, consignment_id: int, obj_in: cnd_schemas.ConsignmentUpdate
    ) -> cnd_schemas.ServiceResponse:
        try:
            _require_positive_id(consignment_id)
            changes = obj_in.model_dump(exclude_unset=True)
            if "client_id" in changes:
                _require_positive_id(changes["client_id"], "INVALID_CLIENT_ID", "client ID")
            if "return_date" in changes:
                if changes["return_date"] is None or is_past_day(changes["return_date"]):
                    raise ValidationError("INVALID_RETURN_DATE", "Return date cannot be in the past")

            db_obj = await cnd_crud.consignment.update_consignment(
                self.db, consignment_id=consignment_id, changes=changes
            )
            return self._ok(
                "Consignment updated successfully", cnd_schemas.ConsignmentResponse.model_validate(db_obj)
            )
        except AppError as e:
            return self._fail("update", e)
        except Exception as e:
            return self._internal("update", "UPDATE_ERROR", e)

    # -------------------------------------------------------------------------
    # 반납 / 종료 / 삭제
    # -------------------------------------------------------------------------
    async def return_item(
        self, consignment_id: int, obj_in: cnd_schemas.ReturnItemRequest
    ) -> cnd_schemas.ServiceResponse:
        try:
            _require_positive_id(consignment_id)
            _require_positive_id(obj_in.item_id, "INVALID_ITEM_ID", "item ID")
            _require_positive_quantity(obj_in.quantity)

            result = await cnd_crud.consignment.return_item(
                self.db, consignment_id=consignment_id, item_id=obj_in.item_id, quantity=obj_in.quantity
            )
            return self._ok("Item returned successfully", result)
        except AppError as e:
            return self._fail("return-item", e)
        except Exception as e:
            return self._internal("return-item", "RETURN_ERROR", e)

    async def finalize(
        self, consignment_id: int, obj_in: Optional[cnd_schemas.FinalizeRequest] = None
    ) -> cnd_schemas.ServiceResponse:
        obj_in = obj_in or cnd_schemas.FinalizeRequest()
        try:
            _require_positive_id(consignment_id)
            db_obj = await cnd_crud.consignment.finalize(
                self.db, consignment_id=consignment_id, returned=obj_in.returned, notes=obj_in.notes
            )
            return self._ok(
                "Consignment finalized successfully", cnd_schemas.ConsignmentResponse.model_validate(db_obj)
            )
        except AppError as e:
            return self._fail("finalize", e)
        except Exception as e:
            return self._internal("finalize", "FINALIZE_ERROR", e)

    async def delete(self, consignment_id: int) -> cnd_schemas.ServiceResponse:
        try:
            _require_positive_id(consignment_id)
            deleted_id = await cnd_crud.consignment.delete_with_restock(self.db, consignment_id=consignment_id)
            return self._ok("Consignment deleted successfully", cnd_schemas.ConsignmentDeleted(id=deleted_id))
        except AppError as e:
            return self._fail("delete", e)
        except Exception as e:
            return self._internal("delete", "DELETE_ERROR", e)

    # -------------------------------------------------------------------------
    # 판매 전환
    # -------------------------------------------------------------------------
    async def convert_to_sale(
        self, consignment_id: int, obj_in: cnd_schemas.ConvertToSaleRequest
    ) -> cnd_schemas.ServiceResponse:
        try:
            _require_positive_id(consignment_id)
            if obj_in.items_sold != "all":
                if not obj_in.items_sold:
                    raise ValidationError("NO_ITEMS", "At least one item must be selected for sale")
                for sold in obj_in.items_sold:
                    _require_positive_id(sold.item_id, "INVALID_ITEM_ID", "item ID")
                    _require_positive_quantity(sold.quantity)

            result = await cnd_crud.consignment.convert_to_sale(
                self.db,
                consignment_id=consignment_id,
                items_sold=obj_in.items_sold,
                discount=obj_in.discount,
                payment_method=obj_in.payment_method,
                notes=obj_in.notes,
            )
            return self._ok("Consignment converted to sale successfully", result)
        except ConsignmentAlreadyFinishedError as e:
            # 이미 종료된 대여는 변경 없이 성공으로 응답합니다.
            logger.info("convert-to-sale skipped [%s]: consignment %s", e.code, consignment_id)
            db_obj = await cnd_crud.consignment.get(self.db, consignment_id)
            return self._ok(
                e.message, cnd_schemas.ConsignmentResponse.model_validate(db_obj), code=e.code
            )
        except AppError as e:
            return self._fail("convert-to-sale", e)
        except Exception as e:
            return self._internal("convert-to-sale", "CONVERSION_ERROR", e)

    # -------------------------------------------------------------------------
    # 보고서 / 통계
    # -------------------------------------------------------------------------
    async def active_report(
        self,
        *,
        client_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        expired_only: bool = False,
    ) -> cnd_schemas.ServiceResponse:
        try:
            if client_id is not None:
                _require_positive_id(client_id, "INVALID_CLIENT_ID", "client ID")
            report = await cnd_reports.active_report(
                self.db, client_id=client_id, date_from=date_from, date_to=date_to, expired_only=expired_only
            )
            return self._ok("Active consignments report generated successfully", report)
        except AppError as e:
            return self._fail("active-report", e)
        except Exception as e:
            return self._internal("active-report", "REPORT_ERROR", e)

    async def returned_report(
        self,
        *,
        client_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> cnd_schemas.ServiceResponse:
        try:
            if client_id is not None:
                _require_positive_id(client_id, "INVALID_CLIENT_ID", "client ID")
            report = await cnd_reports.returned_report(
                self.db, client_id=client_id, date_from=date_from, date_to=date_to
            )
            return self._ok("Returned consignments report generated successfully", report)
        except AppError as e:
            return self._fail("returned-report", e)
        except Exception as e:
            return self._internal("returned-report", "REPORT_ERROR", e)

    async def get_stats(
        self, *, date_from: Optional[date] = None, date_to: Optional[date] = None
    ) -> cnd_schemas.ServiceResponse:
        try:
            stats = await cnd_reports.consignment_stats(self.db, date_from=date_from, date_to=date_to)
            return self._ok("Consignment statistics computed successfully", stats)
        except Exception as e:
            return self._internal("stats", "STATS_ERROR", e)

    # -------------------------------------------------------------------------
    # 품목 상태 일괄 변경
    # -------------------------------------------------------------------------
    async def update_item_status(self, obj_in: inv_schemas.ItemStatusUpdate) -> cnd_schemas.ServiceResponse:
        try:
            if not obj_in.item_ids or any(item_id <= 0 for item_id in obj_in.item_ids):
                raise ValidationError("INVALID_ITEM_IDS", "item_ids must be a non-empty list of positive integers")
            if not (obj_in.new_status or "").strip():
                raise ValidationError("MISSING_STATUS", "new_status is required")
            try:
                new_status = ItemStatus(obj_in.new_status.strip())
            except ValueError:
                allowed = ", ".join(s.value for s in ItemStatus)
                raise ValidationError(
                    "INVALID_STATUS", f"Invalid status '{obj_in.new_status}'. Allowed: {allowed}"
                ) from None

            async with atomic(self.db):
                db_items = await inv_crud.item.update_status(
                    self.db, item_ids=list(dict.fromkeys(obj_in.item_ids)), new_status=new_status
                )
                result = cnd_schemas.ItemStatusResult(
                    updated=len(db_items),
                    items=[inv_schemas.ItemSummary.model_validate(db_item) for db_item in db_items],
                )
            logger.info("Status of %s item(s) changed to %s", result.updated, new_status.value)
            return self._ok("Item status updated successfully", result)
        except AppError as e:
            return self._fail("item-status", e)
        except Exception as e:
            return self._internal("item-status", "STATUS_UPDATE_ERROR", e)
