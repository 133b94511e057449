# app/core/exceptions.py

"""
비즈니스 규칙 위반을 표현하는 예외 계층을 정의하는 모듈입니다.

모든 예외는 `AppError`를 상속하며, 응답 코드(`code`), 사용자 메시지(`message`),
분류(`category`)와 함께 구조화된 필드(ID, 요청/가용 수량 등)를 가집니다.
서비스 계층은 메시지 문자열이 아니라 예외 타입으로 오류를 분류합니다.

분류:
- NOT_FOUND: 참조한 조건부 대여/고객/품목이 존재하지 않음 (HTTP 404)
- CONFLICT: 재고 부족, 수량 초과, 이미 종료된 상태에서의 전이 (HTTP 409)
- VALIDATION: 잘못된 ID, 0 이하 수량, 과거 반납일 등 입력 오류 (HTTP 400)
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(str, Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"


class AppError(Exception):
    """모든 비즈니스 오류의 기본 클래스입니다."""

    code: str = "APP_ERROR"
    category: ErrorCategory = ErrorCategory.VALIDATION

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def __str__(self) -> str:
        return self.message


# =============================================================================
# 1. 존재하지 않음 (NOT_FOUND)
# =============================================================================
class NotFoundError(AppError):
    category = ErrorCategory.NOT_FOUND


class ConsignmentNotFoundError(NotFoundError):
    code = "CONDICIONAL_NOT_FOUND"

    def __init__(self, consignment_id: int):
        super().__init__("Consignment not found", consignment_id=consignment_id)
        self.consignment_id = consignment_id


class ClientNotFoundError(NotFoundError):
    code = "CLIENT_NOT_FOUND"

    def __init__(self, client_id: int):
        super().__init__(f"Client with ID {client_id} not found", client_id=client_id)
        self.client_id = client_id


class ItemNotFoundError(NotFoundError):
    code = "ITEM_NOT_FOUND"

    def __init__(self, item_id: Optional[int] = None, name: Optional[str] = None):
        identifier = f"ID {item_id}" if item_id is not None else f'name "{name}"'
        super().__init__(f"Item not found with {identifier}", item_id=item_id, name=name)
        self.item_id = item_id
        self.name = name


class ItemNotInConsignmentError(NotFoundError):
    code = "ITEM_NOT_IN_CONDICIONAL"

    def __init__(self, item_id: int):
        super().__init__(f"Item {item_id} not found in this consignment", item_id=item_id)
        self.item_id = item_id


# =============================================================================
# 2. 상태/수량 충돌 (CONFLICT)
# =============================================================================
class ConflictError(AppError):
    category = ErrorCategory.CONFLICT


class AmbiguousItemNameError(ConflictError):
    code = "ITEM_NAME_AMBIGUOUS"

    def __init__(self, name: str, candidate_ids: List[int]):
        super().__init__(
            f'Item name "{name}" matches several items (IDs {", ".join(map(str, candidate_ids))}); '
            "use the item ID or the exact name",
            name=name,
            candidate_ids=candidate_ids,
        )
        self.name = name
        self.candidate_ids = candidate_ids


class InsufficientStockError(ConflictError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, item_name: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for {item_name}. Available: {available}, Requested: {requested}",
            item_name=item_name,
            available=available,
            requested=requested,
        )
        self.item_name = item_name
        self.available = available
        self.requested = requested


class ConsignmentAlreadyReturnedError(ConflictError):
    code = "CONDICIONAL_ALREADY_RETURNED"

    def __init__(self, consignment_id: int, message: str = "Consignment has already been fully returned"):
        super().__init__(message, consignment_id=consignment_id)
        self.consignment_id = consignment_id


class ConsignmentAlreadyFinalizedError(ConflictError):
    code = "CONDICIONAL_ALREADY_FINALIZED"

    def __init__(self, consignment_id: int):
        super().__init__("Consignment has already been finalized", consignment_id=consignment_id)
        self.consignment_id = consignment_id


class ConsignmentAlreadyFinishedError(ConflictError):
    """이미 종료된 조건부 대여의 판매 전환 요청. 서비스 계층에서 변경 없는 성공으로 처리됩니다."""
    code = "CONDICIONAL_ALREADY_FINISHED"

    def __init__(self, consignment_id: int):
        super().__init__("Consignment has already been finished; nothing to convert", consignment_id=consignment_id)
        self.consignment_id = consignment_id


class InvalidReturnQuantityError(ConflictError):
    code = "INVALID_RETURN_QUANTITY"

    def __init__(self, requested: int, held: int):
        super().__init__(
            f"Quantity to return ({requested}) is greater than the quantity in the consignment ({held})",
            requested=requested,
            held=held,
        )
        self.requested = requested
        self.held = held


class InvalidSaleQuantityError(ConflictError):
    code = "INVALID_QUANTITY"

    def __init__(self, item_name: str, requested: int, available: int):
        super().__init__(
            f"Requested quantity ({requested}) for {item_name} exceeds the quantity "
            f"available in the consignment ({available})",
            item_name=item_name,
            requested=requested,
            available=available,
        )
        self.item_name = item_name
        self.requested = requested
        self.available = available


class NoItemsToFinalizeError(ConflictError):
    code = "NO_ITEMS_TO_FINALIZE"

    def __init__(
        self, consignment_id: int, message: str = "Consignment has no items to finalize or has already been finalized"
    ):
        super().__init__(message, consignment_id=consignment_id)
        self.consignment_id = consignment_id


# =============================================================================
# 3. 입력 검증 (VALIDATION)
# =============================================================================
class ValidationError(AppError):
    category = ErrorCategory.VALIDATION

    def __init__(self, code: str, message: str, **details: Any):
        super().__init__(message, **details)
        self.code = code


class InvalidDiscountError(ValidationError):
    def __init__(self, discount: Decimal, total: Decimal):
        super().__init__(
            "INVALID_DISCOUNT",
            f"Discount ({discount}) cannot be greater than the sale total ({total})",
            discount=discount,
            total=total,
        )
