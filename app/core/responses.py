# app/core/responses.py

"""
서비스 응답 봉투를 HTTP 응답으로 변환하는 모듈입니다.

라우터는 비즈니스 로직 없이 봉투의 분류(category)를 HTTP 상태 코드로만 매핑합니다.
- not_found → 404, conflict → 409, validation → 400, 그 외 실패 → 500
- 성공 → 200 (생성은 201)
"""

from typing import Any, Dict

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

STATUS_BY_CATEGORY: Dict[str, int] = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "conflict": status.HTTP_409_CONFLICT,
    "validation": status.HTTP_400_BAD_REQUEST,
}


def envelope_response(result: Any, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """ServiceResponse를 JSONResponse로 변환합니다. code/data가 없으면 본문에서 생략합니다."""
    if result.success:
        status_code = success_status
    else:
        status_code = STATUS_BY_CATEGORY.get(result.category, status.HTTP_500_INTERNAL_SERVER_ERROR)

    content: Dict[str, Any] = {"success": result.success, "message": result.message}
    if result.code is not None:
        content["code"] = result.code
    if result.data is not None:
        content["data"] = jsonable_encoder(result.data)
    return JSONResponse(status_code=status_code, content=content)
