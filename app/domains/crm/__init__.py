# app/domains/crm/__init__.py

"""
FastAPI 애플리케이션의 'crm' 도메인 패키지입니다.

'crm' 도메인은 매장 고객(Client) 정보를 관리합니다.
조건부 대여(cnd) 생성 시 고객 존재 여부 확인과, 판매(sls) 기록 시
고객 이름/연락처 조회에 사용됩니다.

주요 서브모듈:
- `models.py`: clients 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 고객 데이터에 대한 Pydantic 모델 (요청 및 응답 유효성 검사).
- `crud.py`: clients 테이블에 대한 비동기 CRUD 로직.
"""

__title__ = "Dressfy Client Domain"
__description__ = "Manages store clients referenced by consignments and sales."
__version__ = "0.1.0"
__all__ = []
