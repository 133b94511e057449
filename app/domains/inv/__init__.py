# app/domains/inv/__init__.py

"""
FastAPI 애플리케이션의 'inv' 도메인 패키지입니다.

'inv' 도메인은 판매 가능한 의류 품목(Item)과 그 재고 수량, 품목 상태 및
상태 변경 이력(ItemStatusHistory)을 관리합니다. 조건부 대여(cnd) 엔진이 사용하는
재고 저장소(Stock Store)와 품목 식별자 해석기(Item Resolver)를 포함합니다.

주요 서브모듈:
- `models.py`: items, item_status_history 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 품목 데이터에 대한 Pydantic 모델 (요청 및 응답 유효성 검사).
- `crud.py`: 품목 조회, 이름 기반 해석, 재고 증감, 상태 변경 로직.
- `routers.py`: 품목 상태 변경을 위한 FastAPI API 엔드포인트 정의.
"""

__title__ = "Dressfy Inventory Domain"
__description__ = "Manages clothing items, stock quantities and item status history."
__version__ = "0.1.0"
__all__ = []
