# app/domains/sls/__init__.py

"""
FastAPI 애플리케이션의 'sls' 도메인 패키지입니다.

'sls' 도메인은 판매(Sale)와 판매 품목(SaleItem)을 기록합니다.
조건부 대여(cnd)를 판매로 전환할 때 판매 생성 협력자(Sale Creation Collaborator)로 사용되며,
판매 기록은 재고 수량을 변경하지 않습니다 (재고는 대여 시점에 이미 차감되어 있습니다).

주요 서브모듈:
- `models.py`: sales, sale_items 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 판매 데이터에 대한 Pydantic 모델 및 결제 수단 정의.
- `crud.py`: 판매와 판매 품목을 호출자의 트랜잭션 안에서 저장하는 로직.
"""

__title__ = "Dressfy Sales Domain"
__description__ = "Records sales created from consignments."
__version__ = "0.1.0"
__all__ = []
