# app/domains/cnd/__init__.py

"""
FastAPI 애플리케이션의 'cnd' 도메인 패키지입니다.

'cnd' 도메인은 조건부 대여(condicional)의 전체 수명 주기를 관리합니다.
고객에게 재고 품목을 일정 기간 대여하고, 부분/전체 반납, 종료(finalize),
삭제, 판매 전환을 처리하면서 모든 전이에서 재고 수량의 일관성을 유지합니다.

주요 서브모듈:
- `models.py`: consignments, consignment_items 테이블에 매핑되는 SQLModel 정의.
- `schemas.py`: 요청/응답 Pydantic 모델과 공통 응답 봉투(ServiceResponse).
- `crud.py`: 트랜잭션 단위의 수명 주기 연산 (생성, 반납, 종료, 삭제, 판매 전환).
- `reports.py`: 진행 중/반납 완료 보고서와 통계 (조회 시점에 계산).
- `services.py`: 입력 검증, 예외 분류, 응답 봉투 생성.
- `routers.py`: FastAPI API 엔드포인트 정의 (응답 코드 → HTTP 상태 코드 매핑).
"""

__title__ = "Dressfy Consignment Domain"
__description__ = "Consignment lifecycle engine with stock reconciliation and reporting."
__version__ = "0.1.0"
__all__ = []
