# tests/__init__.py

"""
Dressfy 조건부 대여 API의 테스트 스위트 패키지입니다.

- `conftest.py`: 테스트마다 새로 만드는 인메모리 SQLite DB, 비동기 세션, HTTP 클라이언트,
                 고객/품목 픽스처를 정의합니다.
- `test_main.py`: 루트와 헬스 체크 엔드포인트 테스트.
- `domains/`: 도메인별 테스트 (inv: 품목 해석/재고/상태, cnd: 조건부 대여 수명 주기/보고서).
"""

__title__ = "Dressfy Consignment API Tests"
__version__ = "0.1.0"
__all__ = []
