# tests/domains/__init__.py

"""
도메인별 테스트 모듈 패키지입니다.

- `test_inv_n.py`: 'inv' 도메인 (품목 해석, 재고 증감, 상태 일괄 변경)
- `test_cnd_n.py`: 'cnd' 도메인 (조건부 대여 생성부터 판매 전환까지, 보고서/통계)
"""

__all__ = []
