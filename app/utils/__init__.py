# app/utils/__init__.py

"""
FastAPI 애플리케이션의 'utils' 패키지입니다.

이 패키지는 특정 비즈니스 도메인에 속하지 않는,
프로젝트 전반에서 재사용될 수 있는 범용 유틸리티 함수들을 포함합니다.

주요 서브모듈:
- `formatters.py`: 날짜(UTC 정규화, 남은 일수)와 금액(소수점 반올림) 형식 변환 유틸리티.
"""

# flake8: noqa
from . import formatters

# 패키지 메타데이터
__title__ = "Dressfy Application Utilities"
__description__ = "Provides common, reusable utility functions for the application."
__version__ = "0.1.0"
__all__ = ["formatters"]
