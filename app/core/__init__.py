# app/core/__init__.py

"""
FastAPI 애플리케이션의 핵심 구성 요소 패키지입니다.

주요 서브모듈은 다음과 같습니다:

- `config.py`: 애플리케이션의 설정 및 환경 변수 관리 (Pydantic Settings).
- `database.py`: 데이터베이스 연결, 세션 관리, 트랜잭션(atomic) 블록 (SQLModel 및 AsyncSQLAlchemy).
- `crud_base.py`: 공통 CRUD 기본 클래스와 기간 필터 헬퍼.
- `exceptions.py`: 응답 코드와 분류를 가진 비즈니스 예외 계층.
- `responses.py`: 서비스 응답 봉투를 HTTP 응답으로 변환.
- `dependencies.py`: FastAPI의 의존성 주입 시스템에서 사용될 공통 의존성 함수들.
"""

__title__ = "Dressfy Core"
__description__ = "Core components for the Dressfy FastAPI application."
__version__ = "0.1.0"
__all__ = []
