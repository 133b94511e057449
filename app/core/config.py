# app/core/config.py

from typing import Any
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일을 명시적으로 지정
        env_file_encoding='utf-8',           # .env 파일 인코딩
        extra='ignore',                      # .env 파일에 정의되었지만 모델에 없는 변수는 무시
        case_sensitive=True                  # 환경 변수 이름 대소문자 구분
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "Dressfy Consignment API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Clothing retail API: stock items, clients, sales and consignments (condicionais)"
    # 애플리케이션 환경 (예: "development", "production", "testing")
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    # 디버그 모드 활성화 여부
    DEBUG_MODE: bool = Field(False, description="Enable debug mode for detailed logging and SQL echo")
    LOG_LEVEL: str = Field("INFO", description="Root logging level (DEBUG, INFO, WARNING, ...)")

    # --- 데이터베이스 설정 ---
    # 운영 환경에서는 postgresql+asyncpg URL을 .env로 지정합니다.
    DATABASE_URL: SecretStr = Field(
        SecretStr("sqlite+aiosqlite:///" + os.path.join(BASE_DIR, "dressfy.db")),
        description="Async SQLAlchemy database connection URL"
    )

    # --- 조건부 대여(condicional) 설정 ---
    CONSIGNMENT_DUE_SOON_DAYS: int = Field(7, description="Days ahead counted as 'due soon' in the active report")
    DEFAULT_PAGE_LIMIT: int = Field(10, description="Default page size for consignment listings")
    MAX_PAGE_LIMIT: int = Field(100, description="Maximum page size for consignment listings")

    # Post-initialization validation (Pydantic v2 BaseSettings)
    def model_post_init(self, __context: Any) -> None:  # noqa: ANN001
        # 로그 레벨은 대문자로 정규화합니다.
        self.LOG_LEVEL = self.LOG_LEVEL.upper()
        if self.DEBUG_MODE and self.LOG_LEVEL == "INFO":
            self.LOG_LEVEL = "DEBUG"


settings = Settings()
