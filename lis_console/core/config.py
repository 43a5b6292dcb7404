# lis_console/core/config.py

import logging
import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    콘솔 코어의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일
        env_file_encoding='utf-8',
        extra='ignore',                      # 모델에 없는 변수는 무시
        case_sensitive=True                  # 환경 변수 이름 대소문자 구분
    )

    # --- 애플리케이션 기본 설정 ---
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    DEBUG_MODE: bool = Field(False, description="Enable debug logging")
    LOG_LEVEL: str = Field("INFO", description="Root log level when debug mode is off")

    # --- REST API 엔드포인트 설정 ---
    API_BASE_URL: str = Field("http://localhost:8000/api/v1", description="Base URL of the REST API")
    PATIENTS_ENDPOINT: str = Field("/patients", description="Patients collection path")
    USERS_ENDPOINT: str = Field("/users", description="Users collection path")
    INSTRUMENTS_ENDPOINT: str = Field("/instruments", description="Instruments collection path")
    EVENTS_ENDPOINT: str = Field("/events", description="Event log collection path")

    # --- 감사(audit) 이벤트 설정 ---
    AUDIT_ENABLED: bool = Field(True, description="Report successful mutations to the event log")
    DEFAULT_ACTOR: str = Field("system", description="Actor name reported when none is given")

    # --- 화면(뷰) 설정 ---
    PAGE_SIZE: int = Field(5, ge=1, description="Default page size (patients screen)")
    USERS_PAGE_SIZE: int = Field(10, ge=1, description="Users screen page size")
    INSTRUMENTS_PAGE_SIZE: int = Field(10, ge=1, description="Instruments screen page size")
    OUTCOME_DISMISS_MS: int = Field(2000, ge=0, description="Auto-dismiss delay of a success outcome")
    MENU_OUTSIDE_CLICK_DELAY_MS: int = Field(100, ge=0, description="Delay before outside clicks may close a menu")
    MENU_ACTION_CLOSE_DELAY_MS: int = Field(100, ge=0, description="Delay before a menu closes after an action")


settings = Settings()


def configure_logging() -> None:
    """
    루트 로거를 설정합니다. DEBUG_MODE가 켜져 있으면 DEBUG 레벨을 사용합니다.
    CLI 등 실행 진입점에서 한 번만 호출합니다.
    """
    level = logging.DEBUG if settings.DEBUG_MODE else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
