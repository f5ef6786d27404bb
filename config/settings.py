"""
config/settings.py

- .env에 정의한 환경변수를 읽어 애플리케이션 전역 설정으로 제공합니다.
- pydantic v2 / pydantic-settings v2 사용.
- 학점 척도(GRADE_SCALE)와 학점 수 검증 정책(CREDIT_POLICY)은 코드에 하드코딩하지 않고
  여기서만 결정합니다.
"""

from typing import List, Optional, Literal
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # =========================
    # 앱/런타임
    # =========================
    ENV: Literal["dev", "stage", "prod"] = "dev"
    APP_TITLE: str = "StudentSavvy API"
    APP_DESCRIPTION: str = "Student dashboard backend: GPA tracking, planner and AI study tools"
    APP_VERSION: str = "1.0.0"

    # =========================
    # CORS
    # =========================
    # 콤마(,)로 구분된 문자열 → List[str] 로 파싱
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _split_origins(cls, v):
        if isinstance(v, str):
            # "a,b , c" → ["a","b","c"]
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    # =========================
    # Database (key/value 상태 저장소)
    # =========================
    # 로컬 개발은 sqlite 파일 하나로 충분. 운영에서는 mysql+pymysql://... 로 교체 가능
    DATABASE_URL: str = "sqlite:///./studentsavvy.db"

    # =========================
    # LLM (Gemini only)
    # =========================
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_API_KEY: Optional[str] = None  # 없으면 AI 기능만 비활성화
    LLM_TIMEOUT: int = 25
    LLM_TEMPERATURE: float = 0.2
    LLM_MAX_TOKENS: int = 1024

    # =========================
    # 성적 계산
    # =========================
    GRADE_SCALE: Literal[5, 4] = 5
    # reject_nonpositive: 입력 단계에서 0.5 미만 학점 거부 / accept: 그대로 엔진까지 전달
    CREDIT_POLICY: Literal["reject_nonpositive", "accept"] = "reject_nonpositive"

    # =========================
    # Logging / Misc
    # =========================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    MAX_IMPORT_KB: int = 512

    # =========================
    # BaseSettings Config
    # =========================
    model_config = SettingsConfigDict(
        env_file=".env",               # .env에서 값 로드
        env_file_encoding="utf-8",
        case_sensitive=False,          # 환경변수 대소문자 비구분
        extra="ignore",                # 정의되지 않은 키는 무시
    )


# ✅ settings 객체를 통해 어디서든 접근 가능
settings = Settings()
