from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings
from database.db import Base, engine

# ✅ 로그 레벨은 .env의 LOG_LEVEL 기준
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# HTTP 라이브러리 디버그 로그 비활성화
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import (
    grades,     # 성적 / GPA 추이
    planner,    # 할 일, 시간표, 학습 세션
    profile,    # 온보딩 프로필, 화면 상태, 설정
    ai,         # Gemini 기반 AI 도구
)

# ✅ 테이블 모델 등록 (create_all 대상)
from models import app_state  # noqa: F401

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS 설정 (프론트엔드 연동)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /v1 프리픽스 라우터 등록
app.include_router(grades.router,   prefix="/v1")
app.include_router(planner.router,  prefix="/v1")
app.include_router(profile.router,  prefix="/v1")
app.include_router(ai.router,       prefix="/v1")


# ✅ 헬스체크 엔드포인트
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


@app.on_event("startup")
def _create_tables():
    Base.metadata.create_all(bind=engine)


# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": "StudentSavvy API - GPA tracker & study planner"}
