import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from schemas.common import ErrorResponse
from utils.errors import AppError

logger = logging.getLogger(__name__)


def add_error_handlers(app: FastAPI):
    # 서비스 계층 예외 → 상태코드/코드는 예외 클래스에 정의된 값 사용
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=ErrorResponse.of(exc.code, exc.message))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=ErrorResponse.of("INTERNAL_ERROR", str(exc)))
