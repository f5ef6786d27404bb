class AppError(Exception):
    """라우터 밖(서비스 계층)에서 발생하는 예외의 공통 부모. 전역 핸들러가 JSON 에러로 변환"""
    code = "APP_ERROR"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GradeValidationError(AppError):
    code = "INVALID_GRADE"
    status_code = 422


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = 404


class GradeImportError(AppError):
    """JSON 가져오기 실패. 기존 상태는 건드리지 않음"""
    code = "IMPORT_FAILED"
    status_code = 400


class NoGradesToExport(AppError):
    code = "NO_GRADES"
    status_code = 400


class LLMServiceError(AppError):
    """Gemini 호출 실패 (재시도 없음)"""
    code = "LLM_ERROR"
    status_code = 502


class LLMNotConfigured(LLMServiceError):
    code = "LLM_NOT_CONFIGURED"
    status_code = 503
