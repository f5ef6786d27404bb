"""
AI 도구 라우터
- predict-gpa: 예상 GPA는 gpa_engine에서 계산, LLM은 설명 문장만 생성
  (코멘트 실패 시에도 숫자는 그대로 반환)
- suggest-sessions: 강의 노트 → 학습 세션 목록(JSON)
"""

import logging

from fastapi import APIRouter, Depends

from config.settings import settings
from dependencies.llm import get_assistant
from schemas.ai_schemas import PredictGpaRequest, PredictGpaResponse, SuggestSessionsRequest
from schemas.grades import get_scale
from services import gpa_engine
from services.llm_service import StudyAssistant
from utils.errors import LLMServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["AI 도구"])


@router.post("/predict-gpa")
async def predict_gpa(req: PredictGpaRequest, assistant: StudyAssistant = Depends(get_assistant)):
    scale = get_scale(settings.GRADE_SCALE)
    predicted = gpa_engine.predict_gpa(req.current_gpa, req.total_credits, req.courses, scale)
    result = PredictGpaResponse(predicted_gpa=round(predicted, 2), max_point=scale.max_point)

    if req.with_commentary and req.courses:
        try:
            result.commentary = await assistant.explain_prediction(
                req.current_gpa, req.total_credits, req.courses, predicted, scale
            )
        except LLMServiceError as e:
            logger.warning("Prediction commentary skipped: %s", e.message)
            result.commentary_error = e.message

    return {"success": True, "data": result.model_dump()}


@router.post("/suggest-sessions")
async def suggest_sessions(req: SuggestSessionsRequest, assistant: StudyAssistant = Depends(get_assistant)):
    result = await assistant.suggest_study_sessions(req.notes)
    return {"success": True, "data": result.model_dump()}
