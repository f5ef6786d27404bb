# services/llm_service.py

import logging
from typing import Any, List, Optional, Sequence

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError

from config.settings import settings
from schemas.ai_schemas import ExpectedCourse, SuggestedSessions
from schemas.grades import GradingScale
from utils.errors import LLMNotConfigured, LLMServiceError

logger = logging.getLogger(__name__)

NO_KEY_MESSAGE = "To use the AI features, please add your Gemini API key in the settings."
GENERIC_MESSAGE = "An unexpected AI error occurred. Please try again."


# 생성자 함수: 키가 없으면 None 반환 (AI 기능만 비활성화)
def get_llm(api_key: Optional[str] = None) -> Optional[ChatGoogleGenerativeAI]:
    api_key = api_key or settings.GEMINI_API_KEY
    if not api_key:
        return None
    return ChatGoogleGenerativeAI(
        model=settings.GEMINI_MODEL,
        google_api_key=api_key,
        temperature=settings.LLM_TEMPERATURE,
        max_output_tokens=settings.LLM_MAX_TOKENS,
        timeout=settings.LLM_TIMEOUT,
        max_retries=0,
    )


def _text_of(response: Any) -> str:
    content = getattr(response, "content", None) or getattr(response, "text", "")
    # 라이브러리 버전에 따라 content가 part 리스트로 올 수 있음
    if isinstance(content, list):
        content = "".join(p.get("text", "") if isinstance(p, dict) else str(p) for p in content)
    return content or ""


def _strip_fences(text: str) -> str:
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        text = text.rsplit("```", 1)[0]
    return text.strip()


class StudyAssistant:
    """Gemini 기반 학습 도우미. 요청당 한 번 호출, 재시도 없음"""

    def __init__(self, model=None):
        self.model = model

    async def _ask(self, system_prompt: str, user_prompt: str) -> str:
        if self.model is None:
            raise LLMNotConfigured(NO_KEY_MESSAGE)
        try:
            response = await self.model.ainvoke([
                SystemMessage(content=system_prompt),
                HumanMessage(content=user_prompt),
            ])
        except Exception as e:
            logger.error("Gemini request failed: %s", e)
            raise LLMServiceError(GENERIC_MESSAGE) from e
        return _text_of(response)

    # ==========================================================
    # [학습 세션 추천] → {"sessions": [...]}
    # ==========================================================
    async def suggest_study_sessions(self, text: str) -> SuggestedSessions:
        system_prompt = (
            "You are an AI study assistant. Given the following text, generate a list of "
            "study sessions that would be helpful for a student. Each session should be "
            "concise and actionable. Return ONLY valid JSON of the form "
            '{"sessions": ["Review key concepts from chapter 3", "Practice problems on sections 3.1-3.3"]}'
        )
        raw = await self._ask(system_prompt, f"Text: {text}")
        try:
            result = SuggestedSessions.model_validate_json(_strip_fences(raw))
        except ValidationError as e:
            logger.error("Gemini returned unparsable sessions JSON: %s", e)
            raise LLMServiceError("Failed to generate study sessions.") from e
        return SuggestedSessions(sessions=[s.strip() for s in result.sessions if s.strip()])

    # ==========================================================
    # [예상 GPA 코멘트] 숫자는 gpa_engine.predict_gpa 결과를 그대로 사용
    # ==========================================================
    async def explain_prediction(
        self,
        current_gpa: float,
        total_credits: float,
        courses: Sequence[ExpectedCourse],
        predicted_gpa: float,
        scale: GradingScale,
    ) -> str:
        course_lines: List[str] = [
            f"- Course: {c.name}, Expected Grade: {c.expected_grade}, Credits: {c.credits}"
            for c in courses
        ]
        system_prompt = (
            "You are a helpful academic advisor. The predicted GPA below is already calculated; "
            "do not recalculate or change it. In two or three sentences, explain what it means "
            "for the student and suggest where to focus."
        )
        user_prompt = "\n".join([
            f"The GPA scale is {scale.max_point:.1f}.",
            f"Current GPA: {current_gpa}",
            f"Total Credits: {total_credits}",
            "Courses:",
            *course_lines,
            f"Predicted GPA: {predicted_gpa:.2f}",
        ])
        return (await self._ask(system_prompt, user_prompt)).strip()

