from pydantic import BaseModel, Field
from typing import List, Optional


# 예상 GPA 관련 스키마
class ExpectedCourse(BaseModel):
    name: str = Field(..., min_length=1, description="수강 중인 과목명")
    expected_grade: float = Field(..., ge=0, description="예상 평점")
    credits: float = Field(..., ge=0, description="학점 수")


class PredictGpaRequest(BaseModel):
    current_gpa: float = Field(..., ge=0, description="현재 CGPA")
    total_credits: float = Field(..., ge=0, description="지금까지 이수한 학점")
    courses: List[ExpectedCourse] = Field(..., description="이번 학기 과목별 예상 평점")
    with_commentary: bool = Field(True, description="LLM 코멘트 생성 여부")


class PredictGpaResponse(BaseModel):
    predicted_gpa: float
    max_point: float
    commentary: Optional[str] = None
    commentary_error: Optional[str] = None


# 학습 세션 추천 관련 스키마
class SuggestSessionsRequest(BaseModel):
    notes: str = Field(..., min_length=1, description="강의 노트 또는 챕터 요약")


class SuggestedSessions(BaseModel):
    """LLM JSON 응답 형식: {"sessions": ["...", ...]}"""
    sessions: List[str] = Field(default_factory=list)
