from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

TaskPriority = Literal["urgent", "intermediate", "later"]
Weekday = Literal["Mon", "Tue", "Wed", "Thu", "Fri"]
Screen = Literal["dashboard", "performance", "ai-tools"]


# ✅ 할 일
class TaskCreate(BaseModel):
    title: str = Field(..., min_length=3, description="할 일 제목")
    priority: TaskPriority = Field(..., description="urgent / intermediate / later")
    due_date: datetime = Field(..., description="마감 일시 (ISO 8601)")

class Task(TaskCreate):
    id: Union[int, str]
    is_completed: bool = False

    model_config = ConfigDict(extra="ignore")


# ✅ 수업 시간표 (입력은 12시간제)
class ClassCreate(BaseModel):
    name: str = Field(..., min_length=2, description="과목명")
    day: Weekday = Field(..., description="요일 (Mon~Fri)")
    hour: int = Field(..., ge=1, le=12, description="시 (1~12)")
    minute: int = Field(..., ge=0, le=59, description="분")
    period: Literal["AM", "PM"] = Field(..., description="오전/오후")
    location: Optional[str] = Field(default=None, description="강의실")

class ClassEntry(BaseModel):
    id: Union[int, str]
    name: str
    day: Weekday
    time: str                                # "HH:MM" 24시간제
    location: str = "N/A"

    model_config = ConfigDict(extra="ignore")


# ✅ 개인 학습 세션
class StudySessionCreate(BaseModel):
    topic: str = Field(..., min_length=3, description="학습 주제")
    starts_at: datetime = Field(..., alias="datetime", description="시작 일시 (ISO 8601, 예: 2026-10-21T19:30)")
    notes: Optional[str] = Field(default="", description="메모")

class StudySession(BaseModel):
    id: Union[int, str]
    topic: str
    date: str
    time: str
    notes: str = ""

    model_config = ConfigDict(extra="ignore")


# ✅ 온보딩 프로필
class UserProfile(BaseModel):
    name: str = Field(..., min_length=2, description="이름")
    university: str = Field(..., min_length=3, description="대학교")
    faculty: str = Field(..., min_length=2, description="단과대학")
    department: str = Field(..., min_length=2, description="학과")
    year: str = Field(..., min_length=1, description="학년")

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

class ProfileStep(BaseModel):
    field: Literal["name", "university", "faculty", "department", "year"]
    value: str = ""

class ScreenUpdate(BaseModel):
    screen: Screen
