"""
services/planner.py

할 일 / 수업 시간표 / 학습 세션 / 온보딩 프로필
- 모두 저장소의 JSON 배열에 대한 단순 추가/삭제
- 정렬 규칙
  · 할 일: 우선순위(urgent → intermediate → later) 후 마감일
  · 시간표: 요일별 그룹, 각 요일 안에서 시각순
  · 학습 세션: 날짜+시각순
"""

from datetime import datetime
from typing import Dict, List, Optional

from schemas.planner import (
    ClassCreate, ClassEntry, ProfileStep, StudySession, StudySessionCreate,
    Task, TaskCreate, UserProfile,
)
from services.grade_service import new_id
from services.store import StateStore
from utils.errors import NotFoundError

PRIORITY_ORDER = {"urgent": 1, "intermediate": 2, "later": 3}
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]


def _without(items, item_id, what: str):
    remaining = [i for i in items if str(i.id) != str(item_id)]
    if len(remaining) == len(items):
        raise NotFoundError(f"{what} not found")
    return remaining


# ==========================================================
# [할 일]
# ==========================================================
def sort_tasks(tasks: List[Task]) -> List[Task]:
    return sorted(tasks, key=lambda t: (PRIORITY_ORDER[t.priority], t.due_date.timestamp()))


def time_remaining(due_date: datetime, now: Optional[datetime] = None) -> str:
    """마감까지 남은 시간 ("Countdown: 1d 2h 5m"). 지났으면 OVERDUE, 1분 미만이면 Due Soon!"""
    now = now or datetime.now(due_date.tzinfo)
    left = (due_date - now).total_seconds()
    if left <= 0:
        return "OVERDUE"

    days, rest = divmod(int(left), 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60
    parts = [f"{n}{unit}" for n, unit in ((days, "d"), (hours, "h"), (minutes, "m")) if n > 0]
    if not parts:
        return "Due Soon!"
    return "Countdown: " + " ".join(parts)


def add_task(store: StateStore, form: TaskCreate) -> Task:
    tasks = store.load_tasks()
    task = Task(id=new_id(tasks), **form.model_dump())
    tasks.append(task)
    store.save_tasks(tasks)
    return task


def remove_task(store: StateStore, task_id) -> None:
    store.save_tasks(_without(store.load_tasks(), task_id, "Task"))


def toggle_task(store: StateStore, task_id) -> Task:
    tasks = store.load_tasks()
    for task in tasks:
        if str(task.id) == str(task_id):
            task.is_completed = not task.is_completed
            store.save_tasks(tasks)
            return task
    raise NotFoundError("Task not found")


# ==========================================================
# [수업 시간표]
# ==========================================================
def to_24h(hour: int, minute: int, period: str) -> str:
    if period == "PM" and hour != 12:
        hour += 12
    if period == "AM" and hour == 12:
        hour = 0
    return f"{hour:02d}:{minute:02d}"


def add_class(store: StateStore, form: ClassCreate) -> ClassEntry:
    classes = store.load_classes()
    entry = ClassEntry(
        id=new_id(classes),
        name=form.name,
        day=form.day,
        time=to_24h(form.hour, form.minute, form.period),
        location=form.location or "N/A",
    )
    classes.append(entry)
    store.save_classes(classes)
    return entry


def remove_class(store: StateStore, class_id) -> None:
    store.save_classes(_without(store.load_classes(), class_id, "Class"))


def weekly_schedule(classes: List[ClassEntry]) -> Dict[str, List[ClassEntry]]:
    grouped = {day: [] for day in WEEKDAYS}
    for entry in classes:
        grouped[entry.day].append(entry)
    for day in grouped:
        grouped[day].sort(key=lambda c: c.time)
    return grouped


# ==========================================================
# [학습 세션]
# ==========================================================
def sort_sessions(sessions: List[StudySession]) -> List[StudySession]:
    return sorted(sessions, key=lambda s: (s.date, s.time))


def add_study_session(store: StateStore, form: StudySessionCreate) -> StudySession:
    sessions = store.load_study_sessions()
    session = StudySession(
        id=new_id(sessions),
        topic=form.topic,
        date=form.starts_at.strftime("%Y-%m-%d"),
        time=form.starts_at.strftime("%H:%M"),
        notes=form.notes or "",
    )
    sessions.append(session)
    store.save_study_sessions(sort_sessions(sessions))
    return session


def remove_study_session(store: StateStore, session_id) -> None:
    store.save_study_sessions(_without(store.load_study_sessions(), session_id, "Study session"))


# ==========================================================
# [온보딩]
# ==========================================================
def validate_profile_step(step: ProfileStep) -> List[str]:
    """한 단계(필드 하나)만 검증. 오류 메시지 목록 반환 (비어 있으면 통과)"""
    field_info = UserProfile.model_fields[step.field]
    min_length = next((m.min_length for m in field_info.metadata if hasattr(m, "min_length")), 0)
    if len(step.value.strip()) < min_length:
        return [f"{step.field} must be at least {min_length} characters"]
    return []


def complete_onboarding(store: StateStore, profile: UserProfile) -> UserProfile:
    store.save_user(profile)
    return profile
