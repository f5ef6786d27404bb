"""
services/store.py

브라우저 localStorage를 대신하는 key/value 상태 저장소.
- 값은 JSON 문자열로 app_state 테이블에 저장
- 라우터는 dependencies.store.get_store 로 주입받고, 엔진은 이 클래스를 모른다
- 읽기 시 성적 레코드는 grade_migration 을 한 번 거쳐 정규 형태로 반환
"""

import json
import logging
from typing import Any, List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from models.app_state import AppState
from schemas.grades import GradeRecord
from schemas.planner import ClassEntry, StudySession, Task, UserProfile
from services.grade_migration import migrate_records

logger = logging.getLogger(__name__)

# ✅ 저장 키 (원래 localStorage 키 이름 유지)
GRADES_KEY = "grades"
TASKS_KEY = "tasks"
CLASSES_KEY = "classes"
STUDY_SESSIONS_KEY = "study_sessions"
USER_KEY = "user"
SCREEN_KEY = "activeScreen"
API_KEY_KEY = "gemini_api_key"


class StateStore:
    def __init__(self, db: Session):
        self.db = db

    # ==========================================================
    # [공통] raw load/save
    # ==========================================================
    def load(self, key: str, default: Any = None) -> Any:
        row = self.db.get(AppState, key)
        if row is None:
            return default
        try:
            return json.loads(row.value)
        except json.JSONDecodeError:
            logger.warning("Stored value for %r is not valid JSON; using default", key)
            return default

    def save(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=False, default=str)
        row = self.db.get(AppState, key)
        if row is None:
            self.db.add(AppState(key=key, value=payload))
        else:
            row.value = payload
        self.db.commit()

    def delete(self, key: str) -> None:
        row = self.db.get(AppState, key)
        if row is not None:
            self.db.delete(row)
            self.db.commit()

    def clear(self) -> None:
        self.db.query(AppState).delete()
        self.db.commit()
        logger.info("State store cleared")

    # ==========================================================
    # [성적]
    # ==========================================================
    def load_grades(self) -> List[GradeRecord]:
        raw = self.load(GRADES_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Stored grades are not a list; ignoring")
            return []
        # 행 단위 검증: 깨진 행만 버리고 나머지 성적은 유지
        grades = []
        for item in raw:
            try:
                grades.extend(migrate_records([item]))
            except (ValueError, TypeError) as e:
                logger.warning("Dropping invalid grade entry: %s", e)
        return grades

    def save_grades(self, grades: List[GradeRecord]) -> None:
        self.save(GRADES_KEY, [g.model_dump() for g in grades])

    # ==========================================================
    # [플래너]
    # ==========================================================
    def _load_list(self, key: str, model):
        items = []
        for raw in self.load(key, []) or []:
            try:
                items.append(model.model_validate(raw))
            except ValidationError as e:
                logger.warning("Dropping invalid %s entry: %s", key, e)
        return items

    def load_tasks(self) -> List[Task]:
        return self._load_list(TASKS_KEY, Task)

    def save_tasks(self, tasks: List[Task]) -> None:
        self.save(TASKS_KEY, [t.model_dump(mode="json") for t in tasks])

    def load_classes(self) -> List[ClassEntry]:
        return self._load_list(CLASSES_KEY, ClassEntry)

    def save_classes(self, classes: List[ClassEntry]) -> None:
        self.save(CLASSES_KEY, [c.model_dump() for c in classes])

    def load_study_sessions(self) -> List[StudySession]:
        return self._load_list(STUDY_SESSIONS_KEY, StudySession)

    def save_study_sessions(self, sessions: List[StudySession]) -> None:
        self.save(STUDY_SESSIONS_KEY, [s.model_dump() for s in sessions])

    # ==========================================================
    # [프로필 / 환경]
    # ==========================================================
    def load_user(self) -> Optional[UserProfile]:
        raw = self.load(USER_KEY)
        if raw is None:
            return None
        try:
            return UserProfile.model_validate(raw)
        except ValidationError as e:
            logger.warning("Stored user profile is invalid: %s", e)
            return None

    def save_user(self, user: UserProfile) -> None:
        self.save(USER_KEY, user.model_dump())

    def load_screen(self) -> str:
        screen = self.load(SCREEN_KEY, "performance")
        return screen if screen in ("dashboard", "performance", "ai-tools") else "performance"

    def save_screen(self, screen: str) -> None:
        self.save(SCREEN_KEY, screen)

    def load_api_key(self) -> Optional[str]:
        return self.load(API_KEY_KEY) or None

    def save_api_key(self, api_key: str) -> None:
        if api_key:
            self.save(API_KEY_KEY, api_key)
        else:
            self.delete(API_KEY_KEY)
