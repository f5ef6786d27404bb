"""
services/grade_service.py

성적 목록 CRUD. 레코드는 수정하지 않고 추가/삭제만 한다 (수정 = 삭제 후 재추가).
입력 검증(만점, 학점 수 정책)은 여기서 끝내고 엔진으로는 정규 레코드만 넘긴다.
"""

import logging
import time
from typing import List, Literal

from schemas.grades import GradeCreate, GradeRecord, GradingScale, SemesterGroup, SemesterKey
from services import gpa_engine
from services.store import StateStore
from utils.errors import GradeValidationError, NotFoundError

logger = logging.getLogger(__name__)

MIN_CREDITS = 0.5

CreditPolicy = Literal["reject_nonpositive", "accept"]


def new_id(existing) -> int:
    """생성 시각(ms) 기반 ID. 같은 ms에 여러 건이 들어오면 1씩 증가"""
    candidate = int(time.time() * 1000)
    taken = {item.id for item in existing}
    while candidate in taken:
        candidate += 1
    return candidate


def validate_grade_form(form: GradeCreate, scale: GradingScale, policy: CreditPolicy) -> None:
    if form.grade > scale.max_point:
        raise GradeValidationError(
            f"Grade must be between 0.0 and {scale.max_point:.1f}"
        )
    if policy == "reject_nonpositive" and form.credits < MIN_CREDITS:
        raise GradeValidationError("Credits must be a positive number")


def add_grade(store: StateStore, form: GradeCreate, scale: GradingScale, policy: CreditPolicy) -> GradeRecord:
    validate_grade_form(form, scale, policy)
    grades = store.load_grades()
    record = GradeRecord(id=new_id(grades), **form.model_dump())
    grades.append(record)
    store.save_grades(grades)
    logger.info("Grade saved: %s (%s)", record.name, record.id)
    return record


def remove_grade(store: StateStore, grade_id) -> None:
    grades = store.load_grades()
    remaining = [g for g in grades if str(g.id) != str(grade_id)]
    if len(remaining) == len(grades):
        raise NotFoundError("Grade not found")
    store.save_grades(remaining)


def remove_semester(store: StateStore, year: str, session: str) -> int:
    grades = store.load_grades()
    remaining = [g for g in grades if not (g.year == year and g.session == session)]
    removed = len(grades) - len(remaining)
    if removed == 0:
        raise NotFoundError("Semester not found")
    store.save_grades(remaining)
    return removed


def find_semester(grades: List[GradeRecord], year: str, session: str) -> SemesterGroup:
    groups = gpa_engine.group_by_semester(grades)
    group = groups.get(SemesterKey(year, session))
    if group is None:
        raise NotFoundError("Semester not found")
    return group
