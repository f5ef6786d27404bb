"""
services/grade_migration.py

예전 버전 화면에서 저장된 성적 데이터를 정규 GradeRecord 형태로 변환.
저장소에서 읽을 때 / JSON 가져오기 때 한 번만 실행하고, 엔진은 형태 분기를 하지 않는다.

지원하는 변형:
- courseName → name, gradePoint → grade
- semester 단일 라벨 ("Year 2 1st Semester", "Year 2 - 1st Semester", "Fall 2023")
  → year + session
"""

import re
from typing import Any, Dict, Iterable, List

from schemas.grades import GradeRecord

_FIELD_ALIASES = {
    "courseName": "name",
    "course_name": "name",
    "gradePoint": "grade",
    "grade_point": "grade",
}

_YEAR_PREFIX = re.compile(r"^\s*(?P<year>year\s*\d+)\s*[-,/|]?\s*(?P<session>.*?)\s*$", re.IGNORECASE)
# "Fall 2023" 처럼 학기 단어 + 4자리 연도
_TERM_YEAR = re.compile(r"^\s*(?P<session>[A-Za-z][A-Za-z ]*?)\s+(?P<year>\d{4})\s*$")


def split_semester_label(label: str):
    """
    'Year 2 - 1st Semester' → ('Year 2', '1st Semester'), 'Fall 2023' → ('2023', 'Fall').
    둘 다 아니면 라벨 전체가 year
    """
    for pattern in (_YEAR_PREFIX, _TERM_YEAR):
        match = pattern.match(label or "")
        if match:
            return match.group("year"), match.group("session")
    return (label or "").strip(), ""


def migrate_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(raw)
    for legacy, canonical in _FIELD_ALIASES.items():
        if legacy in data and canonical not in data:
            data[canonical] = data.pop(legacy)

    if "semester" in data and not (data.get("year") or data.get("session")):
        data["year"], data["session"] = split_semester_label(str(data.pop("semester")))
    return data


def migrate_records(raw_records: Iterable[Dict[str, Any]]) -> List[GradeRecord]:
    """변환 + 검증. 하나라도 실패하면 pydantic.ValidationError 전파"""
    return [GradeRecord.model_validate(migrate_record(r)) for r in raw_records]
