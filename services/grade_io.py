"""
services/grade_io.py

성적 내보내기(CSV) / 가져오기(JSON, CSV)
- CSV 헤더: id,name,grade,credits,year,session
- 문자열 필드는 큰따옴표로 감싸고 내부 따옴표는 두 번 ("") 반복
- 가져오기는 전부 성공 아니면 전부 실패 (부분 반영 없음)
"""

import csv
import io
import json
import logging
from typing import List

from pydantic import ValidationError

from schemas.grades import GradeRecord
from services.grade_migration import migrate_records
from utils.errors import GradeImportError, NoGradesToExport

logger = logging.getLogger(__name__)

CSV_HEADERS = ["id", "name", "grade", "credits", "year", "session"]
REQUIRED_IMPORT_KEYS = ("id", "name", "grade")
EXPORT_FILENAME = "studentsavvy_grades.csv"


def _csv_cell(value) -> str:
    if isinstance(value, str):
        return '"' + value.replace('"', '""') + '"'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def export_csv(grades: List[GradeRecord]) -> str:
    if not grades:
        raise NoGradesToExport("Add some grades before exporting.")

    lines = [",".join(CSV_HEADERS)]
    for g in grades:
        row = g.model_dump()
        lines.append(",".join(_csv_cell(row[h]) for h in CSV_HEADERS))
    return "\n".join(lines)


def import_json(text: str) -> List[GradeRecord]:
    """JSON 배열의 모든 원소가 id/name/grade 키를 가진 객체여야 함"""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        logger.info("Grade import rejected: malformed JSON (%s)", e)
        raise GradeImportError("The selected file is not a valid grade export. Please try again.")

    return import_records(data)


def import_records(data) -> List[GradeRecord]:
    if not isinstance(data, list) or not all(
        isinstance(item, dict) and all(k in item for k in REQUIRED_IMPORT_KEYS) for item in data
    ):
        logger.info("Grade import rejected: expected a list of objects with %s", REQUIRED_IMPORT_KEYS)
        raise GradeImportError("The selected file is not a valid grade export. Please try again.")

    try:
        return migrate_records(data)
    except ValidationError as e:
        logger.info("Grade import rejected: %s", e)
        raise GradeImportError("The selected file is not a valid grade export. Please try again.")


def import_csv(text: str) -> List[GradeRecord]:
    """내보낸 CSV를 다시 읽기 (스크립트용)"""
    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames is None or not set(REQUIRED_IMPORT_KEYS) <= set(reader.fieldnames):
        raise GradeImportError("CSV header must contain id, name and grade.")

    rows = []
    for row in reader:
        raw_id = row.get("id", "")
        row["id"] = int(raw_id) if raw_id.isdigit() else raw_id
        rows.append({k: v for k, v in row.items() if v not in (None, "") or k in ("year", "session")})
    return import_records(rows)
