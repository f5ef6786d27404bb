import sys
from pathlib import Path

from database.db import Base, SessionLocal, engine
from models import app_state  # noqa: F401
from services import grade_io
from services.store import StateStore
from utils.errors import GradeImportError

CSV_PATH = "data/grades.csv"  # ✅ 기본 파일 경로 (내보내기 CSV 또는 JSON)

def migrate_grades(path: str = CSV_PATH):
    text = Path(path).read_text(encoding="utf-8-sig")
    if path.lower().endswith(".json"):
        grades = grade_io.import_json(text)
    else:
        grades = grade_io.import_csv(text)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        StateStore(db).save_grades(grades)
    finally:
        db.close()
    print(f"✅ 성적 {len(grades)}건 → 상태 저장소 반영 완료")

if __name__ == "__main__":
    try:
        migrate_grades(sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
    except GradeImportError as e:
        print(f"❌ 가져오기 실패: {e.message}")
        sys.exit(1)
