from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from config.settings import settings
from dependencies.store import get_store
from schemas.grades import GradeCreate, SemesterKey, get_scale
from services import gpa_engine, grade_io, grade_service
from services.store import StateStore
from utils.errors import GradeImportError, GradeValidationError

router = APIRouter(prefix="/grades", tags=["grades"])


def _scale(scale: Optional[int]):
    scale = scale or settings.GRADE_SCALE
    if scale not in (5, 4):
        raise GradeValidationError("scale must be 5 or 4")
    return get_scale(scale)


# ==========================================================
# [1단계] 정적 분석/요약 라우터
# ==========================================================

# ✅ [SUMMARY] 학기별 GPA 추이 + 전체 CGPA + 등급 분포
@router.get("/summary")
def get_summary(
    scale: Optional[int] = Query(None, description="5 또는 4 (기본값: GRADE_SCALE)"),
    store: StateStore = Depends(get_store),
):
    summary = gpa_engine.summarize(store.load_grades(), _scale(scale))
    return {"success": True, "data": summary.model_dump()}


# ✅ [DISTRIBUTION] 등급(A~F)별 과목 수 (year/session 지정 시 해당 학기만)
@router.get("/distribution")
def get_distribution(
    year: Optional[str] = None,
    session: Optional[str] = None,
    scale: Optional[int] = Query(None, description="5 또는 4 (기본값: GRADE_SCALE)"),
    store: StateStore = Depends(get_store),
):
    semester = SemesterKey(year, session or "") if year is not None else None
    distribution = gpa_engine.compute_grade_distribution(store.load_grades(), _scale(scale), semester)
    return {
        "success": True,
        "data": {
            "semester": semester.label if semester else "overall",
            "distribution": [b.model_dump() for b in distribution.buckets],
            "total": distribution.total,
        },
    }


# ✅ [SEMESTERS] 학년 → 학기 트리 (편집 화면용)
@router.get("/semesters")
def get_semesters(store: StateStore = Depends(get_store)):
    groups = gpa_engine.ordered_groups(gpa_engine.group_by_semester(store.load_grades()))
    return {
        "success": True,
        "data": [
            {
                "year": g.year,
                "session": g.session,
                "label": g.key.label,
                "total_credits": g.aggregate.total_credits,
                "semester_gpa": round(g.aggregate.semester_gpa, 2),
                "grades": [r.model_dump() for r in g.records],
            }
            for g in groups
        ],
    }


# ✅ [SHARE] 학기 요약 공유 데이터 (QR 코드 내용)
@router.get("/semester/share")
def share_semester(year: str, session: str = "", store: StateStore = Depends(get_store)):
    group = grade_service.find_semester(store.load_grades(), year, session)
    return {"success": True, "data": gpa_engine.semester_share_payload(group).model_dump()}


# ✅ [DELETE] 학기 전체 삭제
@router.delete("/semester")
def delete_semester(year: str, session: str = "", store: StateStore = Depends(get_store)):
    removed = grade_service.remove_semester(store, year, session)
    return {
        "success": True,
        "data": {"year": year, "session": session, "removed": removed},
        "message": "Semester deleted successfully",
    }


# ==========================================================
# [2단계] 가져오기 / 내보내기
# ==========================================================

# ✅ [EXPORT] CSV 다운로드
@router.get("/export")
def export_grades(store: StateStore = Depends(get_store)):
    content = grade_io.export_csv(store.load_grades())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{grade_io.EXPORT_FILENAME}"'},
    )


# ✅ [IMPORT] JSON 파일 내용(요청 본문) → 기존 목록 교체. 실패 시 기존 상태 유지
@router.post("/import")
async def import_grades(request: Request, store: StateStore = Depends(get_store)):
    body = await request.body()
    if len(body) > settings.MAX_IMPORT_KB * 1024:
        raise GradeImportError("The selected file is too large.")
    try:
        text = body.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise GradeImportError("The selected file is not a valid grade export. Please try again.")

    grades = grade_io.import_json(text)
    store.save_grades(grades)
    return {
        "success": True,
        "data": {"imported": len(grades)},
        "message": f"{len(grades)} grades have been imported.",
    }


# ==========================================================
# [3단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 성적 추가
@router.post("/")
def create_grade(form: GradeCreate, store: StateStore = Depends(get_store)):
    record = grade_service.add_grade(store, form, _scale(None), settings.CREDIT_POLICY)
    return {
        "success": True,
        "data": record.model_dump(),
        "message": f"Your grade for {record.name} has been recorded.",
    }


# ✅ [READ] 전체 성적 조회
@router.get("/")
def read_grades(store: StateStore = Depends(get_store)):
    return {"success": True, "data": [g.model_dump() for g in store.load_grades()]}


# ==========================================================
# [4단계] 완전 동적 라우터
# ==========================================================

# ✅ [DELETE] 성적 삭제
@router.delete("/{grade_id}")
def delete_grade(grade_id: str, store: StateStore = Depends(get_store)):
    grade_service.remove_grade(store, grade_id)
    return {
        "success": True,
        "data": {"grade_id": grade_id, "message": "Grade deleted successfully"},
    }
