from database.db import SessionLocal
from services.store import StateStore


# ==========================================================
# [공통] DB 세션 → 상태 저장소 주입
# ==========================================================
def get_store():
    db = SessionLocal()
    try:
        yield StateStore(db)
    finally:
        db.close()
