from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from dependencies.store import get_store
from schemas.planner import ProfileStep, ScreenUpdate, UserProfile
from services import planner
from services.store import StateStore

router = APIRouter(tags=["profile"])


# ==========================================================
# [온보딩 / 프로필]
# ==========================================================

@router.get("/profile/")
def read_profile(store: StateStore = Depends(get_store)):
    user = store.load_user()
    return {
        "success": True,
        "data": {"onboarded": user is not None, "user": user.model_dump() if user else None},
    }


# ✅ 단계별 검증 (화면 이동은 프론트 담당)
@router.post("/profile/step")
def check_profile_step(step: ProfileStep):
    errors = planner.validate_profile_step(step)
    return {"success": not errors, "data": {"field": step.field, "errors": errors}}


@router.post("/profile/")
def complete_profile(profile: UserProfile, store: StateStore = Depends(get_store)):
    user = planner.complete_onboarding(store, profile)
    return {"success": True, "data": user.model_dump(), "message": f"Welcome, {user.name}!"}


@router.get("/profile/screen")
def read_screen(store: StateStore = Depends(get_store)):
    return {"success": True, "data": {"screen": store.load_screen()}}


@router.put("/profile/screen")
def update_screen(update: ScreenUpdate, store: StateStore = Depends(get_store)):
    store.save_screen(update.screen)
    return {"success": True, "data": {"screen": update.screen}}


# ==========================================================
# [설정] Gemini API 키 / 전체 초기화
# ==========================================================

class ApiKeyUpdate(BaseModel):
    api_key: str = Field("", description="빈 문자열이면 저장된 키 삭제")


@router.put("/preferences/api-key")
def update_api_key(update: ApiKeyUpdate, store: StateStore = Depends(get_store)):
    store.save_api_key(update.api_key.strip())
    return {"success": True, "data": {"configured": bool(update.api_key.strip())}, "message": "API Key Saved"}


@router.post("/preferences/reset")
def reset_app(store: StateStore = Depends(get_store)):
    store.clear()
    return {"success": True, "data": None, "message": "All local data has been cleared"}
