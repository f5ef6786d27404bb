from fastapi import Depends

from dependencies.store import get_store
from services.llm_service import StudyAssistant, get_llm
from services.store import StateStore


# ✅ 설정 화면에서 저장한 키가 있으면 .env 키보다 우선
def get_assistant(store: StateStore = Depends(get_store)) -> StudyAssistant:
    return StudyAssistant(get_llm(store.load_api_key()))
