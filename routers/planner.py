from fastapi import APIRouter, Depends

from dependencies.store import get_store
from schemas.planner import ClassCreate, StudySessionCreate, TaskCreate
from services import planner
from services.store import StateStore

router = APIRouter(tags=["planner"])


# ==========================================================
# [할 일]
# ==========================================================

# ✅ [READ] 우선순위 → 마감일 순 정렬 (+ 마감까지 남은 시간)
@router.get("/tasks/")
def read_tasks(store: StateStore = Depends(get_store)):
    tasks = planner.sort_tasks(store.load_tasks())
    data = [
        {**t.model_dump(mode="json"), "time_remaining": planner.time_remaining(t.due_date)}
        for t in tasks
    ]
    return {"success": True, "data": data}


@router.post("/tasks/")
def create_task(form: TaskCreate, store: StateStore = Depends(get_store)):
    task = planner.add_task(store, form)
    return {"success": True, "data": task.model_dump(mode="json"), "message": "Task added"}


@router.patch("/tasks/{task_id}/toggle")
def toggle_task(task_id: str, store: StateStore = Depends(get_store)):
    task = planner.toggle_task(store, task_id)
    return {"success": True, "data": task.model_dump(mode="json")}


@router.delete("/tasks/{task_id}")
def delete_task(task_id: str, store: StateStore = Depends(get_store)):
    planner.remove_task(store, task_id)
    return {"success": True, "data": {"task_id": task_id, "message": "Task deleted successfully"}}


# ==========================================================
# [수업 시간표]
# ==========================================================

# ✅ [READ] 요일별 그룹 (월~금, 각 요일 시각순)
@router.get("/schedule/")
def read_schedule(store: StateStore = Depends(get_store)):
    schedule = planner.weekly_schedule(store.load_classes())
    return {
        "success": True,
        "data": {day: [c.model_dump() for c in classes] for day, classes in schedule.items()},
    }


@router.post("/schedule/")
def create_class(form: ClassCreate, store: StateStore = Depends(get_store)):
    entry = planner.add_class(store, form)
    return {"success": True, "data": entry.model_dump(), "message": "Class added"}


@router.delete("/schedule/{class_id}")
def delete_class(class_id: str, store: StateStore = Depends(get_store)):
    planner.remove_class(store, class_id)
    return {"success": True, "data": {"class_id": class_id, "message": "Class deleted successfully"}}


# ==========================================================
# [학습 세션]
# ==========================================================

@router.get("/study-sessions/")
def read_study_sessions(store: StateStore = Depends(get_store)):
    sessions = planner.sort_sessions(store.load_study_sessions())
    return {"success": True, "data": [s.model_dump() for s in sessions]}


@router.post("/study-sessions/")
def create_study_session(form: StudySessionCreate, store: StateStore = Depends(get_store)):
    session = planner.add_study_session(store, form)
    return {"success": True, "data": session.model_dump(), "message": "Study session added"}


@router.delete("/study-sessions/{session_id}")
def delete_study_session(session_id: str, store: StateStore = Depends(get_store)):
    planner.remove_study_session(store, session_id)
    return {"success": True, "data": {"session_id": session_id, "message": "Study session deleted successfully"}}
