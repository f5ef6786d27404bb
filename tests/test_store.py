from models.app_state import AppState
from schemas.grades import FIVE_POINT, GradeCreate
from services import grade_service
from services.store import GRADES_KEY, StateStore
from tests.factories import make_grade


def test_missing_keys_return_defaults(store: StateStore):
    assert store.load("tasks", []) == []
    assert store.load_grades() == []
    assert store.load_user() is None
    assert store.load_screen() == "performance"
    assert store.load_api_key() is None


def test_grades_roundtrip_and_overwrite(store: StateStore, sample_grades):
    store.save_grades(sample_grades)
    assert store.load_grades() == sample_grades

    store.save_grades(sample_grades[:1])
    assert store.load_grades() == sample_grades[:1]


def test_legacy_grades_are_migrated_on_load(store: StateStore):
    store.save(GRADES_KEY, [{"id": 7, "courseName": "Physics", "gradePoint": 2, "credits": 4, "semester": "Year 1 2nd Semester"}])
    [record] = store.load_grades()
    assert record == make_grade(7, 2, 4, session="2nd Semester", name="Physics")


def test_corrupt_value_falls_back_to_default(store: StateStore, db_session):
    db_session.add(AppState(key="tasks", value="{oops"))
    db_session.commit()
    assert store.load("tasks", []) == []
    assert store.load_tasks() == []


def test_clear_removes_everything(store: StateStore, sample_grades):
    store.save_grades(sample_grades)
    store.save_screen("dashboard")
    store.save_api_key("secret")

    store.clear()

    assert store.load_grades() == []
    assert store.load_screen() == "performance"
    assert store.load_api_key() is None


def test_invalid_grade_row_does_not_wipe_other_grades(store: StateStore):
    store.save(GRADES_KEY, [
        make_grade(1, 5, 3, name="Calculus").model_dump(),
        {"id": 2, "name": "Physics", "grade": 3},
        "not a record",
    ])
    assert [g.name for g in store.load_grades()] == ["Calculus"]

    form = GradeCreate(name="Chemistry", grade=4, credits=3, year="Year 1", session="1st Semester")
    grade_service.add_grade(store, form, FIVE_POINT, "reject_nonpositive")

    assert [g.name for g in store.load_grades()] == ["Calculus", "Chemistry"]
