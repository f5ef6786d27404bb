import json

from config.settings import settings


def add(client, name, grade, credits, year="Year 1", session="1st Semester"):
    return client.post("/v1/grades/", json={
        "name": name, "grade": grade, "credits": credits, "year": year, "session": session,
    })


def seed(client):
    for args in [("Intro to CS", 5, 3), ("Calculus I", 4, 4), ("Data Structures", 3, 3, "Year 1", "2nd Semester")]:
        assert add(client, *args).status_code == 200


def test_add_and_list_grades(client):
    res = add(client, "Intro to CS", 5, 3)
    body = res.json()

    assert body["success"] is True
    assert body["data"]["name"] == "Intro to CS"
    assert body["message"] == "Your grade for Intro to CS has been recorded."

    listed = client.get("/v1/grades/").json()["data"]
    assert [g["id"] for g in listed] == [body["data"]["id"]]


def test_summary_matches_worked_example(client):
    seed(client)
    data = client.get("/v1/grades/summary").json()["data"]

    assert data["cgpa"] == 4.0
    assert data["total_credits"] == 10
    assert data["semester_gpa"] == 3.0
    assert data["semester_credits"] == 3
    assert data["latest_semester"] == "Year 1 2nd Semester"
    assert [p["semester_gpa"] for p in data["trajectory"]] == [4.43, 3.0]
    assert [b["count"] for b in data["distribution"]["buckets"]] == [2, 1, 0, 0, 0]


def test_summary_with_four_point_scale(client):
    add(client, "Statistics", 3.5, 3)
    data = client.get("/v1/grades/summary", params={"scale": 4}).json()["data"]
    assert data["max_point"] == 4.0
    assert data["distribution"]["buckets"][0] == {"grade": "A", "count": 1}


def test_unsupported_scale_is_rejected(client):
    res = client.get("/v1/grades/summary", params={"scale": 10})
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "INVALID_GRADE"


def test_form_validation(client):
    assert add(client, "X", 4, 3).status_code == 422          # 과목명 2자 미만
    assert add(client, "Physics", 5.5, 3).status_code == 422  # 만점 초과
    assert add(client, "Physics", 4, 3, year="").status_code == 422
    assert client.get("/v1/grades/").json()["data"] == []


def test_four_point_scale_caps_grade(client, monkeypatch):
    monkeypatch.setattr(settings, "GRADE_SCALE", 4)
    res = add(client, "Physics", 4.5, 3)
    assert res.status_code == 422
    assert res.json()["error"]["message"] == "Grade must be between 0.0 and 4.0"


def test_credit_policy_reject(client):
    res = add(client, "Audit Seminar", 5, 0)
    assert res.status_code == 422
    assert res.json()["error"]["message"] == "Credits must be a positive number"


def test_credit_policy_accept_reaches_engine(client, monkeypatch):
    monkeypatch.setattr(settings, "CREDIT_POLICY", "accept")
    assert add(client, "Audit Seminar", 5, 0).status_code == 200

    data = client.get("/v1/grades/summary").json()["data"]
    assert data["cgpa"] == 0.0
    assert data["trajectory"][0]["semester_gpa"] == 0.0


def test_delete_grade_and_semester(client):
    seed(client)
    grades = client.get("/v1/grades/").json()["data"]

    assert client.delete(f"/v1/grades/{grades[0]['id']}").json()["success"] is True
    assert client.delete("/v1/grades/does-not-exist").status_code == 404

    res = client.delete("/v1/grades/semester", params={"year": "Year 1", "session": "2nd Semester"})
    assert res.json()["data"]["removed"] == 1
    assert [g["name"] for g in client.get("/v1/grades/").json()["data"]] == ["Calculus I"]


def test_semesters_tree_and_share(client):
    seed(client)
    semesters = client.get("/v1/grades/semesters").json()["data"]
    assert [s["label"] for s in semesters] == ["Year 1 1st Semester", "Year 1 2nd Semester"]
    assert semesters[0]["semester_gpa"] == 4.43

    share = client.get("/v1/grades/semester/share", params={"year": "Year 1", "session": "1st Semester"}).json()
    assert share["data"]["gpa"] == "4.43"
    assert len(share["data"]["courses"]) == 2

    missing = client.get("/v1/grades/semester/share", params={"year": "Year 9", "session": "1st Semester"})
    assert missing.status_code == 404


def test_distribution_for_semester(client):
    seed(client)
    data = client.get("/v1/grades/distribution", params={"year": "Year 1", "session": "1st Semester"}).json()["data"]
    assert data["semester"] == "Year 1 1st Semester"
    assert data["total"] == 2


def test_export_csv(client):
    assert client.get("/v1/grades/export").status_code == 400

    add(client, "Intro to CS", 5, 3)
    res = client.get("/v1/grades/export")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/csv")
    assert "studentsavvy_grades.csv" in res.headers["content-disposition"]
    assert res.text.split("\n")[0] == "id,name,grade,credits,year,session"


def test_import_replaces_grades(client):
    seed(client)
    payload = [{"id": 1, "name": "Algorithms", "grade": 5, "credits": 3, "year": "Year 2", "session": "1st Semester"}]
    res = client.post("/v1/grades/import", content=json.dumps(payload))

    assert res.json()["data"]["imported"] == 1
    assert [g["name"] for g in client.get("/v1/grades/").json()["data"]] == ["Algorithms"]


def test_failed_import_leaves_state_untouched(client):
    seed(client)
    before = client.get("/v1/grades/").json()["data"]

    res = client.post("/v1/grades/import", content='[{"id": 1, "name": "Broken"}]')

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "IMPORT_FAILED"
    assert client.get("/v1/grades/").json()["data"] == before
