from fastapi.testclient import TestClient

import routers.grades as grades_router
from main import app


def test_out_of_range_stored_grade_is_422(client, school):
    course = school.course()
    student = school.student(course=course)
    period = school.period(school.subject(course))
    school.quiz_attempt(school.quiz(period), student, 6.0)

    resp = client.get(f"/v1/students/{student.id}/grades")
    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_GRADE_RANGE"
    assert "6.0" in body["error"]["message"]
    assert "generated_at" in body


def test_unexpected_error_is_500_envelope(school, monkeypatch):
    student = school.student()

    def broken(db, student_id):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(grades_router, "collect_student_grades", broken)

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.get(f"/v1/students/{student.id}/grades")

    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == {"code": "INTERNAL_ERROR", "message": "Error interno del servidor"}
    # internal details stay in the log
    assert "connection lost" not in resp.text


def test_http_errors_use_the_envelope(client):
    resp = client.get("/v1/students/404/grades")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_validation_errors_are_400(client):
    resp = client.post("/v1/quizzes/", json={"name": "Sin subtema"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
    assert "subtopic_id" in resp.json()["error"]["message"]
