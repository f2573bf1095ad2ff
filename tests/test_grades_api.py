import pytest


def test_student_grades_by_subject(client, school):
    course = school.course()
    student = school.student(course=course)
    math = school.subject(course, "Matemáticas")
    period = school.period(math)
    q1, q2 = school.quiz(period, "Quiz 1"), school.quiz(period, "Quiz 2")
    evaluation = school.evaluation(period)
    school.quiz_attempt(q1, student, 4.0)
    school.quiz_attempt(q2, student, 5.0)
    school.evaluation_attempt(evaluation, student, 3.0)

    resp = client.get(f"/v1/students/{student.id}/grades")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    [subject] = body["data"]
    assert subject["subject_name"] == "Matemáticas"
    assert [q["grade"] for q in subject["quizzes"]] == [4.0, 5.0]
    assert subject["evaluations"][0]["type"] == "evaluation"
    summary = subject["summary"]
    assert summary["average_quiz"] == 4.5
    assert summary["average_evaluation"] == 3.0
    assert summary["final_grade"] == 4.05
    assert summary["passes"] is True
    assert summary["status"] == "approved"


def test_unfinished_attempts_are_ignored(client, school):
    course = school.course()
    student = school.student(course=course)
    period = school.period(school.subject(course))
    school.quiz_attempt(school.quiz(period, "Quiz 1"), student, 5.0)
    school.quiz_attempt(school.quiz(period, "Quiz 2"), student, None, completed=False)

    resp = client.get(f"/v1/students/{student.id}/grades")
    summary = resp.json()["data"][0]["summary"]
    assert summary["quiz_count"] == 1
    assert summary["average_quiz"] == 5.0
    assert summary["final_grade"] == 3.5
    assert summary["status"] == "at_risk"


def test_subjects_sorted_by_name(client, school):
    course = school.course()
    student = school.student(course=course)
    for name in ("Sociales", "Biología"):
        period = school.period(school.subject(course, name))
        school.evaluation_attempt(school.evaluation(period), student, 4.0)

    names = [s["subject_name"] for s in client.get(f"/v1/students/{student.id}/grades").json()["data"]]
    assert names == ["Biología", "Sociales"]


def test_student_without_grades(client, school):
    student = school.student()
    resp = client.get(f"/v1/students/{student.id}/grades")
    assert resp.status_code == 200
    assert resp.json()["data"] == []


def test_unknown_student_is_404(client):
    resp = client.get("/v1/students/999/grades")
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_FOUND"


def test_grades_by_period_ordered_by_number(client, school):
    course = school.course()
    student = school.student(course=course)
    subject = school.subject(course)
    second = school.period(subject, number=2)
    first = school.period(subject, number=1)
    school.quiz_attempt(school.quiz(second, "Quiz P2"), student, 2.0)
    school.quiz_attempt(school.quiz(first, "Quiz P1"), student, 5.0)
    school.evaluation_attempt(school.evaluation(first), student, 5.0)

    periods = client.get(f"/v1/students/{student.id}/grades/by-period").json()["data"]
    assert [p["period_number"] for p in periods] == [1, 2]
    assert periods[0]["subjects"][0]["summary"]["final_grade"] == 5.0
    assert periods[1]["subjects"][0]["summary"]["final_grade"] == pytest.approx(1.4)
    assert periods[1]["subjects"][0]["summary"]["status"] == "failing"
