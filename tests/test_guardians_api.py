def _seed(school):
    guardian = school.guardian(email="marta@example.com", national_id="1032456789")
    course = school.course()
    child = school.student("Ana", "Rojas", course=course, guardian=guardian)
    period = school.period(school.subject(course, "Lenguaje"))
    school.quiz_attempt(school.quiz(period), child, 3.69)
    school.evaluation_attempt(school.evaluation(period), child, 3.69)
    return guardian, child


def test_guardian_sees_children_grades(client, school):
    guardian, child = _seed(school)

    resp = client.post("/v1/guardians/grades", json={"email": "marta@example.com", "last4_national_id": "6789"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["guardian"]["id"] == guardian.id
    assert "national_id" not in data["guardian"]
    [entry] = data["students"]
    assert entry["student"]["id"] == child.id
    [period] = entry["grades"]
    [subject] = period["subjects"]
    assert subject["subject_name"] == "Lenguaje"
    assert subject["summary"]["final_grade"] == 3.69
    assert subject["summary"]["passes"] is False
    assert subject["summary"]["status"] == "at_risk"


def test_wrong_digits_are_rejected(client, school):
    _seed(school)
    resp = client.post("/v1/guardians/grades", json={"email": "marta@example.com", "last4_national_id": "1234"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "UNAUTHORIZED"


def test_unknown_guardian(client, school):
    resp = client.post("/v1/guardians/grades", json={"email": "nadie@example.com", "last4_national_id": "6789"})
    assert resp.status_code == 404


def test_guardian_without_students(client, school):
    school.guardian(email="solo@example.com", national_id="55554444")
    resp = client.post("/v1/guardians/grades", json={"email": "solo@example.com", "last4_national_id": "4444"})
    assert resp.status_code == 404
    assert "estudiantes" in resp.json()["error"]["message"]


def test_malformed_lookup_is_400(client):
    resp = client.post("/v1/guardians/grades", json={"email": "marta@example.com", "last4_national_id": "67"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

    resp = client.post("/v1/guardians/grades", json={"email": "marta@example.com"})
    assert resp.status_code == 400


def test_create_guardian_rejects_duplicate_email(client):
    payload = {"first_name": "Luis", "last_name": "Pérez", "email": "luis@example.com", "national_id": "80012345"}
    first = client.post("/v1/guardians/", json=payload)
    assert first.status_code == 201
    assert "national_id" not in first.json()["data"]
    assert client.post("/v1/guardians/", json=payload).status_code == 409
