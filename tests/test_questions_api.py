def _options(correct=0, count=3):
    return [{"text": f"Opción {i}", "is_correct": i == correct, "explanation": "Porque sí"} for i in range(count)]


def _quiz(school):
    course = school.course()
    return school.quiz(school.period(school.subject(course)))


def test_create_and_list_quiz_questions(client, school):
    quiz = _quiz(school)
    resp = client.post("/v1/questions/", json={
        "quiz_id": quiz.id, "text": "¿Capital de Colombia?", "order": 2, "options": _options(correct=1),
    })
    assert resp.status_code == 201
    created = resp.json()["data"]
    assert created["quiz_id"] == quiz.id
    assert [o["text"] for o in created["options"]] == ["Opción 0", "Opción 1", "Opción 2"]

    client.post("/v1/questions/", json={"quiz_id": quiz.id, "text": "Primera", "order": 1, "options": _options()})

    listed = client.get("/v1/questions/", params={"quiz_id": quiz.id}).json()["data"]
    assert [q["text"] for q in listed] == ["Primera", "¿Capital de Colombia?"]
    # students never see which option is right
    assert all(set(o) == {"id", "text"} for q in listed for o in q["options"])


def test_question_validation(client, school):
    quiz = _quiz(school)
    two_correct = [{"text": "A", "is_correct": True}, {"text": "B", "is_correct": True}]
    assert client.post("/v1/questions/", json={"quiz_id": quiz.id, "text": "?", "options": two_correct}).status_code == 400
    assert client.post("/v1/questions/", json={"text": "?", "options": _options()}).status_code == 400
    assert client.post("/v1/questions/", json={
        "quiz_id": quiz.id, "evaluation_id": 1, "text": "?", "options": _options(),
    }).status_code == 400
    assert client.post("/v1/questions/", json={"quiz_id": quiz.id, "text": "?", "options": _options(count=1)}).status_code == 400


def test_question_for_unknown_assessment(client):
    assert client.post("/v1/questions/", json={"quiz_id": 999, "text": "?", "options": _options()}).status_code == 404
    assert client.post("/v1/questions/", json={"evaluation_id": 999, "text": "?", "options": _options()}).status_code == 404


def test_list_needs_exactly_one_assessment(client):
    assert client.get("/v1/questions/").status_code == 400
    assert client.get("/v1/questions/", params={"quiz_id": 1, "evaluation_id": 1}).status_code == 400
