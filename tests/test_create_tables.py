from sqlalchemy import create_engine

from scripts.create_tables import create_tables


def test_create_tables_on_empty_database():
    engine = create_engine("sqlite://")
    tables = create_tables(bind=engine)
    assert {
        "courses", "enrollments", "students", "guardians", "subjects", "periods",
        "topics", "subtopics", "quizzes", "evaluations", "quiz_attempts", "evaluation_attempts",
        "questions", "answer_options", "student_answers", "student_activations",
    } <= set(tables)
