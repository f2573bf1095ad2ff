import os

# settings are read at import time; point them at an in-memory database first
os.environ["DB_URL_OVERRIDE"] = "sqlite://"
os.environ["INTERNAL_API_TOKEN"] = "test-token"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from database.db import Base, SessionLocal, engine
from main import app
from models.assessments import Evaluation, Quiz
from models.attempts import EvaluationAttempt, QuizAttempt
from models.courses import Course, Enrollment
from models.guardians import Guardian
from models.periods import Period
from models.questions import AnswerOption, Question
from models.students import Student
from models.subjects import Subject
from models.topics import Subtopic, Topic


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-token"}


class SchoolFactory:
    """Small helpers to build the course -> subject -> period -> topic tree."""

    def __init__(self, db):
        self.db = db

    def _add(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def course(self, name="Sexto A", level="6"):
        return self._add(Course(name=name, level=level))

    def guardian(self, email="acudiente@example.com", national_id="1032456789"):
        return self._add(Guardian(first_name="Marta", last_name="Rojas", email=email, national_id=national_id))

    def student(self, first_name="Ana", last_name="Rojas", course=None, guardian=None):
        student = self._add(Student(
            first_name=first_name,
            last_name=last_name,
            guardian_id=guardian.id if guardian else None,
        ))
        if course is not None:
            self._add(Enrollment(student_id=student.id, course_id=course.id))
        return student

    def subject(self, course, name="Matemáticas"):
        return self._add(Subject(course_id=course.id, name=name))

    def period(self, subject, number=1, name=None):
        return self._add(Period(subject_id=subject.id, period_number=number, name=name or f"Periodo {number}"))

    def quiz(self, period, name="Quiz 1", **kwargs):
        topic = self._add(Topic(period_id=period.id, name=f"Tema {name}"))
        subtopic = self._add(Subtopic(topic_id=topic.id, name=f"Subtema {name}"))
        return self._add(Quiz(subtopic_id=subtopic.id, name=name, **kwargs))

    def evaluation(self, period, name="Evaluación 1", **kwargs):
        return self._add(Evaluation(period_id=period.id, subject_id=period.subject_id, name=name, **kwargs))

    def question(self, assessment, correct=0, options=3, text="¿Cuánto es 2 + 2?"):
        """A question with `options` choices; the one at index `correct` is right."""
        fk = "quiz_id" if isinstance(assessment, Quiz) else "evaluation_id"
        question = self._add(Question(text=text, **{fk: assessment.id}))
        choices = [
            self._add(AnswerOption(question_id=question.id, text=f"Opción {i}", is_correct=(i == correct)))
            for i in range(options)
        ]
        return question, choices

    def quiz_attempt(self, quiz, student, grade, completed=True):
        return self._add(QuizAttempt(
            quiz_id=quiz.id,
            student_id=student.id,
            grade=grade,
            completed=completed,
            started_at=datetime(2025, 3, 1, 8, 0),
            finished_at=datetime(2025, 3, 1, 8, 30) if completed else None,
        ))

    def evaluation_attempt(self, evaluation, student, grade, completed=True):
        return self._add(EvaluationAttempt(
            evaluation_id=evaluation.id,
            student_id=student.id,
            grade=grade,
            completed=completed,
            started_at=datetime(2025, 3, 20, 8, 0),
            finished_at=datetime(2025, 3, 20, 9, 0) if completed else None,
        ))


@pytest.fixture
def school(db):
    return SchoolFactory(db)
