"""
services/attempt_service.py

Start / answer / finish lifecycle shared by quiz and evaluation attempts.

- one attempt per (student, assessment)
- starting an unfinished attempt returns it unchanged
- a completed attempt can only be restarted when a teacher re-activated the
  assessment for that student (StudentActivation.is_active); the old answers are discarded
- the grade is scored from the stored answers:
  correct answers / questions of the assessment * 5, rounded to 2 decimals (0 without questions)
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.db import utcnow
from models.assessments import StudentActivation as StudentActivationModel
from models.attempts import QuizAttempt as QuizAttemptModel, EvaluationAttempt as EvaluationAttemptModel
from models.questions import (
    AnswerOption as AnswerOptionModel,
    Question as QuestionModel,
    StudentAnswer as StudentAnswerModel,
)
from models.students import Student as StudentModel
from services.grade_aggregator import MAX_GRADE, REPORT_DIGITS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptKind:
    label: str
    attempt_model: type
    assessment_fk: str        # column on attempts, questions and activations
    answer_fk: str            # column on student answers
    reveals_answers: bool     # feedback after each answer; such answers cannot be changed


QUIZ = AttemptKind("quiz", QuizAttemptModel, "quiz_id", "quiz_attempt_id", reveals_answers=True)
EVALUATION = AttemptKind("evaluación", EvaluationAttemptModel, "evaluation_id", "evaluation_attempt_id", reveals_answers=False)


def attempt_grade(correct_answers: int, total_questions: int) -> float:
    if total_questions <= 0:
        return 0.0
    return round(correct_answers / total_questions * MAX_GRADE, REPORT_DIGITS)


# =========================================================
# Per-student activation
# =========================================================

def student_activation(db: Session, kind: AttemptKind, assessment_id: int, student_id: int) -> Optional[bool]:
    """The teacher's override for this student, or None to use the assessment's own is_active."""
    row = (
        db.query(StudentActivationModel)
        .filter(getattr(StudentActivationModel, kind.assessment_fk) == assessment_id)
        .filter(StudentActivationModel.student_id == student_id)
        .first()
    )
    return None if row is None else row.is_active


def set_student_activation(db: Session, kind: AttemptKind, assessment, student_id: int, is_active: bool):
    if db.query(StudentModel).filter(StudentModel.id == student_id).first() is None:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")

    row = (
        db.query(StudentActivationModel)
        .filter(getattr(StudentActivationModel, kind.assessment_fk) == assessment.id)
        .filter(StudentActivationModel.student_id == student_id)
        .first()
    )
    if row is None:
        row = StudentActivationModel(student_id=student_id, **{kind.assessment_fk: assessment.id})
        db.add(row)
    row.is_active = is_active
    row.activated_at = utcnow()
    db.commit()
    db.refresh(row)
    logger.info(f"{kind.label} {assessment.id} {'activated' if is_active else 'deactivated'} for student {student_id}")
    return row


def check_availability(assessment, label: str, now: Optional[datetime] = None, override: Optional[bool] = None):
    now = now or utcnow()
    if assessment.start_date and now < assessment.start_date:
        raise HTTPException(status_code=400, detail=f"La actividad ({label}) aún no está disponible")
    if assessment.end_date and now > assessment.end_date:
        raise HTTPException(status_code=400, detail=f"La actividad ({label}) ya no está disponible")
    is_active = assessment.is_active if override is None else override
    if not is_active:
        raise HTTPException(status_code=400, detail=f"La actividad ({label}) no está activa")


# =========================================================
# Start
# =========================================================

def _find_attempt(db: Session, kind: AttemptKind, assessment_id: int, student_id: int):
    model = kind.attempt_model
    return (
        db.query(model)
        .filter(getattr(model, kind.assessment_fk) == assessment_id)
        .filter(model.student_id == student_id)
        .first()
    )


def _reset_attempt(db: Session, kind: AttemptKind, attempt):
    db.query(StudentAnswerModel).filter(getattr(StudentAnswerModel, kind.answer_fk) == attempt.id).delete(
        synchronize_session=False
    )
    attempt.grade = None
    attempt.completed = False
    attempt.started_at = utcnow()
    attempt.finished_at = None
    db.commit()
    db.refresh(attempt)
    logger.info(f"{kind.label} attempt {attempt.id} reopened for student {attempt.student_id}")
    return attempt


def start_attempt(db: Session, kind: AttemptKind, assessment, student_id: int) -> Tuple[object, bool]:
    """
    Return (attempt, created). Raises HTTPException on unknown student,
    unavailable assessment or a completed attempt without re-activation.
    """
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")

    override = student_activation(db, kind, assessment.id, student_id)
    check_availability(assessment, kind.label, override=override)

    existing = _find_attempt(db, kind, assessment.id, student_id)
    if existing is not None:
        if not existing.completed:
            return existing, False
        if override is True:
            return _reset_attempt(db, kind, existing), False
        raise HTTPException(status_code=409, detail=f"Ya completaste esta actividad ({kind.label})")

    assessment_id = assessment.id
    attempt = kind.attempt_model(
        student_id=student_id,
        grade=None,
        completed=False,
        started_at=utcnow(),
        **{kind.assessment_fk: assessment_id},
    )
    db.add(attempt)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent request created the row first
        db.rollback()
        existing = _find_attempt(db, kind, assessment_id, student_id)
        if existing is None:
            raise
        logger.info(f"{kind.label} attempt {existing.id} already started by a concurrent request")
        return existing, False

    db.refresh(attempt)
    logger.info(f"{kind.label} attempt {attempt.id} started: student={student_id} {kind.assessment_fk}={assessment_id}")
    return attempt, True


# =========================================================
# Answer / finish
# =========================================================

def _get_open_attempt(db: Session, kind: AttemptKind, attempt_id: int):
    model = kind.attempt_model
    attempt = db.query(model).filter(model.id == attempt_id).first()
    if attempt is None:
        raise HTTPException(status_code=404, detail="Intento no encontrado")
    if attempt.completed:
        raise HTTPException(status_code=409, detail="Este intento ya fue completado")
    return attempt


def save_answer(
    db: Session,
    kind: AttemptKind,
    attempt_id: int,
    question_id: int,
    selected_option_id: int,
    time_taken_seconds: Optional[int] = None,
):
    """
    Store the student's choice for one question of the attempt's assessment.
    Correctness is taken from the stored option, never from the client.
    Returns (answer, correct option).
    """
    attempt = _get_open_attempt(db, kind, attempt_id)
    assessment_id = getattr(attempt, kind.assessment_fk)

    question = (
        db.query(QuestionModel)
        .filter(QuestionModel.id == question_id)
        .filter(getattr(QuestionModel, kind.assessment_fk) == assessment_id)
        .first()
    )
    if question is None:
        raise HTTPException(status_code=404, detail="Pregunta no encontrada en esta actividad")

    option = (
        db.query(AnswerOptionModel)
        .filter(AnswerOptionModel.id == selected_option_id)
        .filter(AnswerOptionModel.question_id == question.id)
        .first()
    )
    if option is None:
        raise HTTPException(status_code=404, detail="Opción no encontrada")

    answer = (
        db.query(StudentAnswerModel)
        .filter(getattr(StudentAnswerModel, kind.answer_fk) == attempt.id)
        .filter(StudentAnswerModel.question_id == question.id)
        .first()
    )
    if answer is None:
        answer = StudentAnswerModel(question_id=question.id, **{kind.answer_fk: attempt.id})
        db.add(answer)
    elif kind.reveals_answers:
        raise HTTPException(status_code=409, detail="Esta pregunta ya fue respondida")

    answer.selected_option_id = option.id
    answer.is_correct = bool(option.is_correct)
    answer.time_taken_seconds = time_taken_seconds
    answer.answered_at = utcnow()
    db.commit()
    db.refresh(answer)

    correct_option = (
        db.query(AnswerOptionModel)
        .filter(AnswerOptionModel.question_id == question.id)
        .filter(AnswerOptionModel.is_correct.is_(True))
        .first()
    )
    return answer, correct_option


def finish_attempt(db: Session, kind: AttemptKind, attempt_id: int):
    """Score the attempt from its stored answers. Returns (attempt, summary)."""
    attempt = _get_open_attempt(db, kind, attempt_id)

    total_questions = (
        db.query(QuestionModel)
        .filter(getattr(QuestionModel, kind.assessment_fk) == getattr(attempt, kind.assessment_fk))
        .count()
    )
    correct_answers = (
        db.query(StudentAnswerModel)
        .filter(getattr(StudentAnswerModel, kind.answer_fk) == attempt.id)
        .filter(StudentAnswerModel.is_correct.is_(True))
        .count()
    )

    attempt.grade = attempt_grade(correct_answers, total_questions)
    attempt.completed = True
    attempt.finished_at = utcnow()
    db.commit()
    db.refresh(attempt)
    logger.info(f"{kind.label} attempt {attempt.id} finished: {correct_answers}/{total_questions} grade={attempt.grade}")

    summary = {
        "total_questions": total_questions,
        "correct_answers": correct_answers,
        "grade": attempt.grade,
    }
    return attempt, summary
