from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from database.db import get_db
from models.assessments import Quiz as QuizModel
from models.attempts import QuizAttempt as QuizAttemptModel
from models.topics import Subtopic as SubtopicModel
from schemas.assessments import Quiz, QuizCreate
from schemas.attempts import ActivationSet, AnswerSave, AttemptStart, QuizAttempt, StudentActivation, StudentAnswer
from schemas.questions import CorrectOption
from services.attempt_service import QUIZ, finish_attempt, save_answer, set_student_activation, start_attempt

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


# ✅ [CREATE] quiz under a subtopic
@router.post("/", status_code=201)
def create_quiz(quiz: QuizCreate, db: Session = Depends(get_db)):
    if db.query(SubtopicModel).filter(SubtopicModel.id == quiz.subtopic_id).first() is None:
        raise HTTPException(status_code=404, detail="Subtema no encontrado")
    db_quiz = QuizModel(**quiz.model_dump())
    db.add(db_quiz)
    db.commit()
    db.refresh(db_quiz)
    return {
        "success": True,
        "data": Quiz.model_validate(db_quiz).model_dump(),
        "message": "Quiz creado correctamente"
    }


# ✅ [READ] a student's quiz attempts
@router.get("/attempts")
def read_student_attempts(student_id: int, db: Session = Depends(get_db)):
    records = (
        db.query(QuizAttemptModel)
        .filter(QuizAttemptModel.student_id == student_id)
        .order_by(QuizAttemptModel.started_at.desc())
        .all()
    )
    return {
        "success": True,
        "data": [QuizAttempt.model_validate(r).model_dump() for r in records],
        "message": "Intentos consultados"
    }


def _get_quiz(db: Session, quiz_id: int) -> QuizModel:
    quiz = db.query(QuizModel).filter(QuizModel.id == quiz_id).first()
    if quiz is None:
        raise HTTPException(status_code=404, detail="Quiz no encontrado")
    return quiz


# ✅ [UPDATE] per-student activation (also lets a completed quiz be retaken)
@router.put("/{quiz_id}/students/{student_id}/activation")
def set_quiz_activation(quiz_id: int, student_id: int, body: ActivationSet, db: Session = Depends(get_db)):
    quiz = _get_quiz(db, quiz_id)
    row = set_student_activation(db, QUIZ, quiz, student_id, body.is_active)
    return {
        "success": True,
        "data": StudentActivation.model_validate(row).model_dump(),
        "message": f"Quiz {'activado' if body.is_active else 'desactivado'} para el estudiante"
    }


# ✅ [START] quiz attempt (201 new, 200 resumed or reopened)
@router.post("/{quiz_id}/attempts")
def start_quiz_attempt(quiz_id: int, body: AttemptStart, response: Response, db: Session = Depends(get_db)):
    quiz = _get_quiz(db, quiz_id)
    attempt, created = start_attempt(db, QUIZ, quiz, body.student_id)
    response.status_code = 201 if created else 200
    return {
        "success": True,
        "data": QuizAttempt.model_validate(attempt).model_dump(),
        "message": "Intento iniciado" if created else "Intento en curso"
    }


# ✅ [ANSWER] store one answer and return the feedback
@router.post("/attempts/{attempt_id}/answers")
def save_quiz_answer(attempt_id: int, body: AnswerSave, db: Session = Depends(get_db)):
    answer, correct_option = save_answer(
        db, QUIZ, attempt_id, body.question_id, body.selected_option_id, body.time_taken_seconds
    )
    return {
        "success": True,
        "data": StudentAnswer.model_validate(answer).model_dump(),
        "is_correct": answer.is_correct,
        "correct_answer": CorrectOption.model_validate(correct_option).model_dump() if correct_option else None,
        "message": "Respuesta guardada"
    }


# ✅ [FINISH] quiz attempt, scored from the stored answers
@router.post("/attempts/{attempt_id}/finish")
def finish_quiz_attempt(attempt_id: int, db: Session = Depends(get_db)):
    attempt, summary = finish_attempt(db, QUIZ, attempt_id)
    return {
        "success": True,
        "data": QuizAttempt.model_validate(attempt).model_dump(),
        "summary": summary,
        "message": "Intento finalizado"
    }
