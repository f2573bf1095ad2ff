from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from database.db import get_db
from models.assessments import Evaluation as EvaluationModel
from models.attempts import EvaluationAttempt as EvaluationAttemptModel
from models.periods import Period as PeriodModel
from schemas.assessments import Evaluation, EvaluationCreate
from schemas.attempts import ActivationSet, AnswerSave, AttemptStart, EvaluationAttempt, StudentActivation, StudentAnswer
from services.attempt_service import EVALUATION, finish_attempt, save_answer, set_student_activation, start_attempt

router = APIRouter(prefix="/evaluations", tags=["evaluaciones"])


# ✅ [CREATE] period evaluation; the subject comes from the period
@router.post("/", status_code=201)
def create_evaluation(evaluation: EvaluationCreate, db: Session = Depends(get_db)):
    period = db.query(PeriodModel).filter(PeriodModel.id == evaluation.period_id).first()
    if period is None:
        raise HTTPException(status_code=404, detail="Periodo no encontrado")
    db_evaluation = EvaluationModel(subject_id=period.subject_id, **evaluation.model_dump())
    db.add(db_evaluation)
    db.commit()
    db.refresh(db_evaluation)
    return {
        "success": True,
        "data": Evaluation.model_validate(db_evaluation).model_dump(),
        "message": "Evaluación creada correctamente"
    }


# ✅ [READ] a student's evaluation attempts
@router.get("/attempts")
def read_student_attempts(student_id: int, db: Session = Depends(get_db)):
    records = (
        db.query(EvaluationAttemptModel)
        .filter(EvaluationAttemptModel.student_id == student_id)
        .order_by(EvaluationAttemptModel.started_at.desc())
        .all()
    )
    return {
        "success": True,
        "data": [EvaluationAttempt.model_validate(r).model_dump() for r in records],
        "message": "Intentos consultados"
    }


def _get_evaluation(db: Session, evaluation_id: int) -> EvaluationModel:
    evaluation = db.query(EvaluationModel).filter(EvaluationModel.id == evaluation_id).first()
    if evaluation is None:
        raise HTTPException(status_code=404, detail="Evaluación no encontrada")
    return evaluation


# ✅ [UPDATE] per-student activation (also lets a completed evaluation be retaken)
@router.put("/{evaluation_id}/students/{student_id}/activation")
def set_evaluation_activation(evaluation_id: int, student_id: int, body: ActivationSet, db: Session = Depends(get_db)):
    evaluation = _get_evaluation(db, evaluation_id)
    row = set_student_activation(db, EVALUATION, evaluation, student_id, body.is_active)
    return {
        "success": True,
        "data": StudentActivation.model_validate(row).model_dump(),
        "message": f"Evaluación {'activada' if body.is_active else 'desactivada'} para el estudiante"
    }


# ✅ [START] evaluation attempt (201 new, 200 resumed or reopened)
@router.post("/{evaluation_id}/attempts")
def start_evaluation_attempt(evaluation_id: int, body: AttemptStart, response: Response, db: Session = Depends(get_db)):
    evaluation = _get_evaluation(db, evaluation_id)
    attempt, created = start_attempt(db, EVALUATION, evaluation, body.student_id)
    response.status_code = 201 if created else 200
    return {
        "success": True,
        "data": EvaluationAttempt.model_validate(attempt).model_dump(),
        "message": "Intento iniciado" if created else "Intento en curso"
    }


# ✅ [ANSWER] store (or change) one answer; no feedback until the end
@router.post("/attempts/{attempt_id}/answers")
def save_evaluation_answer(attempt_id: int, body: AnswerSave, db: Session = Depends(get_db)):
    answer, _ = save_answer(
        db, EVALUATION, attempt_id, body.question_id, body.selected_option_id, body.time_taken_seconds
    )
    return {
        "success": True,
        "data": StudentAnswer.model_validate(answer).model_dump(),
        "message": "Respuesta guardada"
    }


# ✅ [FINISH] evaluation attempt, scored from the stored answers
@router.post("/attempts/{attempt_id}/finish")
def finish_evaluation_attempt(attempt_id: int, db: Session = Depends(get_db)):
    attempt, summary = finish_attempt(db, EVALUATION, attempt_id)
    return {
        "success": True,
        "data": EvaluationAttempt.model_validate(attempt).model_dump(),
        "summary": summary,
        "message": "Intento finalizado"
    }
