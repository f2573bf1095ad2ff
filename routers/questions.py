from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from models.assessments import Evaluation as EvaluationModel, Quiz as QuizModel
from models.questions import AnswerOption as AnswerOptionModel, Question as QuestionModel
from schemas.questions import AnswerOption, Question, QuestionCreate

router = APIRouter(prefix="/questions", tags=["preguntas"])


def _question_out(db: Session, question: QuestionModel) -> dict:
    options = (
        db.query(AnswerOptionModel)
        .filter(AnswerOptionModel.question_id == question.id)
        .order_by(AnswerOptionModel.id)
        .all()
    )
    data = Question.model_validate(question).model_dump()
    data["options"] = [AnswerOption.model_validate(o).model_dump() for o in options]
    return data


# ✅ [CREATE] question with its options
@router.post("/", status_code=201)
def create_question(question: QuestionCreate, db: Session = Depends(get_db)):
    if question.quiz_id is not None:
        if db.query(QuizModel).filter(QuizModel.id == question.quiz_id).first() is None:
            raise HTTPException(status_code=404, detail="Quiz no encontrado")
    elif db.query(EvaluationModel).filter(EvaluationModel.id == question.evaluation_id).first() is None:
        raise HTTPException(status_code=404, detail="Evaluación no encontrada")

    db_question = QuestionModel(**question.model_dump(exclude={"options"}))
    db.add(db_question)
    db.flush()
    for option in question.options:
        db.add(AnswerOptionModel(question_id=db_question.id, **option.model_dump()))
    db.commit()
    db.refresh(db_question)
    return {
        "success": True,
        "data": _question_out(db, db_question),
        "message": "Pregunta creada correctamente"
    }


# ✅ [READ] questions of a quiz or an evaluation (correct options hidden)
@router.get("/")
def read_questions(quiz_id: int = None, evaluation_id: int = None, db: Session = Depends(get_db)):
    if (quiz_id is None) == (evaluation_id is None):
        raise HTTPException(status_code=400, detail="Indica quiz_id o evaluation_id")

    query = db.query(QuestionModel)
    if quiz_id is not None:
        query = query.filter(QuestionModel.quiz_id == quiz_id)
    else:
        query = query.filter(QuestionModel.evaluation_id == evaluation_id)
    records = query.order_by(QuestionModel.order, QuestionModel.id).all()
    return {
        "success": True,
        "data": [_question_out(db, q) for q in records],
        "message": "Preguntas consultadas"
    }
