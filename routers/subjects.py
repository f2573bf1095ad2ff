from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from models.courses import Course as CourseModel
from models.periods import Period as PeriodModel
from models.subjects import Subject as SubjectModel
from models.topics import Topic as TopicModel, Subtopic as SubtopicModel
from schemas.subjects import (
    Period, PeriodCreate,
    Subject, SubjectCreate,
    Subtopic, SubtopicCreate,
    Topic, TopicCreate,
)

router = APIRouter(tags=["materias"])


def _get_subject(db: Session, subject_id: int) -> SubjectModel:
    subject = db.query(SubjectModel).filter(SubjectModel.id == subject_id).first()
    if subject is None:
        raise HTTPException(status_code=404, detail="Materia no encontrada")
    return subject


def _check_course(db: Session, course_id: int):
    if db.query(CourseModel).filter(CourseModel.id == course_id).first() is None:
        raise HTTPException(status_code=404, detail="Curso no encontrado")


# ==========================================================
# [1] Subjects (materias)
# ==========================================================

# ✅ [CREATE] subject
@router.post("/subjects", status_code=201)
def create_subject(subject: SubjectCreate, db: Session = Depends(get_db)):
    _check_course(db, subject.course_id)
    db_subject = SubjectModel(**subject.model_dump())
    db.add(db_subject)
    db.commit()
    db.refresh(db_subject)
    return {
        "success": True,
        "data": Subject.model_validate(db_subject).model_dump(),
        "message": "Materia creada correctamente"
    }


# ✅ [READ] subjects, optionally of one course
@router.get("/subjects")
def read_subjects(course_id: int = None, db: Session = Depends(get_db)):
    query = db.query(SubjectModel)
    if course_id is not None:
        query = query.filter(SubjectModel.course_id == course_id)
    records = query.order_by(SubjectModel.name).all()
    return {
        "success": True,
        "data": [Subject.model_validate(r).model_dump() for r in records],
        "message": "Materias consultadas"
    }


# ✅ [READ] one subject
@router.get("/subjects/{subject_id}")
def read_subject(subject_id: int, db: Session = Depends(get_db)):
    subject = _get_subject(db, subject_id)
    return {
        "success": True,
        "data": Subject.model_validate(subject).model_dump(),
        "message": "Materia consultada"
    }


# ✅ [UPDATE] subject
@router.put("/subjects/{subject_id}")
def update_subject(subject_id: int, updated: SubjectCreate, db: Session = Depends(get_db)):
    subject = _get_subject(db, subject_id)
    _check_course(db, updated.course_id)

    for key, value in updated.model_dump().items():
        setattr(subject, key, value)

    db.commit()
    db.refresh(subject)
    return {
        "success": True,
        "data": Subject.model_validate(subject).model_dump(),
        "message": "Materia actualizada correctamente"
    }


# ✅ [DELETE] subject (only while it has no periods)
@router.delete("/subjects/{subject_id}")
def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    subject = _get_subject(db, subject_id)
    if db.query(PeriodModel).filter(PeriodModel.subject_id == subject_id).first():
        raise HTTPException(status_code=409, detail="La materia tiene periodos asociados")

    db.delete(subject)
    db.commit()
    return {
        "success": True,
        "data": {"subject_id": subject_id},
        "message": "Materia eliminada correctamente"
    }


# ==========================================================
# [2] Periods, topics and subtopics
# ==========================================================

# ✅ [CREATE] period of a subject
@router.post("/subjects/{subject_id}/periods", status_code=201)
def create_period(subject_id: int, period: PeriodCreate, db: Session = Depends(get_db)):
    _get_subject(db, subject_id)
    db_period = PeriodModel(subject_id=subject_id, **period.model_dump())
    db.add(db_period)
    db.commit()
    db.refresh(db_period)
    return {
        "success": True,
        "data": Period.model_validate(db_period).model_dump(),
        "message": "Periodo creado correctamente"
    }


# ✅ [READ] periods of a subject, by number
@router.get("/subjects/{subject_id}/periods")
def read_periods(subject_id: int, db: Session = Depends(get_db)):
    _get_subject(db, subject_id)
    records = (
        db.query(PeriodModel)
        .filter(PeriodModel.subject_id == subject_id)
        .order_by(PeriodModel.period_number, PeriodModel.name)
        .all()
    )
    return {
        "success": True,
        "data": [Period.model_validate(r).model_dump() for r in records],
        "message": "Periodos consultados"
    }


# ✅ [CREATE] topic of a period
@router.post("/periods/{period_id}/topics", status_code=201)
def create_topic(period_id: int, topic: TopicCreate, db: Session = Depends(get_db)):
    if db.query(PeriodModel).filter(PeriodModel.id == period_id).first() is None:
        raise HTTPException(status_code=404, detail="Periodo no encontrado")
    db_topic = TopicModel(period_id=period_id, **topic.model_dump())
    db.add(db_topic)
    db.commit()
    db.refresh(db_topic)
    return {
        "success": True,
        "data": Topic.model_validate(db_topic).model_dump(),
        "message": "Tema creado correctamente"
    }


# ✅ [CREATE] subtopic of a topic
@router.post("/topics/{topic_id}/subtopics", status_code=201)
def create_subtopic(topic_id: int, subtopic: SubtopicCreate, db: Session = Depends(get_db)):
    if db.query(TopicModel).filter(TopicModel.id == topic_id).first() is None:
        raise HTTPException(status_code=404, detail="Tema no encontrado")
    db_subtopic = SubtopicModel(topic_id=topic_id, **subtopic.model_dump())
    db.add(db_subtopic)
    db.commit()
    db.refresh(db_subtopic)
    return {
        "success": True,
        "data": Subtopic.model_validate(db_subtopic).model_dump(),
        "message": "Subtema creado correctamente"
    }
