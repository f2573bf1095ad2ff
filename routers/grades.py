from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from models.students import Student as StudentModel
from services.grade_service import collect_student_grades, collect_student_grades_by_period

router = APIRouter(prefix="/students", tags=["calificaciones"])


def _get_student(db: Session, student_id: int) -> StudentModel:
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")
    return student


# ✅ [READ] student grades per subject (70% quizzes / 30% evaluations)
@router.get("/{student_id}/grades")
def get_student_grades(student_id: int, db: Session = Depends(get_db)):
    _get_student(db, student_id)
    subjects = collect_student_grades(db, student_id)
    return {
        "success": True,
        "data": subjects,
        "message": "Calificaciones consultadas" if subjects else "Aún no tienes calificaciones registradas"
    }


# ✅ [READ] student grades per period, then subject
@router.get("/{student_id}/grades/by-period")
def get_student_grades_by_period(student_id: int, db: Session = Depends(get_db)):
    _get_student(db, student_id)
    periods = collect_student_grades_by_period(db, student_id)
    return {
        "success": True,
        "data": periods,
        "message": "Calificaciones por periodo consultadas"
    }
