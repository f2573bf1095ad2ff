from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from models.courses import Course as CourseModel, Enrollment as EnrollmentModel
from models.students import Student as StudentModel
from schemas.courses import Course
from schemas.students import Student
from services.grade_service import performance_alerts, student_tracking

router = APIRouter(prefix="/teachers", tags=["profesores"])


# ==========================================================
# [1] Per-student detail
# ==========================================================

# ✅ [READ] student tracking: per-subject grades + overall statistics
@router.get("/students/{student_id}/tracking")
def get_student_tracking(student_id: int, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")

    courses = (
        db.query(CourseModel)
        .join(EnrollmentModel, EnrollmentModel.course_id == CourseModel.id)
        .filter(EnrollmentModel.student_id == student_id)
        .order_by(CourseModel.name)
        .all()
    )
    tracking = student_tracking(db, student_id)
    return {
        "success": True,
        "data": {
            "student": Student.model_validate(student).model_dump(),
            "courses": [Course.model_validate(c).model_dump() for c in courses],
            "subjects": tracking["subjects"],
            "statistics": tracking["statistics"],
        },
        "message": "Seguimiento del estudiante consultado"
    }


# ==========================================================
# [2] Alerts
# ==========================================================

# ✅ [READ] failing students and students without attempts
@router.get("/performance-alerts")
def get_performance_alerts(course_id: Optional[int] = None, db: Session = Depends(get_db)):
    if course_id is not None and db.query(CourseModel).filter(CourseModel.id == course_id).first() is None:
        raise HTTPException(status_code=404, detail="Curso no encontrado")

    alerts = performance_alerts(db, course_id)
    return {
        "success": True,
        "data": alerts,
        "message": f"{len(alerts['failing_students'])} alertas de rendimiento"
    }
