from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_internal_token
from models.courses import Course as CourseModel
from services.grade_service import course_performance

router = APIRouter(
    prefix="/admin",
    tags=["administración"],
    dependencies=[Depends(require_internal_token)],
)


# ✅ [DASHBOARD] performance by course and subject
@router.get("/courses-performance")
def get_courses_performance(db: Session = Depends(get_db)):
    courses = db.query(CourseModel).order_by(CourseModel.name).all()
    return {
        "success": True,
        "data": [course_performance(db, c) for c in courses],
        "message": "Rendimiento por curso consultado"
    }
