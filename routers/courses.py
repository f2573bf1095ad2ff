from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from models.courses import Course as CourseModel
from schemas.courses import Course, CourseCreate

router = APIRouter(prefix="/courses", tags=["cursos"])


# ✅ [CREATE] course
@router.post("/", status_code=201)
def create_course(course: CourseCreate, db: Session = Depends(get_db)):
    db_course = CourseModel(**course.model_dump())
    db.add(db_course)
    db.commit()
    db.refresh(db_course)
    return {
        "success": True,
        "data": Course.model_validate(db_course).model_dump(),
        "message": "Curso creado correctamente"
    }


# ✅ [READ] all courses
@router.get("/")
def read_courses(db: Session = Depends(get_db)):
    records = db.query(CourseModel).order_by(CourseModel.name).all()
    return {
        "success": True,
        "data": [Course.model_validate(r).model_dump() for r in records],
        "message": "Cursos consultados"
    }


# ✅ [READ] one course
@router.get("/{course_id}")
def read_course(course_id: int, db: Session = Depends(get_db)):
    course = db.query(CourseModel).filter(CourseModel.id == course_id).first()
    if course is None:
        raise HTTPException(status_code=404, detail="Curso no encontrado")
    return {
        "success": True,
        "data": Course.model_validate(course).model_dump(),
        "message": "Curso consultado"
    }
