from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from models.courses import Course as CourseModel, Enrollment as EnrollmentModel
from models.guardians import Guardian as GuardianModel
from models.students import Student as StudentModel
from schemas.common import Pagination, make_meta
from schemas.courses import Course, EnrollmentCreate
from schemas.students import Student, StudentCreate

router = APIRouter(prefix="/students", tags=["estudiantes"])


# ==========================================================
# [1] CRUD
# ==========================================================

# ✅ [CREATE] student
@router.post("/", status_code=201)
def create_student(student: StudentCreate, db: Session = Depends(get_db)):
    if student.guardian_id is not None:
        guardian = db.query(GuardianModel).filter(GuardianModel.id == student.guardian_id).first()
        if guardian is None:
            raise HTTPException(status_code=404, detail="Acudiente no encontrado")

    db_student = StudentModel(**student.model_dump())
    db.add(db_student)
    db.commit()
    db.refresh(db_student)
    return {
        "success": True,
        "data": Student.model_validate(db_student).model_dump(),
        "message": "Estudiante creado correctamente"
    }


# ✅ [READ] students, paginated
@router.get("/")
def read_students(p: Pagination = Depends(), db: Session = Depends(get_db)):
    query = db.query(StudentModel).order_by(StudentModel.last_name, StudentModel.first_name)
    total = query.count()
    records = query.offset((p.page - 1) * p.size).limit(p.size).all()
    return {
        "success": True,
        "data": [Student.model_validate(r).model_dump() for r in records],
        "meta": make_meta(total, p.page, p.size).model_dump(),
        "message": "Estudiantes consultados"
    }


# ✅ [READ] one student
@router.get("/{student_id}")
def read_student(student_id: int, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")
    return {
        "success": True,
        "data": Student.model_validate(student).model_dump(),
        "message": "Estudiante consultado"
    }


# ==========================================================
# [2] Course enrollment
# ==========================================================

# ✅ [CREATE] enroll a student in a course
@router.post("/{student_id}/courses", status_code=201)
def enroll_student(student_id: int, enrollment: EnrollmentCreate, db: Session = Depends(get_db)):
    student = db.query(StudentModel).filter(StudentModel.id == student_id).first()
    if student is None:
        raise HTTPException(status_code=404, detail="Estudiante no encontrado")
    course = db.query(CourseModel).filter(CourseModel.id == enrollment.course_id).first()
    if course is None:
        raise HTTPException(status_code=404, detail="Curso no encontrado")

    exists = (
        db.query(EnrollmentModel)
        .filter(EnrollmentModel.student_id == student_id, EnrollmentModel.course_id == course.id)
        .first()
    )
    if exists:
        raise HTTPException(status_code=409, detail="El estudiante ya está asignado a este curso")

    db.add(EnrollmentModel(student_id=student_id, course_id=course.id))
    db.commit()
    return {
        "success": True,
        "data": {"student_id": student_id, "course": Course.model_validate(course).model_dump()},
        "message": "Estudiante asignado al curso"
    }
