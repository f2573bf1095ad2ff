import hmac
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.db import get_db
from models.guardians import Guardian as GuardianModel
from models.students import Student as StudentModel
from schemas.guardians import Guardian, GuardianCreate, GuardianGradesRequest
from schemas.students import Student
from services.grade_service import collect_student_grades_by_period

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/guardians", tags=["acudientes"])


# ✅ [CREATE] guardian
@router.post("/", status_code=201)
def create_guardian(guardian: GuardianCreate, db: Session = Depends(get_db)):
    if db.query(GuardianModel).filter(GuardianModel.email == guardian.email).first():
        raise HTTPException(status_code=409, detail="Ya existe un acudiente con ese correo electrónico")
    db_guardian = GuardianModel(**guardian.model_dump())
    db.add(db_guardian)
    db.commit()
    db.refresh(db_guardian)
    return {
        "success": True,
        "data": Guardian.model_validate(db_guardian).model_dump(),
        "message": "Acudiente creado correctamente"
    }


# ✅ [LOOKUP] children's grades by period and subject
# guardians have no session: email + last 4 digits of the cédula
@router.post("/grades")
def get_children_grades(request: GuardianGradesRequest, db: Session = Depends(get_db)):
    guardian = db.query(GuardianModel).filter(GuardianModel.email == request.email).first()
    if guardian is None:
        raise HTTPException(status_code=404, detail="No se encontró un acudiente con ese correo electrónico")

    last4 = (guardian.national_id or "")[-4:]
    if not hmac.compare_digest(last4.encode(), request.last4_national_id.encode()):
        logger.warning(f"guardian lookup rejected: guardian_id={guardian.id}")
        raise HTTPException(
            status_code=401,
            detail="Los datos no coinciden. Verifica los últimos 4 dígitos de la cédula."
        )

    students = (
        db.query(StudentModel)
        .filter(StudentModel.guardian_id == guardian.id)
        .order_by(StudentModel.last_name, StudentModel.first_name)
        .all()
    )
    if not students:
        raise HTTPException(status_code=404, detail="Este acudiente no tiene estudiantes asociados")

    return {
        "success": True,
        "data": {
            "guardian": Guardian.model_validate(guardian).model_dump(),
            "students": [
                {
                    "student": Student.model_validate(s).model_dump(),
                    "grades": collect_student_grades_by_period(db, s.id),
                }
                for s in students
            ],
        },
        "message": "Calificaciones consultadas"
    }
