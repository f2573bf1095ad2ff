from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from database.db import Base

class Course(Base):
    __tablename__ = "courses"  # school courses (cursos)

    id = Column(Integer, primary_key=True, index=True)     # course id (Primary Key)
    name = Column(String(100), nullable=False)             # course name (e.g. Sexto A)
    level = Column(String(50))                             # school level (e.g. 6)


class Enrollment(Base):
    __tablename__ = "enrollments"  # student <-> course link (estudiantes_cursos)
    __table_args__ = (UniqueConstraint("student_id", "course_id", name="uq_enrollment"),)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
