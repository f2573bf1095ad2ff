from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base

class Subject(Base):
    __tablename__ = "subjects"  # subjects (materias) taught in a course

    id = Column(Integer, primary_key=True, index=True)         # subject id (Primary Key)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)                # subject name (e.g. Matemáticas)
    description = Column(String(255))
