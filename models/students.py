from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # student profile table

    id = Column(Integer, primary_key=True, index=True)               # student id (Primary Key)
    first_name = Column(String(100), nullable=False)                # first name
    last_name = Column(String(100), nullable=False)                 # last name
    email = Column(String(150), unique=True)                        # login email
    identity_card = Column(String(30))                              # tarjeta de identidad
    guardian_id = Column(Integer, ForeignKey("guardians.id"), index=True)  # linked guardian
    is_active = Column(Boolean, nullable=False, default=True)
