from sqlalchemy import Column, Integer, String, Date, ForeignKey
from database.db import Base

class Period(Base):
    __tablename__ = "periods"  # numbered grading intervals of a subject (periodos)

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)                 # e.g. Primer periodo
    period_number = Column(Integer)                            # 1, 2, 3, 4
    start_date = Column(Date)
    end_date = Column(Date)
