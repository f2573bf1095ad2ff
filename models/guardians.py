from sqlalchemy import Column, Integer, String
from database.db import Base

class Guardian(Base):
    __tablename__ = "guardians"  # parents / guardians (acudientes)

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(150), nullable=False, unique=True, index=True)  # lookup key
    national_id = Column(String(30), nullable=False)                      # cédula; last 4 digits verify lookups
